"""Kitchen domain exceptions.

``InvalidTimeFormat`` and ``UnknownCategory`` are item-local: the
projector skips the offending item and keeps going.  The rest propagate
to the caller; the API layer translates them into HTTP responses.
"""

from __future__ import annotations


class InvalidTimeFormat(Exception):
    """A delivery time is not ``HH:mm`` (or is out of range)."""


class UnknownCategory(Exception):
    """A category has no lead time."""


class StoreUnavailable(Exception):
    """The order store could not be read or written."""


class StatusTransitionConflict(Exception):
    """The store rejected a status change (e.g. the item was deleted)."""


class PreparationItemNotFound(Exception):
    """The item id is not part of the current projection."""

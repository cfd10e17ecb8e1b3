"""Menu domain exceptions.

Raised by the Service Layer; the API layer translates them into HTTP
responses.
"""

from __future__ import annotations


class MenuItemNotFound(Exception):
    """The requested menu item does not exist."""


class MenuVariantNotFound(Exception):
    """The requested menu variant does not exist."""

"""Order domain exceptions.

Raised by the Service Layer when business rules are violated.
The API layer (Views) catches these and translates them into
appropriate HTTP responses.
"""

from __future__ import annotations


class OrderNotFound(Exception):
    """The requested order does not exist."""


class OrderItemNotFound(Exception):
    """The requested order item does not exist (possibly deleted with its order)."""


class InvalidItemStatus(Exception):
    """The status is not one of ``pendiente``, ``preparando``, ``listo``."""


class MenuItemUnavailable(Exception):
    """A referenced menu item does not exist or is inactive."""


class InvalidVariant(Exception):
    """A referenced variant or sauce does not exist or belongs to another dish."""

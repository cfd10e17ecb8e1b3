"""Domain events for the Orders bounded context.

Published on the in-process bus once the surrounding transaction
commits; the kitchen order store turns them into refresh notifications.
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from shared.domain.events import DomainEvent


@dataclass(frozen=True)
class OrderCreated(DomainEvent):
    """Raised when an order is created."""


@dataclass(frozen=True)
class OrderUpdated(DomainEvent):
    """Raised when order header fields change."""


@dataclass(frozen=True)
class OrderDeleted(DomainEvent):
    """Raised when an order (and its items) is deleted."""


@dataclass(frozen=True, kw_only=True)
class OrderItemStatusChanged(DomainEvent):
    """Raised when the kitchen moves an item through its preparation cycle."""

    item_id: UUID
    status: str


ORDER_EVENTS = (OrderCreated, OrderUpdated, OrderDeleted, OrderItemStatusChanged)

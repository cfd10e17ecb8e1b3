"""Order repository interface.

Extends ``IRepository[Order]`` with the operations of the Order
aggregate: atomic creation with items, header updates and the per-item
preparation status the kitchen drives.

The Service Layer depends exclusively on this contract (DIP).
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, List, Optional
from uuid import UUID

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.orders.models import Order, OrderItem


class IOrderRepository(IRepository["Order"]):
    """Repository contract for the Order aggregate root.

    The Order aggregate includes its OrderItem children.  Mutations
    must be atomic.
    """

    @abstractmethod
    def create(self, data: Dict[str, Any]) -> Order:
        """Create an order with its items atomically.

        ``data`` holds the order header fields plus ``items`` (list of
        dicts with ``menu_item_id``, ``variant_id``, ``sauce_id``,
        ``quantity``, ``unit_price`` and ``notes``).  ``total`` is the
        sum of item subtotals; ``balance`` defaults to total - deposit.
        """

    @abstractmethod
    def update(self, id: UUID, data: Dict[str, Any]) -> Order:
        """Update order header fields."""

    @abstractmethod
    def get_by_id(self, id: str) -> Optional[Order]:
        """Retrieve an order with prefetched items."""

    @abstractmethod
    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Order]:
        """List orders ordered by delivery time, with optional filters."""

    @abstractmethod
    def get_item(self, id: str) -> Optional[OrderItem]:
        """Retrieve a single order item with its order."""

    @abstractmethod
    def update_item_status(self, id: str, status: str) -> Optional[OrderItem]:
        """Persist a new preparation status.  ``None`` if the item is gone."""

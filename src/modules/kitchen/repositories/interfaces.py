"""Order store interface consumed by the kitchen projector.

The kitchen only reads orders as snapshots and writes one thing back:
an item's preparation status.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable, List

if TYPE_CHECKING:
    from modules.kitchen.dtos import OrderItemSnapshot, OrderSnapshot

ChangeCallback = Callable[[], None]


class IOrderStore(ABC):
    @abstractmethod
    def list_orders(self) -> List[OrderSnapshot]:
        """All orders with nested items, menu names resolved.

        Raises:
            StoreUnavailable: the store could not be read.
        """

    @abstractmethod
    def set_item_status(self, item_id: str, status: str) -> OrderItemSnapshot:
        """Persist an item's preparation status.

        Raises:
            StatusTransitionConflict: the store rejected the change.
            StoreUnavailable: the store could not be written.
        """

    @abstractmethod
    def subscribe(self, callback: ChangeCallback) -> None:
        """Call ``callback`` whenever orders change."""

    @abstractmethod
    def unsubscribe(self, callback: ChangeCallback) -> None:
        """Stop calling ``callback``.  Unknown callbacks are ignored."""

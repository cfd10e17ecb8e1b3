"""Django-backed order store for the kitchen.

Reads orders through ``OrderService`` and maps them to snapshots.
Database failures surface as ``StoreUnavailable``; an item that vanished
before its status could be written surfaces as
``StatusTransitionConflict``.  Order domain events from the in-process
bus are forwarded to subscribers as change notifications.
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, List, Optional

import structlog
from django.db import DatabaseError

from modules.kitchen.dtos import OrderItemSnapshot, OrderSnapshot
from modules.kitchen.exceptions import StatusTransitionConflict, StoreUnavailable
from modules.kitchen.repositories.interfaces import ChangeCallback, IOrderStore
from modules.menu.repositories.django_repository import MenuDjangoRepository
from modules.orders.events import ORDER_EVENTS
from modules.orders.exceptions import OrderItemNotFound
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.services import OrderService
from shared.infrastructure.bus import event_bus as default_event_bus

if TYPE_CHECKING:
    from modules.orders.models import Order, OrderItem
    from shared.domain.bus import IEventBus
    from shared.domain.events import DomainEvent

logger = structlog.get_logger(__name__)


def item_to_snapshot(item: OrderItem) -> OrderItemSnapshot:
    return OrderItemSnapshot(
        id=item.id,
        order_id=item.order_id,
        menu_item_name=item.menu_item.name,
        category=item.menu_item.category,
        variant_name=item.variant.name if item.variant else None,
        sauce_name=item.sauce.name if item.sauce else None,
        quantity=item.quantity,
        notes=item.notes,
        status=item.status,
    )


def order_to_snapshot(order: Order) -> OrderSnapshot:
    return OrderSnapshot(
        id=order.id,
        order_number=order.order_number,
        customer_name=order.customer_name,
        delivery_time=order.delivery_time.strftime("%H:%M"),
        items=[item_to_snapshot(item) for item in order.items.all()],
    )


class DjangoOrderStore(IOrderStore):
    """``IOrderStore`` over the orders module.

    Subscribes to the event bus lazily, on the first ``subscribe`` call,
    and detaches once the last subscriber leaves.
    """

    def __init__(
        self,
        order_service: Optional[OrderService] = None,
        event_bus: Optional[IEventBus] = None,
    ) -> None:
        self._service = order_service or OrderService(
            order_repository=OrderDjangoRepository(),
            menu_repository=MenuDjangoRepository(),
        )
        self._bus = event_bus or default_event_bus
        self._callbacks: List[ChangeCallback] = []
        self._lock = threading.Lock()

    def list_orders(self) -> List[OrderSnapshot]:
        try:
            return [order_to_snapshot(order) for order in self._service.list_orders()]
        except DatabaseError as exc:
            logger.error("kitchen.store.read_failed", error=str(exc))
            raise StoreUnavailable("Order store could not be read.") from exc

    def set_item_status(self, item_id: str, status: str) -> OrderItemSnapshot:
        try:
            item = self._service.set_item_status(str(item_id), status)
            return item_to_snapshot(item)
        except OrderItemNotFound as exc:
            raise StatusTransitionConflict(str(exc)) from exc
        except DatabaseError as exc:
            logger.error("kitchen.store.write_failed", item_id=str(item_id), error=str(exc))
            raise StoreUnavailable("Order store could not be written.") from exc

    # ------------------------------------------------------------------
    # Change notifications
    # ------------------------------------------------------------------

    def subscribe(self, callback: ChangeCallback) -> None:
        with self._lock:
            if callback in self._callbacks:
                return
            self._callbacks.append(callback)
            first = len(self._callbacks) == 1
        if first:
            for event_class in ORDER_EVENTS:
                self._bus.subscribe(event_class, self)

    def unsubscribe(self, callback: ChangeCallback) -> None:
        with self._lock:
            if callback not in self._callbacks:
                return
            self._callbacks.remove(callback)
            last = not self._callbacks
        if last:
            for event_class in ORDER_EVENTS:
                self._bus.unsubscribe(event_class, self)

    def handle(self, event: DomainEvent) -> None:
        """Event-bus entry point: notify every subscriber."""
        with self._lock:
            callbacks = list(self._callbacks)
        logger.debug(
            "kitchen.store.changed",
            event_name=event.event_name,
            order_id=str(event.aggregate_id),
            subscribers=len(callbacks),
        )
        for callback in callbacks:
            callback()

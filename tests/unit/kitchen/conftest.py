"""In-memory order store and projector fixtures for the kitchen unit tests."""

from __future__ import annotations

from datetime import date
from typing import Callable, Dict, List, Optional
from uuid import UUID, uuid4

import pytest

from modules.kitchen.dtos import OrderItemSnapshot, OrderSnapshot
from modules.kitchen.exceptions import StatusTransitionConflict, StoreUnavailable
from modules.kitchen.projector import KitchenProjector
from modules.kitchen.repositories.interfaces import IOrderStore


class FakeOrderStore(IOrderStore):
    def __init__(self) -> None:
        self.orders: List[OrderSnapshot] = []
        self.fail_reads = False
        self.fail_writes = False
        self.reject_writes = False
        self.writes: List[tuple[str, str]] = []
        self.callbacks: List[Callable[[], None]] = []

    def add_order(
        self,
        delivery_time: str,
        items: List[Dict],
        order_number: Optional[str] = None,
        customer_name: str = "María López",
    ) -> OrderSnapshot:
        order_id = uuid4()
        order = OrderSnapshot(
            id=order_id,
            order_number=order_number or f"PED-1224-{len(self.orders):04d}",
            customer_name=customer_name,
            delivery_time=delivery_time,
            items=[
                OrderItemSnapshot(
                    id=item.get("id", uuid4()),
                    order_id=order_id,
                    menu_item_name=item.get("name", "Romeritos"),
                    category=item.get("category", "entradas"),
                    quantity=item.get("quantity", 1),
                    status=item.get("status", "pendiente"),
                )
                for item in items
            ],
        )
        self.orders.append(order)
        return order

    def list_orders(self) -> List[OrderSnapshot]:
        if self.fail_reads:
            raise StoreUnavailable("store down")
        return list(self.orders)

    def set_item_status(self, item_id: str, status: str) -> OrderItemSnapshot:
        if self.fail_writes:
            raise StoreUnavailable("store down")
        if self.reject_writes:
            raise StatusTransitionConflict(f"item {item_id} gone")
        self.writes.append((item_id, status))
        for index, order in enumerate(self.orders):
            for item in order.items:
                if str(item.id) == item_id:
                    updated = item.model_copy(update={"status": status})
                    items = [updated if i.id == item.id else i for i in order.items]
                    self.orders[index] = order.model_copy(update={"items": items})
                    return updated
        raise StatusTransitionConflict(f"item {item_id} gone")

    def remove_item(self, item_id: UUID) -> None:
        self.orders = [
            order.model_copy(update={"items": [i for i in order.items if i.id != item_id]})
            for order in self.orders
        ]

    def subscribe(self, callback: Callable[[], None]) -> None:
        if callback not in self.callbacks:
            self.callbacks.append(callback)

    def unsubscribe(self, callback: Callable[[], None]) -> None:
        if callback in self.callbacks:
            self.callbacks.remove(callback)

    def notify(self) -> None:
        for callback in list(self.callbacks):
            callback()


@pytest.fixture()
def store():
    return FakeOrderStore()


@pytest.fixture()
def projector(store):
    return KitchenProjector(store=store, reference_date=date(2025, 12, 24))

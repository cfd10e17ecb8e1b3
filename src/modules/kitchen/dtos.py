"""Kitchen DTOs.

Snapshots are what the order store hands to the kitchen; a
``PreparationItem`` is the flattened, timed view of one order item.
All are immutable Pydantic v2 models; status changes produce copies via
``model_copy``.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class OrderItemSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: UUID
    order_id: UUID
    menu_item_name: str
    category: str
    variant_name: Optional[str] = None
    sauce_name: Optional[str] = None
    quantity: int
    notes: str = ""
    status: str


class OrderSnapshot(BaseModel):
    """An order as read from the store, items nested.

    ``delivery_time`` is kept as text (``HH:mm``); parsing it is the
    kitchen's job so a bad value only drops that order's items.
    """

    model_config = ConfigDict(frozen=True)

    id: UUID
    order_number: str
    customer_name: str
    delivery_time: str
    items: List[OrderItemSnapshot]


class PreparationItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    item_id: UUID
    order_id: UUID
    order_number: str
    customer_name: str
    delivery_time: str
    menu_item_name: str
    category: str
    variant_name: Optional[str] = None
    sauce_name: Optional[str] = None
    quantity: int
    notes: str = ""
    status: str
    prep_start: datetime

    @classmethod
    def from_snapshots(
        cls, order: OrderSnapshot, item: OrderItemSnapshot, prep_start: datetime
    ) -> PreparationItem:
        return cls(
            item_id=item.id,
            order_id=order.id,
            order_number=order.order_number,
            customer_name=order.customer_name,
            delivery_time=order.delivery_time,
            menu_item_name=item.menu_item_name,
            category=item.category,
            variant_name=item.variant_name,
            sauce_name=item.sauce_name,
            quantity=item.quantity,
            notes=item.notes,
            status=item.status,
            prep_start=prep_start,
        )


class SkippedItem(BaseModel):
    """An order item left out of the projection, and why."""

    model_config = ConfigDict(frozen=True)

    item_id: UUID
    order_number: str
    reason: str

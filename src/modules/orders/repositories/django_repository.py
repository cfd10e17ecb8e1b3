"""Django ORM implementation of the Order repository.

Satisfies ``IOrderRepository`` using Django's QuerySet API.
All write operations are wrapped in ``transaction.atomic()`` so the
Order aggregate (Order + OrderItems) is persisted atomically.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, List, Optional
from uuid import UUID

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction

from modules.orders.models import Order, OrderItem
from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)

_ITEM_RELATIONS = ("items__menu_item", "items__variant", "items__sauce")


class OrderDjangoRepository(IOrderRepository):
    """Concrete Order repository backed by Django ORM."""

    # ------------------------------------------------------------------
    # Create (aggregate root + children)
    # ------------------------------------------------------------------

    @transaction.atomic
    def create(self, data: Dict[str, Any]) -> Order:
        items = data.get("items", [])
        deposit = data.get("deposit") or Decimal("0.00")
        order = Order(
            customer_name=data["customer_name"],
            origin=data["origin"],
            phone=data.get("phone", ""),
            delivery_time=data["delivery_time"],
            deposit=deposit,
            payment_method=data["payment_method"],
            notes=data.get("notes", ""),
        )
        order.save()

        total = Decimal("0.00")
        for item_data in items:
            item = OrderItem(
                order=order,
                menu_item_id=item_data["menu_item_id"],
                variant_id=item_data.get("variant_id"),
                sauce_id=item_data.get("sauce_id"),
                quantity=item_data["quantity"],
                unit_price=item_data["unit_price"],
                notes=item_data.get("notes", ""),
            )
            item.save()
            total += item.subtotal

        order.total = total
        balance = data.get("balance")
        order.balance = balance if balance is not None else total - deposit
        order.save(update_fields=["total", "balance", "updated_at"])

        logger.info(
            "order.persisted",
            order_id=str(order.id),
            order_number=order.order_number,
            item_count=len(items),
        )
        return order

    # ------------------------------------------------------------------
    # Update
    # ------------------------------------------------------------------

    @transaction.atomic
    def update(self, id: UUID, data: Dict[str, Any]) -> Order:
        """Update order fields using ``select_for_update`` for safety."""
        order = Order.objects.select_for_update().filter(id=id).first()
        if not order:
            raise Order.DoesNotExist(f"Order {id} not found.")

        for field, value in data.items():
            if value is not None:
                setattr(order, field, value)

        order.save()
        logger.info("order.updated", order_id=str(id))
        return order

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get_by_id(self, id: str) -> Optional[Order]:
        """Retrieve an order with eager-loaded items.

        Returns ``None`` for non-existent or invalid IDs.
        """
        try:
            return Order.objects.prefetch_related(*_ITEM_RELATIONS).filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Order]:
        """List orders with optional filters and eager-loaded items.

        Examples of valid filters::

            {"status": "pendiente"}
            {"customer_name__icontains": "ana"}
        """
        queryset = Order.objects.prefetch_related(*_ITEM_RELATIONS)
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset.order_by("delivery_time", "created_at"))

    # ------------------------------------------------------------------
    # Save / Delete (IRepository contract)
    # ------------------------------------------------------------------

    @transaction.atomic
    def save(self, entity: Order) -> Order:
        entity.save()
        logger.info("order.saved", order_id=str(entity.id))
        return entity

    @transaction.atomic
    def delete(self, id: str) -> bool:
        """Delete an order; its items go with it (CASCADE)."""
        order = self.get_by_id(id)
        if not order:
            return False
        order.delete()
        logger.info("order.deleted", order_id=str(id))
        return True

    # ------------------------------------------------------------------
    # Items
    # ------------------------------------------------------------------

    def get_item(self, id: str) -> Optional[OrderItem]:
        try:
            return (
                OrderItem.objects.select_related("order", "menu_item")
                .filter(id=id)
                .first()
            )
        except (ValueError, ValidationError):
            return None

    @transaction.atomic
    def update_item_status(self, id: str, status: str) -> Optional[OrderItem]:
        try:
            item = OrderItem.objects.select_for_update().filter(id=id).first()
        except (ValueError, ValidationError):
            return None
        if not item:
            return None

        old_status = item.status
        item.status = status
        item.save(update_fields=["status", "updated_at"])
        logger.info(
            "order_item.status_updated",
            order_id=str(item.order_id),
            item_id=str(id),
            old_status=old_status,
            new_status=status,
        )
        return item

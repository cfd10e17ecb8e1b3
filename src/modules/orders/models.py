"""Order and OrderItem models.

Business rules implemented:
- ``order_number`` is a human-readable identifier generated on first save.
- ``delivery_time`` is a time of day only; the event date is configured
  once for the whole deployment (``KITCHEN_REFERENCE_DATE``).
- OrderItem snapshots the unit price at creation time.
- OrderItem ``subtotal`` is always ``quantity * unit_price`` (set on save).
- Deleting an order deletes its items (CASCADE).
- Every item carries its own kitchen preparation ``status``.
"""

from __future__ import annotations

import secrets
from decimal import Decimal
from typing import Any

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone

from modules.core.models import BaseModel
from modules.orders.constants import (
    ORDER_NUMBER_MAX_RETRIES,
    ItemStatus,
    OrderOrigin,
    OrderStatus,
    PaymentMethod,
)



class Order(BaseModel):
    """Order aggregate root (``pedido``).

    ``order_number`` (format ``PED-MMDD-XXXX``) is what staff read out
    loud; the UUIDv7 ``id`` is used for every internal reference.
    """

    order_number = models.CharField(max_length=20, unique=True, editable=False)
    customer_name = models.CharField(max_length=255)
    origin = models.CharField(
        max_length=20,
        choices=OrderOrigin.choices,
        default=OrderOrigin.WHATSAPP,
    )
    phone = models.CharField(max_length=30, blank=True, default="")
    delivery_time = models.TimeField()
    deposit = models.DecimalField(
        max_digits=10, decimal_places=2, default=Decimal("0.00")
    )
    balance = models.DecimalField(
        max_digits=10, decimal_places=2, default=Decimal("0.00")
    )
    total = models.DecimalField(
        max_digits=10, decimal_places=2, default=Decimal("0.00")
    )
    payment_method = models.CharField(
        max_length=20,
        choices=PaymentMethod.choices,
        default=PaymentMethod.EFECTIVO,
    )
    status = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
        default=OrderStatus.PENDIENTE,
    )
    notes = models.TextField(blank=True, default="")

    class Meta:
        db_table = "orders"
        ordering = ["delivery_time", "created_at"]
        indexes = [
            models.Index(fields=["status"], name="orders_status_idx"),
            models.Index(fields=["delivery_time"], name="orders_delivery_idx"),
        ]

    @staticmethod
    def generate_order_number() -> str:
        """Generate a human-readable order number: ``PED-MMDD-XXXX``."""
        now = timezone.localtime()
        suffix = secrets.token_hex(2).upper()
        return f"PED-{now:%m%d}-{suffix}"

    def save(self, *args: Any, **kwargs: Any) -> None:
        if not self.order_number:
            for _ in range(ORDER_NUMBER_MAX_RETRIES):
                candidate = self.generate_order_number()
                if not Order.objects.filter(order_number=candidate).exists():
                    self.order_number = candidate
                    break
            else:
                raise RuntimeError(
                    f"Failed to generate unique order_number after "
                    f"{ORDER_NUMBER_MAX_RETRIES} attempts"
                )
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return f"{self.order_number} - {self.customer_name} ({self.delivery_time:%H:%M})"


class OrderItem(BaseModel):
    """One dish line of an order.

    ``variant`` and ``sauce`` both point at ``MenuVariant``: the sauce is a
    variant of the dedicated sauces menu item.
    """

    order = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="items",
    )
    menu_item = models.ForeignKey(
        "menu.MenuItem",
        on_delete=models.PROTECT,
        related_name="order_items",
    )
    variant = models.ForeignKey(
        "menu.MenuVariant",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
    )
    sauce = models.ForeignKey(
        "menu.MenuVariant",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
    )
    quantity = models.PositiveIntegerField(
        default=1,
        validators=[MinValueValidator(1)],
    )
    unit_price = models.DecimalField(max_digits=10, decimal_places=2)
    subtotal = models.DecimalField(max_digits=10, decimal_places=2, editable=False)
    notes = models.TextField(blank=True, default="")
    status = models.CharField(
        max_length=20,
        choices=ItemStatus.choices,
        default=ItemStatus.PENDIENTE,
    )

    class Meta:
        db_table = "order_items"
        ordering = ["created_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gte=1),
                name="order_items_quantity_positive",
            ),
            models.CheckConstraint(
                condition=models.Q(status__in=ItemStatus.values),
                name="order_items_status_valid",
            ),
        ]

    def clean(self) -> None:
        super().clean()
        if self.quantity is not None and self.quantity < 1:
            raise ValidationError({"quantity": "Quantity must be at least 1."})

    def save(self, *args: Any, **kwargs: Any) -> None:
        self.subtotal = self.quantity * self.unit_price
        update_fields = kwargs.get("update_fields")
        if update_fields is not None and "subtotal" not in update_fields:
            kwargs["update_fields"] = list(update_fields) + ["subtotal"]
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return f"{self.quantity}x {self.menu_item} [{self.status}]"

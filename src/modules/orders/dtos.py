"""Order DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (DRF Serializers)
and the Service layer.  DTOs are immutable (``frozen=True``).

- ``CreateOrderItemDTO``: input for a single dish line.
- ``CreateOrderDTO``: input for order creation (nested items).
- ``UpdateOrderDTO``: partial update of the order header.
"""

from __future__ import annotations

from datetime import time
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator

from modules.orders.constants import OrderOrigin, OrderStatus, PaymentMethod


def _check_amount(v: Optional[Decimal]) -> Optional[Decimal]:
    if v is not None and v < 0:
        raise ValueError("Amount cannot be negative.")
    return v


def _check_choice(v: Optional[str], allowed: List[str], label: str) -> Optional[str]:
    if v is not None and v not in allowed:
        raise ValueError(f"Unknown {label} '{v}'. Expected one of: {', '.join(allowed)}.")
    return v


class CreateOrderItemDTO(BaseModel):
    """Immutable DTO for a single dish line in a creation request.

    ``unit_price`` is optional: when omitted the Service Layer resolves it
    from the menu (variant price, else item base price).
    """

    model_config = ConfigDict(frozen=True)

    menu_item_id: UUID
    variant_id: Optional[UUID] = None
    sauce_id: Optional[UUID] = None
    quantity: int = 1
    unit_price: Optional[Decimal] = None
    notes: str = ""

    @field_validator("quantity")
    @classmethod
    def quantity_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Quantity must be at least 1.")
        return v

    @field_validator("unit_price")
    @classmethod
    def unit_price_must_not_be_negative(cls, v: Optional[Decimal]) -> Optional[Decimal]:
        return _check_amount(v)


class CreateOrderDTO(BaseModel):
    """Immutable DTO for order creation requests.

    Validates:
    - ``customer_name`` is not blank.
    - ``items`` contains at least one dish.
    - amounts are not negative and choices are known.
    """

    model_config = ConfigDict(frozen=True)

    customer_name: str
    delivery_time: time
    items: List[CreateOrderItemDTO]
    origin: str = OrderOrigin.WHATSAPP
    phone: str = ""
    deposit: Decimal = Decimal("0.00")
    balance: Optional[Decimal] = None
    payment_method: str = PaymentMethod.EFECTIVO
    notes: str = ""

    @field_validator("customer_name")
    @classmethod
    def customer_name_must_not_be_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Customer name must not be empty.")
        return v.strip()

    @field_validator("items")
    @classmethod
    def items_must_not_be_empty(
        cls, v: List[CreateOrderItemDTO]
    ) -> List[CreateOrderItemDTO]:
        if not v:
            raise ValueError("Order must have at least one item.")
        return v

    @field_validator("deposit", "balance")
    @classmethod
    def amounts_must_not_be_negative(cls, v: Optional[Decimal]) -> Optional[Decimal]:
        return _check_amount(v)

    @field_validator("origin")
    @classmethod
    def origin_must_be_known(cls, v: str) -> str:
        return _check_choice(v, OrderOrigin.values, "origin")

    @field_validator("payment_method")
    @classmethod
    def payment_method_must_be_known(cls, v: str) -> str:
        return _check_choice(v, PaymentMethod.values, "payment method")


class UpdateOrderDTO(BaseModel):
    """Immutable DTO for partial order updates.

    Only fields that are not ``None`` are applied.  Items are not
    editable here; the kitchen moves them with ``set_item_status``.
    """

    model_config = ConfigDict(frozen=True)

    customer_name: Optional[str] = None
    origin: Optional[str] = None
    phone: Optional[str] = None
    delivery_time: Optional[time] = None
    deposit: Optional[Decimal] = None
    balance: Optional[Decimal] = None
    payment_method: Optional[str] = None
    status: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("deposit", "balance")
    @classmethod
    def amounts_must_not_be_negative(cls, v: Optional[Decimal]) -> Optional[Decimal]:
        return _check_amount(v)

    @field_validator("origin")
    @classmethod
    def origin_must_be_known(cls, v: Optional[str]) -> Optional[str]:
        return _check_choice(v, OrderOrigin.values, "origin")

    @field_validator("payment_method")
    @classmethod
    def payment_method_must_be_known(cls, v: Optional[str]) -> Optional[str]:
        return _check_choice(v, PaymentMethod.values, "payment method")

    @field_validator("status")
    @classmethod
    def status_must_be_known(cls, v: Optional[str]) -> Optional[str]:
        return _check_choice(v, OrderStatus.values, "status")

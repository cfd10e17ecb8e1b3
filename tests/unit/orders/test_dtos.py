from __future__ import annotations

from datetime import time
from decimal import Decimal
from uuid import uuid4

import pytest
from pydantic import ValidationError

from modules.orders.dtos import CreateOrderDTO, CreateOrderItemDTO, UpdateOrderDTO

pytestmark = pytest.mark.unit


def _item(**kwargs):
    return CreateOrderItemDTO(menu_item_id=uuid4(), **kwargs)


class TestCreateOrderItemDTO:
    def test_defaults(self):
        dto = _item()
        assert dto.quantity == 1
        assert dto.unit_price is None
        assert dto.notes == ""

    @pytest.mark.parametrize("quantity", [0, -2])
    def test_quantity_must_be_positive(self, quantity):
        with pytest.raises(ValidationError, match="at least 1"):
            _item(quantity=quantity)

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError):
            _item(unit_price=Decimal("-1"))


class TestCreateOrderDTO:
    def test_valid_order(self):
        dto = CreateOrderDTO(
            customer_name="  Ana  ",
            delivery_time="18:30",
            items=[_item()],
        )
        assert dto.customer_name == "Ana"
        assert dto.delivery_time == time(18, 30)
        assert dto.origin == "WhatsApp"
        assert dto.payment_method == "efectivo"
        assert dto.balance is None

    def test_items_required(self):
        with pytest.raises(ValidationError, match="at least one item"):
            CreateOrderDTO(customer_name="Ana", delivery_time="18:30", items=[])

    def test_blank_customer_rejected(self):
        with pytest.raises(ValidationError):
            CreateOrderDTO(customer_name=" ", delivery_time="18:30", items=[_item()])

    @pytest.mark.parametrize(
        "field, value",
        [("origin", "TikTok"), ("payment_method", "tarjeta"), ("deposit", Decimal("-5"))],
    )
    def test_invalid_fields(self, field, value):
        with pytest.raises(ValidationError):
            CreateOrderDTO(
                customer_name="Ana", delivery_time="18:30", items=[_item()], **{field: value}
            )


class TestUpdateOrderDTO:
    def test_partial(self):
        dto = UpdateOrderDTO(notes="Sin cebolla")
        assert dto.model_dump(exclude_none=True) == {"notes": "Sin cebolla"}

    def test_unknown_status_rejected(self):
        with pytest.raises(ValidationError):
            UpdateOrderDTO(status="cancelado")

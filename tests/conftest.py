from datetime import time
from decimal import Decimal

import pytest
from rest_framework.test import APIClient

from modules.menu.constants import SAUCES_ITEM_NAME, MenuCategory
from modules.menu.models import MenuItem, MenuVariant
from modules.orders.models import Order, OrderItem


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


# ---------------------------------------------------------------------------
# Menu
# ---------------------------------------------------------------------------


@pytest.fixture()
def romeritos():
    return MenuItem.objects.create(
        name="Romeritos",
        category=MenuCategory.ENTRADAS,
        unit="litro",
        base_price=Decimal("180.00"),
    )


@pytest.fixture()
def pierna():
    item = MenuItem.objects.create(
        name="Pierna adobada",
        category=MenuCategory.PLATOS_FUERTES,
        unit="kg",
        base_price=Decimal("420.00"),
        variant_type="tamaño",
    )
    MenuVariant.objects.create(menu_item=item, name="Medio kilo", price=Decimal("220.00"))
    MenuVariant.objects.create(menu_item=item, name="Kilo", price=None)
    return item


@pytest.fixture()
def ponche():
    return MenuItem.objects.create(
        name="Ponche de frutas",
        category=MenuCategory.POSTRES_BEBIDAS,
        unit="litro",
        base_price=Decimal("80.00"),
    )


@pytest.fixture()
def sauces():
    item = MenuItem.objects.create(
        name=SAUCES_ITEM_NAME,
        category=MenuCategory.COMPLEMENTOS,
        variant_type="salsa",
    )
    MenuVariant.objects.create(menu_item=item, name="Ciruela", price=Decimal("90.00"))
    MenuVariant.objects.create(menu_item=item, name="Chipotle", price=Decimal("80.00"))
    return item


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------


@pytest.fixture()
def make_order():
    """Create an order with ``(menu_item, quantity)`` lines directly via the ORM."""

    def _make(customer_name="María López", delivery_time=time(18, 0), lines=(), **kwargs):
        order = Order.objects.create(
            customer_name=customer_name,
            delivery_time=delivery_time,
            **kwargs,
        )
        total = Decimal("0.00")
        for menu_item, quantity in lines:
            item = OrderItem.objects.create(
                order=order,
                menu_item=menu_item,
                quantity=quantity,
                unit_price=menu_item.base_price or Decimal("0.00"),
            )
            total += item.subtotal
        order.total = total
        order.save(update_fields=["total"])
        return order

    return _make

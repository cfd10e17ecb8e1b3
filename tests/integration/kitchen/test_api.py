"""Integration tests for the kitchen board API."""

from __future__ import annotations

from datetime import time
from unittest.mock import patch
from uuid import uuid4

import pytest
from django.core.cache import cache
from freezegun import freeze_time

from modules.kitchen.exceptions import StoreUnavailable
from modules.kitchen.repositories.django_store import DjangoOrderStore
from modules.orders.exceptions import OrderItemNotFound
from modules.orders.services import OrderService

pytestmark = pytest.mark.integration

URL = "/api/v1/kitchen/items/"

# 15:46 in Mexico City.
NOW = "2025-12-24 21:46:00"


@pytest.fixture(autouse=True)
def _clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture()
def christmas_eve(make_order, pierna, romeritos, ponche):
    return make_order(
        customer_name="Ana Ruiz",
        delivery_time=time(18, 0),
        lines=[(pierna, 1), (romeritos, 2), (ponche, 1)],
    )


def _item(order, menu_item):
    return order.items.get(menu_item=menu_item)


@freeze_time(NOW)
class TestBoard:
    def test_by_category(self, api_client, christmas_eve):
        response = api_client.get(URL)

        assert response.status_code == 200
        assert response.data["view"] == "by_category"
        assert response.data["stale"] is False
        assert response.data["reference_date"] == "2025-12-24"
        categories = response.data["categories"]
        assert [c["category"] for c in categories] == [
            "platos_fuertes",
            "entradas",
            "complementos",
            "postres_bebidas",
        ]
        assert [c["lead_hours"] for c in categories] == [3, 2, 2, 1]
        assert categories[2]["items"] == []

        [pierna_row] = categories[0]["items"]
        assert pierna_row["prep_start_time"] == "15:00"
        assert pierna_row["minutes_until_start"] == -46
        assert pierna_row["urgency"] == "atrasado"
        assert pierna_row["customer_name"] == "Ana Ruiz"

    def test_timeline_orders_by_urgency(self, api_client, christmas_eve):
        response = api_client.get(URL, {"view": "timeline"})

        assert response.status_code == 200
        rows = response.data["items"]
        assert [(r["menu_item_name"], r["urgency"]) for r in rows] == [
            ("Romeritos", "preparar_ahora"),
            ("Pierna adobada", "atrasado"),
            ("Ponche de frutas", "futuro"),
        ]

    def test_completed_items_hidden_by_default(self, api_client, christmas_eve, romeritos):
        item = _item(christmas_eve, romeritos)
        item.status = "listo"
        item.save()

        hidden = api_client.get(URL, {"view": "timeline"})
        shown = api_client.get(URL, {"view": "timeline", "show_completed": "true"})

        assert str(item.id) not in {r["item_id"] for r in hidden.data["items"]}
        assert str(item.id) in {r["item_id"] for r in shown.data["items"]}

    def test_unknown_view(self, api_client):
        response = api_client.get(URL, {"view": "kanban"})
        assert response.status_code == 400

    def test_serves_stale_board_when_store_fails(self, api_client, christmas_eve):
        fresh = api_client.get(URL, {"view": "timeline"})

        with patch.object(
            DjangoOrderStore, "list_orders", side_effect=StoreUnavailable("down")
        ):
            stale = api_client.get(URL, {"view": "timeline"})

        assert stale.status_code == 200
        assert stale.data["stale"] is True
        assert stale.data["items"] == fresh.data["items"]

    def test_store_failure_without_cached_board(self, api_client):
        with patch.object(
            DjangoOrderStore, "list_orders", side_effect=StoreUnavailable("down")
        ):
            response = api_client.get(URL)

        assert response.status_code == 503


class TestAdvance:
    def test_cycles_through_statuses(self, api_client, christmas_eve, romeritos):
        item = _item(christmas_eve, romeritos)
        url = f"{URL}{item.id}/advance/"

        statuses = [api_client.post(url).data["status"] for _ in range(3)]

        assert statuses == ["preparando", "listo", "pendiente"]
        item.refresh_from_db()
        assert item.status == "pendiente"

    def test_response_shape(self, api_client, christmas_eve, romeritos):
        item = _item(christmas_eve, romeritos)

        response = api_client.post(f"{URL}{item.id}/advance/")

        assert response.status_code == 200
        assert response.data == {"id": str(item.id), "status": "preparando"}

    def test_unknown_item(self, api_client, christmas_eve):
        response = api_client.post(f"{URL}{uuid4()}/advance/")
        assert response.status_code == 404

    def test_item_removed_concurrently(self, api_client, christmas_eve, romeritos):
        item = _item(christmas_eve, romeritos)

        with patch.object(
            OrderService, "set_item_status", side_effect=OrderItemNotFound("gone")
        ):
            response = api_client.post(f"{URL}{item.id}/advance/")

        assert response.status_code == 409
        item.refresh_from_db()
        assert item.status == "pendiente"

    def test_store_unavailable(self, api_client, christmas_eve, romeritos):
        item = _item(christmas_eve, romeritos)

        with patch.object(
            DjangoOrderStore, "list_orders", side_effect=StoreUnavailable("down")
        ):
            response = api_client.post(f"{URL}{item.id}/advance/")

        assert response.status_code == 503

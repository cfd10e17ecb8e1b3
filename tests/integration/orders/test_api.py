"""Integration tests for the Order endpoints.

Covers:
- Create 201 with server-side prices and totals; 400 on bad payloads.
- List: pagination, status filter, search, ordering.
- Retrieve / partial update / delete, with 404 for unknown ids.
- WhatsApp confirmation link.
"""

from __future__ import annotations

from datetime import time
from urllib.parse import unquote
from uuid import uuid4

import pytest

from modules.orders.constants import OrderStatus
from modules.orders.models import Order, OrderItem

pytestmark = pytest.mark.integration

URL = "/api/v1/orders/"


class TestCreate:
    def test_create_order(self, api_client, romeritos, pierna, sauces):
        medio = pierna.variants.get(name="Medio kilo")
        chipotle = sauces.variants.get(name="Chipotle")
        payload = {
            "customer_name": "María López",
            "phone": "55 1234 5678",
            "origin": "Facebook",
            "delivery_time": "18:30",
            "deposit": "100.00",
            "payment_method": "transferencia",
            "items": [
                {"menu_item_id": str(romeritos.id), "quantity": 2, "notes": "sin camarón"},
                {
                    "menu_item_id": str(pierna.id),
                    "variant_id": str(medio.id),
                    "sauce_id": str(chipotle.id),
                },
            ],
        }

        response = api_client.post(URL, payload, format="json")

        assert response.status_code == 201, response.data
        data = response.data
        assert data["order_number"].startswith("PED-")
        assert data["delivery_time"] == "18:30"
        assert data["total"] == "580.00"
        assert data["balance"] == "480.00"
        assert data["status"] == OrderStatus.PENDIENTE
        lines = {line["menu_item_name"]: line for line in data["items"]}
        assert lines["Romeritos"]["subtotal"] == "360.00"
        assert lines["Romeritos"]["notes"] == "sin camarón"
        assert lines["Pierna adobada"]["variant_name"] == "Medio kilo"
        assert lines["Pierna adobada"]["sauce_name"] == "Chipotle"
        assert lines["Pierna adobada"]["category"] == "platos_fuertes"
        assert {line["status"] for line in data["items"]} == {"pendiente"}

    @pytest.mark.parametrize(
        "override",
        [
            {"items": []},
            {"delivery_time": "6 pm"},
            {"customer_name": ""},
            {"origin": "TikTok"},
        ],
    )
    def test_invalid_payload(self, api_client, romeritos, override):
        payload = {
            "customer_name": "Ana",
            "delivery_time": "18:00",
            "items": [{"menu_item_id": str(romeritos.id)}],
        }
        payload.update(override)

        response = api_client.post(URL, payload, format="json")

        assert response.status_code == 400
        assert Order.objects.count() == 0

    def test_zero_quantity_rejected(self, api_client, romeritos):
        payload = {
            "customer_name": "Ana",
            "delivery_time": "18:00",
            "items": [{"menu_item_id": str(romeritos.id), "quantity": 0}],
        }
        assert api_client.post(URL, payload, format="json").status_code == 400

    def test_unavailable_dish(self, api_client):
        payload = {
            "customer_name": "Ana",
            "delivery_time": "18:00",
            "items": [{"menu_item_id": str(uuid4())}],
        }

        response = api_client.post(URL, payload, format="json")

        assert response.status_code == 400
        assert "not available" in response.data["detail"]


class TestList:
    def test_list_ordered_by_delivery_time(self, api_client, romeritos, make_order):
        make_order(customer_name="Tarde", delivery_time=time(21, 0), lines=[(romeritos, 1)])
        make_order(customer_name="Temprano", delivery_time=time(12, 0), lines=[(romeritos, 1)])

        response = api_client.get(URL)

        assert response.status_code == 200
        assert response.data["count"] == 2
        names = [row["customer_name"] for row in response.data["results"]]
        assert names == ["Temprano", "Tarde"]
        assert response.data["results"][0]["item_count"] == 1

    def test_most_recent_first(self, api_client, romeritos, make_order):
        make_order(customer_name="Primero", delivery_time=time(12, 0))
        make_order(customer_name="Segundo", delivery_time=time(21, 0))

        response = api_client.get(URL, {"ordering": "-created_at"})

        names = [row["customer_name"] for row in response.data["results"]]
        assert names == ["Segundo", "Primero"]

    def test_search_by_customer_or_number(self, api_client, make_order):
        ana = make_order(customer_name="Ana Torres")
        make_order(customer_name="Beto Ruiz")

        by_name = api_client.get(URL, {"search": "ana"})
        by_number = api_client.get(URL, {"search": ana.order_number.lower()})

        assert [r["customer_name"] for r in by_name.data["results"]] == ["Ana Torres"]
        assert [r["customer_name"] for r in by_number.data["results"]] == ["Ana Torres"]

    def test_filter_by_status(self, api_client, make_order):
        make_order(customer_name="A")
        make_order(customer_name="B", status=OrderStatus.COMPLETADO)

        response = api_client.get(URL, {"status": "completado"})

        assert [r["customer_name"] for r in response.data["results"]] == ["B"]

    def test_pagination(self, api_client, make_order):
        for i in range(3):
            make_order(customer_name=f"Cliente {i}")

        response = api_client.get(URL, {"page_size": 2})

        assert len(response.data["results"]) == 2
        assert response.data["next"] is not None


class TestDetail:
    def test_retrieve(self, api_client, romeritos, make_order):
        order = make_order(lines=[(romeritos, 2)])

        response = api_client.get(f"{URL}{order.id}/")

        assert response.status_code == 200
        assert response.data["order_number"] == order.order_number
        assert len(response.data["items"]) == 1

    @pytest.mark.parametrize("bad_id", [uuid4(), "not-a-uuid"])
    def test_retrieve_not_found(self, api_client, bad_id):
        assert api_client.get(f"{URL}{bad_id}/").status_code == 404

    def test_partial_update(self, api_client, make_order):
        order = make_order()

        response = api_client.patch(
            f"{URL}{order.id}/",
            {"delivery_time": "20:15", "status": "en_preparacion", "notes": "Recoge su hermana"},
            format="json",
        )

        assert response.status_code == 200, response.data
        assert response.data["delivery_time"] == "20:15"
        assert response.data["status"] == "en_preparacion"
        assert response.data["customer_name"] == "María López"

    def test_partial_update_invalid_status(self, api_client, make_order):
        order = make_order()
        response = api_client.patch(f"{URL}{order.id}/", {"status": "cancelado"}, format="json")
        assert response.status_code == 400

    def test_partial_update_not_found(self, api_client):
        response = api_client.patch(f"{URL}{uuid4()}/", {"notes": "x"}, format="json")
        assert response.status_code == 404

    def test_delete(self, api_client, romeritos, make_order):
        order = make_order(lines=[(romeritos, 1)])

        response = api_client.delete(f"{URL}{order.id}/")

        assert response.status_code == 204
        assert not Order.objects.exists()
        assert not OrderItem.objects.exists()
        assert api_client.delete(f"{URL}{order.id}/").status_code == 404


class TestWhatsapp:
    def test_link(self, api_client, romeritos, make_order):
        order = make_order(phone="55 1234 5678", lines=[(romeritos, 1)])

        response = api_client.get(f"{URL}{order.id}/whatsapp/")

        assert response.status_code == 200
        assert response.data["url"].startswith("https://wa.me/525512345678?text=")
        assert "Total: $180.00" in unquote(response.data["url"])
        assert "para las 18:00" in response.data["message"]

    def test_link_without_phone(self, api_client, make_order):
        order = make_order()
        assert api_client.get(f"{URL}{order.id}/whatsapp/").status_code == 400

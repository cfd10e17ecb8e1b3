"""Order DRF serializers for API input/output.

The serializer operates at the Interface layer (API Views).
Business logic lives in the Service Layer, which receives
Pydantic DTOs from ``dtos.py``.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.orders.constants import OrderOrigin, OrderStatus, PaymentMethod
from modules.orders.models import Order, OrderItem

# ---------------------------------------------------------------------------
# Input Serializers
# ---------------------------------------------------------------------------


class CreateOrderItemSerializer(serializers.Serializer):
    """Validates a single dish line in an order creation request."""

    menu_item_id = serializers.UUIDField()
    variant_id = serializers.UUIDField(required=False, allow_null=True, default=None)
    sauce_id = serializers.UUIDField(required=False, allow_null=True, default=None)
    quantity = serializers.IntegerField(min_value=1, default=1)
    unit_price = serializers.DecimalField(
        max_digits=10,
        decimal_places=2,
        min_value=0,
        required=False,
        allow_null=True,
        default=None,
    )
    notes = serializers.CharField(required=False, default="", allow_blank=True)


class CreateOrderSerializer(serializers.Serializer):
    """Validates the order creation request payload."""

    customer_name = serializers.CharField(max_length=255)
    delivery_time = serializers.TimeField(input_formats=["%H:%M", "%H:%M:%S"])
    items = CreateOrderItemSerializer(many=True, allow_empty=False)
    origin = serializers.ChoiceField(
        choices=OrderOrigin.choices, default=OrderOrigin.WHATSAPP
    )
    phone = serializers.CharField(required=False, default="", allow_blank=True)
    deposit = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=0, default=0
    )
    balance = serializers.DecimalField(
        max_digits=10,
        decimal_places=2,
        min_value=0,
        required=False,
        allow_null=True,
        default=None,
    )
    payment_method = serializers.ChoiceField(
        choices=PaymentMethod.choices, default=PaymentMethod.EFECTIVO
    )
    notes = serializers.CharField(required=False, default="", allow_blank=True)


class UpdateOrderSerializer(serializers.Serializer):
    """Validates a partial update of the order header."""

    customer_name = serializers.CharField(max_length=255, required=False)
    delivery_time = serializers.TimeField(
        input_formats=["%H:%M", "%H:%M:%S"], required=False
    )
    origin = serializers.ChoiceField(choices=OrderOrigin.choices, required=False)
    phone = serializers.CharField(required=False, allow_blank=True)
    deposit = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=0, required=False
    )
    balance = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=0, required=False
    )
    payment_method = serializers.ChoiceField(
        choices=PaymentMethod.choices, required=False
    )
    status = serializers.ChoiceField(choices=OrderStatus.choices, required=False)
    notes = serializers.CharField(required=False, allow_blank=True)


# ---------------------------------------------------------------------------
# Output Serializers (Read)
# ---------------------------------------------------------------------------


class OrderItemSerializer(serializers.ModelSerializer):
    """Read serializer for order items with menu names."""

    menu_item_name = serializers.CharField(source="menu_item.name", read_only=True)
    category = serializers.CharField(source="menu_item.category", read_only=True)
    variant_name = serializers.CharField(
        source="variant.name", read_only=True, default=None
    )
    sauce_name = serializers.CharField(source="sauce.name", read_only=True, default=None)

    class Meta:
        model = OrderItem
        fields = [
            "id",
            "menu_item_id",
            "menu_item_name",
            "category",
            "variant_id",
            "variant_name",
            "sauce_id",
            "sauce_name",
            "quantity",
            "unit_price",
            "subtotal",
            "notes",
            "status",
        ]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    """Read serializer for orders with nested items."""

    items = OrderItemSerializer(many=True, read_only=True)
    delivery_time = serializers.TimeField(format="%H:%M", read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "order_number",
            "customer_name",
            "origin",
            "phone",
            "delivery_time",
            "deposit",
            "balance",
            "total",
            "payment_method",
            "status",
            "notes",
            "created_at",
            "updated_at",
            "items",
        ]
        read_only_fields = fields


class OrderListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for the order list (no nested items)."""

    delivery_time = serializers.TimeField(format="%H:%M", read_only=True)
    item_count = serializers.SerializerMethodField()

    class Meta:
        model = Order
        fields = [
            "id",
            "order_number",
            "customer_name",
            "phone",
            "delivery_time",
            "total",
            "balance",
            "status",
            "item_count",
            "created_at",
        ]
        read_only_fields = fields

    def get_item_count(self, obj: Order) -> int:
        return len(obj.items.all())

"""Menu DRF serializers (read side).

Write requests are validated by the Pydantic DTOs in ``dtos.py``.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.menu.models import MenuItem, MenuVariant


class MenuVariantSerializer(serializers.ModelSerializer):
    class Meta:
        model = MenuVariant
        fields = ["id", "menu_item_id", "name", "price", "description"]
        read_only_fields = fields


class MenuItemSerializer(serializers.ModelSerializer):
    """Menu item with nested variants."""

    variants = MenuVariantSerializer(many=True, read_only=True)
    category_label = serializers.CharField(
        source="get_category_display", read_only=True
    )

    class Meta:
        model = MenuItem
        fields = [
            "id",
            "name",
            "category",
            "category_label",
            "unit",
            "base_price",
            "variant_type",
            "is_active",
            "prep_minutes",
            "variants",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

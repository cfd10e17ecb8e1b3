"""Kitchen DRF serializers.

Boards are built as plain dicts by ``KitchenBoardService``; only the
query string is validated here.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.kitchen.constants import ViewMode


class BoardQuerySerializer(serializers.Serializer):
    view = serializers.ChoiceField(choices=ViewMode.choices, default=ViewMode.BY_CATEGORY)
    show_completed = serializers.BooleanField(default=False)


class AdvanceResultSerializer(serializers.Serializer):
    id = serializers.UUIDField(read_only=True)
    status = serializers.CharField(read_only=True)

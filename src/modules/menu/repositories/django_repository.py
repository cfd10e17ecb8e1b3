"""Django ORM implementation of the Menu repository.

Methods return ``None`` / ``False`` for missing rows instead of raising;
``MenuService`` decides how to surface a missing entity.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction

from modules.menu.models import MenuItem, MenuVariant
from modules.menu.repositories.interfaces import IMenuRepository

logger = structlog.get_logger(__name__)


class MenuDjangoRepository(IMenuRepository):
    """Concrete Menu repository backed by Django ORM."""

    def get_by_id(self, id: str) -> Optional[MenuItem]:
        try:
            return MenuItem.objects.prefetch_related("variants").filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[MenuItem]:
        """List menu items (variants prefetched) with optional ORM look-ups.

        Examples of valid filters::

            {"is_active": True}
            {"category": "entradas", "is_active": True}
        """
        queryset = MenuItem.objects.prefetch_related("variants")
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset.order_by("category", "name"))

    def get_by_name(self, name: str) -> Optional[MenuItem]:
        return MenuItem.objects.prefetch_related("variants").filter(name=name).first()

    @transaction.atomic
    def save(self, entity: MenuItem) -> MenuItem:
        entity.full_clean()
        entity.save()
        logger.info("menu_item.saved", menu_item_id=str(entity.id))
        return entity

    @transaction.atomic
    def delete(self, id: str) -> bool:
        item = self.get_by_id(id)
        if not item:
            return False
        item.delete()
        logger.info("menu_item.deleted", menu_item_id=str(id))
        return True

    # ------------------------------------------------------------------
    # Variants
    # ------------------------------------------------------------------

    @transaction.atomic
    def add_variant(self, item: MenuItem, data: Dict[str, Any]) -> MenuVariant:
        variant = MenuVariant.objects.create(menu_item=item, **data)
        logger.info(
            "menu_variant.created",
            menu_item_id=str(item.id),
            variant_id=str(variant.id),
        )
        return variant

    def get_variant(self, id: str) -> Optional[MenuVariant]:
        try:
            return MenuVariant.objects.select_related("menu_item").filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    @transaction.atomic
    def delete_variant(self, id: str) -> bool:
        variant = self.get_variant(id)
        if not variant:
            return False
        variant.delete()
        logger.info("menu_variant.deleted", variant_id=str(id))
        return True

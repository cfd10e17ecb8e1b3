"""Menu service layer (Use Cases).

Thin orchestration over ``IMenuRepository``: listing the catalog for the
order form, maintaining dishes and their variants, and resolving the
price of a dish/variant pair.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional

import structlog
from django.db import transaction

from modules.menu.constants import SAUCES_ITEM_NAME
from modules.menu.exceptions import MenuItemNotFound, MenuVariantNotFound
from modules.menu.models import MenuItem

if TYPE_CHECKING:
    from modules.menu.dtos import (
        CreateMenuItemDTO,
        CreateMenuVariantDTO,
        UpdateMenuItemDTO,
    )
    from modules.menu.models import MenuVariant
    from modules.menu.repositories.interfaces import IMenuRepository

logger = structlog.get_logger(__name__)


def calculate_item_price(item: MenuItem, variant: Optional[MenuVariant] = None) -> Decimal:
    """Return the unit price of ``item`` ordered as ``variant``.

    A variant with its own (non-zero) price wins; otherwise the item base
    price applies, and a dish with neither is priced at zero.
    """
    if variant is not None and variant.price:
        return variant.price
    return item.base_price or Decimal("0.00")


class MenuService:
    """Application service for menu use-cases.

    Receives an ``IMenuRepository`` via constructor injection (DIP).
    """

    def __init__(self, repository: IMenuRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_items(self, only_active: bool = True) -> List[MenuItem]:
        filters = {"is_active": True} if only_active else None
        return self._repo.list(filters)

    def list_by_category(self, category: str) -> List[MenuItem]:
        return self._repo.list({"category": category, "is_active": True})

    def list_sauces(self) -> List[MenuVariant]:
        """Variants of the sauces item, or an empty list when it is missing."""
        sauces = self._repo.get_by_name(SAUCES_ITEM_NAME)
        if not sauces:
            return []
        return list(sauces.variants.all())

    def get_item(self, id: str) -> MenuItem:
        """Retrieve a menu item with its variants.

        Raises:
            MenuItemNotFound: if the item does not exist.
        """
        item = self._repo.get_by_id(id)
        if not item:
            raise MenuItemNotFound(f"Menu item {id} not found.")
        return item

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_item(self, dto: CreateMenuItemDTO) -> MenuItem:
        item = MenuItem(
            name=dto.name,
            category=dto.category,
            unit=dto.unit,
            base_price=dto.base_price,
            variant_type=dto.variant_type,
            is_active=dto.is_active,
            prep_minutes=dto.prep_minutes,
        )
        item = self._repo.save(item)
        logger.info("menu_item.created", menu_item_id=str(item.id))
        return item

    @transaction.atomic
    def update_item(self, id: str, dto: UpdateMenuItemDTO) -> MenuItem:
        """Apply the non-``None`` fields of ``dto``.

        Raises:
            MenuItemNotFound: if the item does not exist.
        """
        item = self.get_item(id)
        for field in (
            "name",
            "category",
            "unit",
            "base_price",
            "variant_type",
            "is_active",
            "prep_minutes",
        ):
            value = getattr(dto, field)
            if value is not None:
                setattr(item, field, value)
        item = self._repo.save(item)
        logger.info("menu_item.updated", menu_item_id=str(id))
        return item

    @transaction.atomic
    def add_variant(self, item_id: str, dto: CreateMenuVariantDTO) -> MenuVariant:
        item = self.get_item(item_id)
        return self._repo.add_variant(
            item,
            {"name": dto.name, "price": dto.price, "description": dto.description},
        )

    @transaction.atomic
    def delete_variant(self, variant_id: str) -> None:
        if not self._repo.delete_variant(variant_id):
            raise MenuVariantNotFound(f"Menu variant {variant_id} not found.")

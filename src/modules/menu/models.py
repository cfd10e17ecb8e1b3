"""Menu catalog models: dishes and their variants.

- ``MenuItem.category`` is restricted to ``MenuCategory`` both by field
  choices and by a database check constraint, so an unknown category can
  never reach the kitchen from this store.
- ``base_price`` is optional: some dishes are priced per variant only.
- A variant price, when present, overrides the item base price.
"""

from __future__ import annotations

from decimal import Decimal

import structlog
from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel
from modules.menu.constants import MenuCategory

logger = structlog.get_logger(__name__)


class MenuItem(BaseModel):
    """A dish offered on the seasonal menu."""

    name = models.CharField(max_length=255)
    category = models.CharField(max_length=20, choices=MenuCategory.choices)
    # 'pz', 'kg', 'litro', 'tamaño'
    unit = models.CharField(max_length=30, blank=True, default="pz")
    base_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    # 'sabor', 'tamaño', 'salsa', 'relleno' or blank for plain dishes
    variant_type = models.CharField(max_length=30, blank=True, default="")
    is_active = models.BooleanField(default=True)
    prep_minutes = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = "menu_items"
        ordering = ["category", "name"]
        indexes = [
            models.Index(fields=["category", "name"], name="menu_items_cat_name_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(category__in=MenuCategory.values),
                name="menu_items_category_valid",
            ),
        ]

    def save(self, *args, **kwargs) -> None:
        is_new = self._state.adding
        super().save(*args, **kwargs)
        if is_new:
            logger.info(
                "menu_item_created",
                menu_item_id=str(self.id),
                category=self.category,
                name=self.name,
            )

    def __str__(self) -> str:
        return f"{self.name} ({self.category})"


class MenuVariant(BaseModel):
    """A flavour, size or sauce option of a menu item."""

    menu_item = models.ForeignKey(
        "menu.MenuItem",
        on_delete=models.CASCADE,
        related_name="variants",
    )
    name = models.CharField(max_length=255)
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    description = models.TextField(blank=True, default="")

    class Meta:
        db_table = "menu_variants"
        ordering = ["name"]

    def __str__(self) -> str:
        return f"{self.menu_item.name} / {self.name}"

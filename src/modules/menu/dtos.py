"""Menu DTOs for the Service Layer.

Pydantic v2 contracts between the API layer and ``MenuService``.
DTOs are immutable (``frozen=True``).

- ``CreateMenuItemDTO``: input for a new dish.
- ``UpdateMenuItemDTO``: partial update (including the active toggle).
- ``CreateMenuVariantDTO``: input for a new variant of a dish.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from modules.menu.constants import MenuCategory


def _check_category(v: Optional[str]) -> Optional[str]:
    if v is not None and v not in MenuCategory.values:
        raise ValueError(
            f"Unknown category '{v}'. Expected one of: {', '.join(MenuCategory.values)}."
        )
    return v


def _check_price(v: Optional[Decimal]) -> Optional[Decimal]:
    if v is not None and v < 0:
        raise ValueError("Price cannot be negative.")
    return v


class CreateMenuItemDTO(BaseModel):
    """Immutable DTO for menu item creation.

    Validates that ``category`` belongs to ``MenuCategory`` and that
    ``base_price`` (when given) is not negative.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    category: str
    unit: str = "pz"
    base_price: Optional[Decimal] = None
    variant_type: str = ""
    is_active: bool = True
    prep_minutes: int = 0

    @field_validator("name")
    @classmethod
    def name_must_not_be_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Name must not be empty.")
        return v.strip()

    @field_validator("category")
    @classmethod
    def category_must_be_known(cls, v: str) -> str:
        return _check_category(v)

    @field_validator("base_price")
    @classmethod
    def price_must_not_be_negative(cls, v: Optional[Decimal]) -> Optional[Decimal]:
        return _check_price(v)

    @field_validator("prep_minutes")
    @classmethod
    def prep_minutes_must_not_be_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("Preparation minutes cannot be negative.")
        return v


class UpdateMenuItemDTO(BaseModel):
    """Immutable DTO for partial menu item updates.

    Only fields that are not ``None`` are applied.
    """

    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    category: Optional[str] = None
    unit: Optional[str] = None
    base_price: Optional[Decimal] = None
    variant_type: Optional[str] = None
    is_active: Optional[bool] = None
    prep_minutes: Optional[int] = None

    @field_validator("category")
    @classmethod
    def category_must_be_known(cls, v: Optional[str]) -> Optional[str]:
        return _check_category(v)

    @field_validator("base_price")
    @classmethod
    def price_must_not_be_negative(cls, v: Optional[Decimal]) -> Optional[Decimal]:
        return _check_price(v)


class CreateMenuVariantDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    price: Optional[Decimal] = None
    description: str = ""

    @field_validator("name")
    @classmethod
    def name_must_not_be_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Name must not be empty.")
        return v.strip()

    @field_validator("price")
    @classmethod
    def price_must_not_be_negative(cls, v: Optional[Decimal]) -> Optional[Decimal]:
        return _check_price(v)

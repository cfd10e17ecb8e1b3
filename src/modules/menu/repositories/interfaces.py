"""Menu repository interface.

Extends ``IRepository[MenuItem]`` with the variant operations and the
name look-up used to find the sauces item.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.menu.models import MenuItem, MenuVariant


class IMenuRepository(IRepository["MenuItem"]):
    """Repository contract for the MenuItem aggregate (item + variants)."""

    @abstractmethod
    def get_by_name(self, name: str) -> Optional[MenuItem]:
        """Retrieve a menu item by exact name, variants prefetched."""

    @abstractmethod
    def add_variant(self, item: MenuItem, data: Dict[str, Any]) -> MenuVariant:
        """Create a variant under ``item``."""

    @abstractmethod
    def get_variant(self, id: str) -> Optional[MenuVariant]:
        """Retrieve a single variant by primary key."""

    @abstractmethod
    def delete_variant(self, id: str) -> bool:
        """Remove a variant.  Returns ``False`` when it does not exist."""

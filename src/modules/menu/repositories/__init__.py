"""Menu repositories package."""

from modules.menu.repositories.django_repository import MenuDjangoRepository
from modules.menu.repositories.interfaces import IMenuRepository

__all__ = ["IMenuRepository", "MenuDjangoRepository"]

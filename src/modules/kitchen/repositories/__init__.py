"""Kitchen order-store package."""

from modules.kitchen.repositories.django_store import DjangoOrderStore
from modules.kitchen.repositories.interfaces import IOrderStore

__all__ = ["DjangoOrderStore", "IOrderStore"]

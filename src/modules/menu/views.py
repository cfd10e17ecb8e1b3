"""Menu API views.

Exposes ``MenuService`` via DRF ViewSets.  Domain exceptions are caught
and translated into HTTP status codes.
"""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.filters import OrderingFilter
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.menu.dtos import (
    CreateMenuItemDTO,
    CreateMenuVariantDTO,
    UpdateMenuItemDTO,
)
from modules.menu.exceptions import MenuItemNotFound, MenuVariantNotFound
from modules.menu.filters import MenuItemFilter
from modules.menu.models import MenuItem
from modules.menu.repositories.django_repository import MenuDjangoRepository
from modules.menu.serializers import MenuItemSerializer, MenuVariantSerializer
from modules.menu.services import MenuService


def _invalid(exc: Exception) -> Response:
    return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)


def _not_found(what: str) -> Response:
    return Response(
        {"detail": f"{what} not found."}, status=status.HTTP_404_NOT_FOUND
    )


class MenuItemViewSet(GenericViewSet):
    """Menu items and their variants.

    Lists every dish (active and inactive) so the menu screen can toggle
    them; ``?active=true`` narrows to what the order form offers.
    """

    filterset_class = MenuItemFilter
    ordering_fields = ["name", "category", "base_price"]
    ordering = ["category", "name"]
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    queryset = MenuItem.objects.all()
    serializer_class = MenuItemSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = MenuService(repository=MenuDjangoRepository())

    def get_queryset(self):
        return MenuItem.objects.prefetch_related("variants")

    def list(self, request: Request) -> Response:
        """GET /api/v1/menu/items/"""
        queryset = self.filter_queryset(self.get_queryset())
        page = self.paginate_queryset(queryset)
        serializer = MenuItemSerializer(page, many=True)
        return self.get_paginated_response(serializer.data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/menu/items/{pk}/"""
        try:
            item = self._service.get_item(str(pk))
        except MenuItemNotFound:
            return _not_found("Menu item")
        return Response(MenuItemSerializer(item).data)

    def create(self, request: Request) -> Response:
        """POST /api/v1/menu/items/"""
        try:
            dto = CreateMenuItemDTO(**request.data)
        except (PydanticValidationError, TypeError) as exc:
            return _invalid(exc)

        item = self._service.create_item(dto)
        return Response(MenuItemSerializer(item).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/menu/items/{pk}/

        Also used by the menu screen to toggle ``is_active``.
        """
        try:
            dto = UpdateMenuItemDTO(**request.data)
        except (PydanticValidationError, TypeError) as exc:
            return _invalid(exc)

        try:
            item = self._service.update_item(str(pk), dto)
        except MenuItemNotFound:
            return _not_found("Menu item")
        return Response(MenuItemSerializer(item).data)

    @action(detail=True, methods=["post"])
    def variants(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/v1/menu/items/{pk}/variants/"""
        try:
            dto = CreateMenuVariantDTO(**request.data)
        except (PydanticValidationError, TypeError) as exc:
            return _invalid(exc)

        try:
            variant = self._service.add_variant(str(pk), dto)
        except MenuItemNotFound:
            return _not_found("Menu item")
        return Response(
            MenuVariantSerializer(variant).data, status=status.HTTP_201_CREATED
        )

    @action(detail=False, methods=["get"])
    def sauces(self, request: Request) -> Response:
        """GET /api/v1/menu/items/sauces/"""
        sauces = self._service.list_sauces()
        return Response(MenuVariantSerializer(sauces, many=True).data)


class MenuVariantViewSet(GenericViewSet):
    queryset = MenuItem.objects.none()

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = MenuService(repository=MenuDjangoRepository())

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/menu/variants/{pk}/"""
        try:
            self._service.delete_variant(str(pk))
        except MenuVariantNotFound:
            return _not_found("Menu variant")
        return Response(status=status.HTTP_204_NO_CONTENT)

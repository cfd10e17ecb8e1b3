"""Order API views.

Exposes the ``OrderService`` via HTTP using DRF ViewSets.
Domain exceptions are caught and translated into appropriate
HTTP status codes; the view never swallows generic exceptions.
"""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.filters import OrderingFilter, SearchFilter
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.pagination import StandardResultsSetPagination
from modules.menu.repositories.django_repository import MenuDjangoRepository
from modules.orders.dtos import CreateOrderDTO, CreateOrderItemDTO, UpdateOrderDTO
from modules.orders.exceptions import (
    InvalidVariant,
    MenuItemUnavailable,
    OrderNotFound,
)
from modules.orders.filters import OrderFilter
from modules.orders.messaging import build_confirmation_message, build_whatsapp_link
from modules.orders.models import Order
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.serializers import (
    CreateOrderSerializer,
    OrderListSerializer,
    OrderSerializer,
    UpdateOrderSerializer,
)
from modules.orders.services import OrderService


def _order_not_found() -> Response:
    return Response(
        {"detail": "Order not found."},
        status=status.HTTP_404_NOT_FOUND,
    )


class OrderViewSet(GenericViewSet):
    """ViewSet for Order operations.

    Uses ``OrderService`` with injected repositories (DIP).  Does **not**
    extend ``ModelViewSet``; writes go through the service/repository
    layer.  ``?search=`` matches customer name or order number,
    ``?ordering=-created_at`` lists the most recent first.
    """

    filterset_class = OrderFilter
    search_fields = ["customer_name", "order_number"]
    ordering_fields = ["created_at", "delivery_time"]
    ordering = ["delivery_time", "created_at"]
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]
    queryset = Order.objects.all()

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = OrderService(
            order_repository=OrderDjangoRepository(),
            menu_repository=MenuDjangoRepository(),
        )

    def get_queryset(self):
        return Order.objects.prefetch_related("items")

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/orders/"""
        create_serializer = CreateOrderSerializer(data=request.data)
        create_serializer.is_valid(raise_exception=True)

        data = create_serializer.validated_data
        try:
            dto = CreateOrderDTO(
                customer_name=data["customer_name"],
                delivery_time=data["delivery_time"],
                origin=data["origin"],
                phone=data["phone"],
                deposit=data["deposit"],
                balance=data["balance"],
                payment_method=data["payment_method"],
                notes=data["notes"],
                items=[CreateOrderItemDTO(**item) for item in data["items"]],
            )
        except PydanticValidationError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            order = self._service.create_order(dto)
        except (MenuItemUnavailable, InvalidVariant) as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/orders/

        Filtering is handled by ``OrderFilter``, search and ordering by
        the DRF backends.  Results are paginated.
        """
        queryset = self.filter_queryset(self.get_queryset())

        paginator = StandardResultsSetPagination()
        page = paginator.paginate_queryset(queryset, request)
        serializer = OrderListSerializer(page, many=True)
        return paginator.get_paginated_response(serializer.data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/orders/{pk}/"""
        try:
            order = self._service.get_order(str(pk))
        except OrderNotFound:
            return _order_not_found()
        return Response(OrderSerializer(order).data)

    # ------------------------------------------------------------------
    # Update / Delete
    # ------------------------------------------------------------------

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/orders/{pk}/"""
        update_serializer = UpdateOrderSerializer(data=request.data, partial=True)
        update_serializer.is_valid(raise_exception=True)

        try:
            dto = UpdateOrderDTO(**update_serializer.validated_data)
        except PydanticValidationError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            order = self._service.update_order(str(pk), dto)
        except OrderNotFound:
            return _order_not_found()
        return Response(OrderSerializer(order).data)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/orders/{pk}/"""
        try:
            self._service.delete_order(str(pk))
        except OrderNotFound:
            return _order_not_found()
        return Response(status=status.HTTP_204_NO_CONTENT)

    # ------------------------------------------------------------------
    # WhatsApp confirmation
    # ------------------------------------------------------------------

    @action(detail=True, methods=["get"])
    def whatsapp(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/orders/{pk}/whatsapp/"""
        try:
            order = self._service.get_order(str(pk))
        except OrderNotFound:
            return _order_not_found()

        try:
            url = build_whatsapp_link(order)
        except ValueError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response({"url": url, "message": build_confirmation_message(order)})

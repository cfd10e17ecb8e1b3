"""Kitchen API views.

Domain exceptions are caught and translated into HTTP status codes;
the view never swallows generic exceptions.
"""

from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from modules.kitchen.exceptions import (
    PreparationItemNotFound,
    StatusTransitionConflict,
    StoreUnavailable,
)
from modules.kitchen.serializers import AdvanceResultSerializer, BoardQuerySerializer
from modules.kitchen.services import KitchenBoardService


def _store_unavailable() -> Response:
    return Response(
        {"detail": "Order store unavailable."},
        status=status.HTTP_503_SERVICE_UNAVAILABLE,
    )


class KitchenViewSet(ViewSet):
    """Kitchen preparation board.

    ``GET items/?view=by_category|timeline&show_completed=true`` returns
    the board; ``POST items/{id}/advance/`` moves one item to its next
    preparation status.
    """

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = KitchenBoardService()

    def list(self, request: Request) -> Response:
        """GET /api/v1/kitchen/items/"""
        query = BoardQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        try:
            board = self._service.board(
                view_mode=query.validated_data["view"],
                show_completed=query.validated_data["show_completed"],
            )
        except StoreUnavailable:
            return _store_unavailable()
        return Response(board)

    @action(detail=True, methods=["post"])
    def advance(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/v1/kitchen/items/{pk}/advance/"""
        try:
            result = self._service.advance(str(pk))
        except PreparationItemNotFound:
            return Response(
                {"detail": "Preparation item not found."},
                status=status.HTTP_404_NOT_FOUND,
            )
        except StatusTransitionConflict as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_409_CONFLICT)
        except StoreUnavailable:
            return _store_unavailable()
        return Response(AdvanceResultSerializer(result).data)

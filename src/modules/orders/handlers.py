"""Event handlers for Orders domain events."""

from __future__ import annotations

import structlog

from modules.orders.events import (
    OrderCreated,
    OrderDeleted,
    OrderItemStatusChanged,
    OrderUpdated,
)
from shared.domain.bus import IEventHandler

logger = structlog.get_logger(__name__)


class OrderCreatedHandler(IEventHandler[OrderCreated]):
    def handle(self, event: OrderCreated) -> None:
        logger.info(
            f"Procesando creación del pedido {event.aggregate_id}",
            order_id=str(event.aggregate_id),
        )


class OrderUpdatedHandler(IEventHandler[OrderUpdated]):
    def handle(self, event: OrderUpdated) -> None:
        logger.info(
            f"Procesando actualización del pedido {event.aggregate_id}",
            order_id=str(event.aggregate_id),
        )


class OrderDeletedHandler(IEventHandler[OrderDeleted]):
    def handle(self, event: OrderDeleted) -> None:
        logger.info(
            f"Procesando eliminación del pedido {event.aggregate_id}",
            order_id=str(event.aggregate_id),
        )


class OrderItemStatusChangedHandler(IEventHandler[OrderItemStatusChanged]):
    def handle(self, event: OrderItemStatusChanged) -> None:
        logger.info(
            f"Procesando cambio de estado del platillo {event.item_id}",
            order_id=str(event.aggregate_id),
            item_id=str(event.item_id),
            status=event.status,
        )


order_created_handler = OrderCreatedHandler()
order_updated_handler = OrderUpdatedHandler()
order_deleted_handler = OrderDeletedHandler()
order_item_status_changed_handler = OrderItemStatusChangedHandler()

"""Order service layer (Use Cases).

Orchestrates order capture and the per-item preparation status.  All
write operations are atomic; the service defines the unit-of-work
boundary.

Business rules enforced:
- Every dish must exist on the menu and be active.
- A variant must belong to its dish; a sauce must be a variant of the
  sauces item.
- Unit price is resolved from the menu unless the caller overrides it.
- Every new item starts ``pendiente``.
- Domain events are published only after the transaction commits.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional

import structlog
from django.db import transaction

from modules.menu.constants import SAUCES_ITEM_NAME
from modules.menu.services import calculate_item_price
from modules.orders.constants import ItemStatus
from modules.orders.events import (
    OrderCreated,
    OrderDeleted,
    OrderItemStatusChanged,
    OrderUpdated,
)
from modules.orders.exceptions import (
    InvalidItemStatus,
    InvalidVariant,
    MenuItemUnavailable,
    OrderItemNotFound,
    OrderNotFound,
)
from shared.infrastructure.bus import event_bus as default_event_bus

if TYPE_CHECKING:
    from modules.menu.repositories.interfaces import IMenuRepository
    from modules.orders.dtos import CreateOrderDTO, CreateOrderItemDTO, UpdateOrderDTO
    from modules.orders.models import Order, OrderItem
    from modules.orders.repositories.interfaces import IOrderRepository
    from shared.domain.bus import IEventBus
    from shared.domain.events import DomainEvent

logger = structlog.get_logger(__name__)


class OrderService:
    """Application service for Order use-cases.

    Receives repositories (and optionally the event bus) via constructor
    injection (DIP).
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        menu_repository: IMenuRepository,
        event_bus: Optional[IEventBus] = None,
    ) -> None:
        self._order_repo = order_repository
        self._menu_repo = menu_repository
        self._bus = event_bus or default_event_bus

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_order(self, dto: CreateOrderDTO) -> Order:
        """Create an order and its items.

        Raises:
            MenuItemUnavailable: a dish does not exist or is inactive.
            InvalidVariant: a variant or sauce does not match its dish.
        """
        log = logger.bind(customer_name=dto.customer_name, item_count=len(dto.items))
        log.info("order.creation_started")

        repo_items = [self._resolve_item(item_dto) for item_dto in dto.items]

        order = self._order_repo.create(
            {
                "customer_name": dto.customer_name,
                "origin": dto.origin,
                "phone": dto.phone,
                "delivery_time": dto.delivery_time,
                "deposit": dto.deposit,
                "balance": dto.balance,
                "payment_method": dto.payment_method,
                "notes": dto.notes,
                "items": repo_items,
            }
        )

        log.info("order.created", order_id=str(order.id), total=str(order.total))
        self._publish_on_commit(OrderCreated(aggregate_id=order.id))

        order_with_relations = self._order_repo.get_by_id(str(order.id))
        return order_with_relations or order

    @transaction.atomic
    def update_order(self, order_id: str, dto: UpdateOrderDTO) -> Order:
        """Apply the non-``None`` header fields of ``dto``.

        Raises:
            OrderNotFound: order does not exist.
        """
        order = self.get_order(order_id)
        data = dto.model_dump(exclude_none=True)
        if data:
            self._order_repo.update(order.id, data)
            logger.info("order.header_updated", order_id=str(order.id), fields=sorted(data))
        self._publish_on_commit(OrderUpdated(aggregate_id=order.id))
        return self.get_order(order_id)

    @transaction.atomic
    def delete_order(self, order_id: str) -> None:
        """Delete an order and its items.

        Raises:
            OrderNotFound: order does not exist.
        """
        order = self.get_order(order_id)
        self._order_repo.delete(str(order.id))
        self._publish_on_commit(OrderDeleted(aggregate_id=order.id))

    @transaction.atomic
    def set_item_status(self, item_id: str, status: str) -> OrderItem:
        """Persist a preparation status for one order item.

        Raises:
            InvalidItemStatus: ``status`` is not a known item status.
            OrderItemNotFound: the item does not exist (or its order was
                deleted).
        """
        if status not in ItemStatus.values:
            raise InvalidItemStatus(
                f"Unknown item status '{status}'. "
                f"Expected one of: {', '.join(ItemStatus.values)}."
            )

        item = self._order_repo.update_item_status(item_id, status)
        if not item:
            raise OrderItemNotFound(f"Order item {item_id} not found.")

        self._publish_on_commit(
            OrderItemStatusChanged(aggregate_id=item.order_id, item_id=item.id, status=status)
        )
        return item

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_order(self, order_id: str) -> Order:
        """Retrieve a single order by ID.

        Raises:
            OrderNotFound: if the order does not exist.
        """
        order = self._order_repo.get_by_id(order_id)
        if not order:
            raise OrderNotFound(f"Order {order_id} not found.")
        return order

    def list_orders(self, filters: Optional[Dict[str, Any]] = None) -> List[Order]:
        """Return orders ordered by delivery time, optionally filtered."""
        return self._order_repo.list(filters)

    def list_by_status(self, status: str) -> List[Order]:
        return self._order_repo.list({"status": status})

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _resolve_item(self, item_dto: CreateOrderItemDTO) -> Dict[str, Any]:
        menu_item = self._menu_repo.get_by_id(str(item_dto.menu_item_id))
        if not menu_item or not menu_item.is_active:
            raise MenuItemUnavailable(
                f"Menu item {item_dto.menu_item_id} is not available."
            )

        variant = None
        if item_dto.variant_id:
            variant = self._menu_repo.get_variant(str(item_dto.variant_id))
            if not variant or variant.menu_item_id != menu_item.id:
                raise InvalidVariant(
                    f"Variant {item_dto.variant_id} does not belong to {menu_item.name}."
                )

        if item_dto.sauce_id:
            sauce = self._menu_repo.get_variant(str(item_dto.sauce_id))
            if not sauce or sauce.menu_item.name != SAUCES_ITEM_NAME:
                raise InvalidVariant(f"Sauce {item_dto.sauce_id} is not a sauce.")

        unit_price = item_dto.unit_price
        if unit_price is None:
            unit_price = calculate_item_price(menu_item, variant)

        return {
            "menu_item_id": menu_item.id,
            "variant_id": item_dto.variant_id,
            "sauce_id": item_dto.sauce_id,
            "quantity": item_dto.quantity,
            "unit_price": unit_price,
            "notes": item_dto.notes,
        }

    def _publish_on_commit(self, event: DomainEvent) -> None:
        bus = self._bus
        transaction.on_commit(lambda: bus.publish(event))

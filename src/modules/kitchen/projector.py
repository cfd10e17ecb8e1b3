"""Kitchen view projector.

Flattens every order item into a ``PreparationItem`` with its prep-start
instant, and projects the result either grouped by station
(``by_category``) or as a single urgency-ordered ``timeline``.

State is only ever replaced wholesale by ``refresh``; ``advance_status``
patches one item optimistically after the store accepted the change.
Timer ticks, store notifications and status changes may arrive on
different threads, so every state access goes through one re-entrant
lock.
"""

from __future__ import annotations

import threading
from datetime import date, datetime, tzinfo
from typing import Callable, Dict, List, Optional, Tuple
from uuid import UUID

import structlog

from modules.kitchen.constants import STATION_ORDER, URGENCY_WEIGHT, ViewMode
from modules.kitchen.dtos import OrderSnapshot, PreparationItem, SkippedItem
from modules.kitchen.exceptions import (
    InvalidTimeFormat,
    PreparationItemNotFound,
    StatusTransitionConflict,
    StoreUnavailable,
    UnknownCategory,
)
from modules.kitchen.repositories.interfaces import IOrderStore
from modules.kitchen.scheduler import RefreshTimer
from modules.kitchen.timing import DEFAULT_LEAD_TIMES, LeadTimeTable, classify, prep_start
from modules.orders.constants import NEXT_ITEM_STATUS, ItemStatus

logger = structlog.get_logger(__name__)

Listener = Callable[["KitchenProjector"], None]


class KitchenProjector:
    def __init__(
        self,
        store: IOrderStore,
        reference_date: date,
        lead_times: LeadTimeTable = DEFAULT_LEAD_TIMES,
        tz: Optional[tzinfo] = None,
    ) -> None:
        self._store = store
        self.reference_date = reference_date
        self.lead_times = lead_times
        self.tz = tz
        self._items: List[PreparationItem] = []
        self._skipped: List[SkippedItem] = []
        self._refreshed_at: Optional[datetime] = None
        self._lock = threading.RLock()
        self._listeners: List[Listener] = []
        self._timer: Optional[RefreshTimer] = None

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def items(self) -> List[PreparationItem]:
        with self._lock:
            return list(self._items)

    @property
    def skipped(self) -> List[SkippedItem]:
        with self._lock:
            return list(self._skipped)

    @property
    def refreshed_at(self) -> Optional[datetime]:
        return self._refreshed_at

    def now(self) -> datetime:
        return datetime.now(self.tz)

    def refresh(self, now: Optional[datetime] = None) -> None:
        """Rebuild state from the store.

        Items whose delivery time or category cannot be timed are left
        out and listed in ``skipped``.

        Raises:
            StoreUnavailable: the store failed; previous state is kept.
        """
        with self._lock:
            orders = self._store.list_orders()
            items, skipped = self._flatten(orders)
            self._items = items
            self._skipped = skipped
            self._refreshed_at = now or self.now()

        logger.info(
            "kitchen.refreshed",
            order_count=len(orders),
            item_count=len(items),
            skipped_count=len(skipped),
        )
        self._notify()

    def _flatten(
        self, orders: List[OrderSnapshot]
    ) -> Tuple[List[PreparationItem], List[SkippedItem]]:
        items: List[PreparationItem] = []
        skipped: List[SkippedItem] = []
        for order in orders:
            for item in order.items:
                try:
                    start = prep_start(
                        order.delivery_time,
                        item.category,
                        self.reference_date,
                        self.lead_times,
                        self.tz,
                    )
                except (InvalidTimeFormat, UnknownCategory) as exc:
                    logger.warning(
                        "kitchen.item_skipped",
                        item_id=str(item.id),
                        order_number=order.order_number,
                        reason=str(exc),
                    )
                    skipped.append(
                        SkippedItem(
                            item_id=item.id,
                            order_number=order.order_number,
                            reason=str(exc),
                        )
                    )
                    continue
                items.append(PreparationItem.from_snapshots(order, item, start))
        return items, skipped

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def _visible(self, show_completed: bool) -> List[PreparationItem]:
        with self._lock:
            items = list(self._items)
        if show_completed:
            return items
        return [item for item in items if item.status != ItemStatus.LISTO]

    def by_category(self, show_completed: bool = False) -> Dict[str, List[PreparationItem]]:
        """Items per station, in station order, each sorted by prep start.

        Every station is present even when it has nothing to prepare.
        """
        groups: Dict[str, List[PreparationItem]] = {category: [] for category in STATION_ORDER}
        for item in self._visible(show_completed):
            groups[item.category].append(item)
        for category_items in groups.values():
            category_items.sort(key=lambda item: item.prep_start)
        return groups

    def timeline(
        self, now: Optional[datetime] = None, show_completed: bool = False
    ) -> List[PreparationItem]:
        now = now or self.now()
        return sorted(
            self._visible(show_completed),
            key=lambda item: (URGENCY_WEIGHT[classify(item.prep_start, now)], item.prep_start),
        )

    def project(
        self,
        view_mode: str,
        now: Optional[datetime] = None,
        show_completed: bool = False,
    ):
        if view_mode == ViewMode.BY_CATEGORY:
            return self.by_category(show_completed)
        if view_mode == ViewMode.TIMELINE:
            return self.timeline(now, show_completed)
        raise ValueError(f"Unknown view mode '{view_mode}'.")

    # ------------------------------------------------------------------
    # Status changes
    # ------------------------------------------------------------------

    def _find(self, item_id: UUID | str) -> Tuple[int, PreparationItem]:
        key = str(item_id)
        for index, item in enumerate(self._items):
            if str(item.item_id) == key:
                return index, item
        raise PreparationItemNotFound(f"Preparation item {item_id} not found.")

    def advance_status(self, item_id: UUID | str) -> str:
        """Move an item to its next status and return it.

        ``pendiente -> preparando -> listo -> pendiente``.  Local state is
        only touched after the store accepted the change.

        Raises:
            PreparationItemNotFound: the item is not in the projection.
            StatusTransitionConflict: the store rejected the change; a
                refresh has already been forced.
            StoreUnavailable: the store failed; nothing changed.
        """
        with self._lock:
            _, item = self._find(item_id)
            new_status = NEXT_ITEM_STATUS[item.status]
            log = logger.bind(item_id=str(item_id), old_status=item.status, new_status=new_status)

            try:
                self._store.set_item_status(str(item.item_id), new_status)
            except StatusTransitionConflict:
                log.warning("kitchen.transition_conflict")
                self._force_refresh()
                raise

            try:
                index, current = self._find(item_id)
            except PreparationItemNotFound:
                # A refresh that ran meanwhile already dropped it.
                pass
            else:
                self._items[index] = current.model_copy(update={"status": new_status})

        log.info("kitchen.status_advanced")
        self._notify()
        return new_status

    def _force_refresh(self) -> None:
        try:
            self.refresh()
        except StoreUnavailable:
            logger.warning("kitchen.forced_refresh_failed")

    # ------------------------------------------------------------------
    # Listeners and refresh cadence
    # ------------------------------------------------------------------

    def add_listener(self, listener: Listener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def _notify(self) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            listener(self)

    def _refresh_quietly(self) -> None:
        try:
            self.refresh()
        except StoreUnavailable:
            logger.warning("kitchen.refresh_failed", keeping_items=len(self._items))

    def on_store_changed(self) -> None:
        self._refresh_quietly()

    def start(self, interval: float) -> None:
        """Refresh now, then every ``interval`` seconds and on store changes."""
        self._refresh_quietly()
        self._store.subscribe(self.on_store_changed)
        self._timer = RefreshTimer(interval, self._refresh_quietly)
        self._timer.start()

    def stop(self) -> None:
        if self._timer is not None:
            self._timer.stop()
            self._timer = None
        self._store.unsubscribe(self.on_store_changed)

"""Kitchen board service.

Builds a ``KitchenProjector`` from settings, turns projections into
JSON-ready boards and keeps the last good board in the cache so the API
can still answer (marked ``stale``) while the order store is down.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, List, Optional

import structlog
from django.conf import settings
from django.core.cache import cache as default_cache
from django.core.exceptions import ImproperlyConfigured
from django.utils import timezone

from modules.kitchen.constants import STATION_ORDER, ViewMode
from modules.kitchen.dtos import PreparationItem
from modules.kitchen.exceptions import StoreUnavailable
from modules.kitchen.projector import KitchenProjector
from modules.kitchen.repositories.django_store import DjangoOrderStore
from modules.kitchen.timing import DEFAULT_LEAD_TIMES, LeadTimeTable, classify, minutes_until
from modules.menu.constants import MenuCategory

logger = structlog.get_logger(__name__)

BOARD_CACHE_KEY = "kitchen:board:{view}:{show_completed}"


def get_reference_date() -> date:
    try:
        return date.fromisoformat(settings.KITCHEN_REFERENCE_DATE)
    except ValueError as exc:
        raise ImproperlyConfigured(
            f"KITCHEN_REFERENCE_DATE must be an ISO date, got {settings.KITCHEN_REFERENCE_DATE!r}."
        ) from exc


def get_lead_times() -> LeadTimeTable:
    """Default lead times with ``KITCHEN_LEAD_TIMES`` overrides applied.

    Overrides look like ``platos_fuertes=4,postres_bebidas=1``.
    """
    overrides: Dict[str, int] = {}
    for entry in settings.KITCHEN_LEAD_TIMES:
        if not entry.strip():
            continue
        category, _, hours = entry.partition("=")
        try:
            overrides[category.strip()] = int(hours)
        except ValueError as exc:
            raise ImproperlyConfigured(f"Invalid KITCHEN_LEAD_TIMES entry {entry!r}.") from exc
    if not overrides:
        return DEFAULT_LEAD_TIMES
    try:
        return DEFAULT_LEAD_TIMES.with_overrides(overrides)
    except ValueError as exc:
        raise ImproperlyConfigured(f"Invalid KITCHEN_LEAD_TIMES: {exc}") from exc


def build_projector(store=None) -> KitchenProjector:
    return KitchenProjector(
        store=store or DjangoOrderStore(),
        reference_date=get_reference_date(),
        lead_times=get_lead_times(),
        tz=timezone.get_current_timezone(),
    )


def serialize_item(item: PreparationItem, now: datetime) -> Dict[str, Any]:
    data = item.model_dump(mode="json")
    data["prep_start_time"] = item.prep_start.strftime("%H:%M")
    data["minutes_until_start"] = round(minutes_until(item.prep_start, now))
    data["urgency"] = classify(item.prep_start, now).value
    return data


class KitchenBoardService:
    """Application service behind the kitchen API."""

    def __init__(self, projector: Optional[KitchenProjector] = None, cache=None) -> None:
        self._projector = projector or build_projector()
        self._cache = cache if cache is not None else default_cache

    def board(
        self,
        view_mode: str = ViewMode.BY_CATEGORY,
        show_completed: bool = False,
        now: Optional[datetime] = None,
    ) -> Dict[str, Any]:
        """Refresh and project.

        Raises:
            StoreUnavailable: the store failed and no board was cached.
        """
        key = BOARD_CACHE_KEY.format(view=view_mode, show_completed=int(show_completed))
        now = now or timezone.now()
        try:
            self._projector.refresh(now)
        except StoreUnavailable:
            cached = self._cache.get(key)
            if cached is None:
                raise
            logger.warning("kitchen.board.serving_stale", generated_at=cached["generated_at"])
            return {**cached, "stale": True}

        board = self._build(view_mode, show_completed, now)
        self._cache.set(key, board, settings.KITCHEN_BOARD_CACHE_SECONDS)
        return board

    def advance(self, item_id: str) -> Dict[str, Any]:
        """Refresh, then advance one item.  Returns ``{id, status}``."""
        self._projector.refresh()
        status = self._projector.advance_status(item_id)
        return {"id": str(item_id), "status": status}

    def _build(self, view_mode: str, show_completed: bool, now: datetime) -> Dict[str, Any]:
        projection = self._projector.project(view_mode, now, show_completed)
        board: Dict[str, Any] = {
            "view": str(view_mode),
            "generated_at": now.isoformat(),
            "reference_date": self._projector.reference_date.isoformat(),
            "lead_times": self._projector.lead_times.as_dict(),
            "show_completed": show_completed,
            "stale": False,
            "skipped": [s.model_dump(mode="json") for s in self._projector.skipped],
        }
        if view_mode == ViewMode.BY_CATEGORY:
            board["categories"] = self._categories(projection, now)
        else:
            board["items"] = [serialize_item(item, now) for item in projection]
        return board

    def _categories(self, groups, now: datetime) -> List[Dict[str, Any]]:
        labels = dict(MenuCategory.choices)
        return [
            {
                "category": str(category),
                "label": labels[category],
                "lead_hours": self._projector.lead_times.hours_for(category),
                "items": [serialize_item(item, now) for item in groups[category]],
            }
            for category in STATION_ORDER
        ]

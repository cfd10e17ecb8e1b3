"""Preparation timing: lead times, prep-start instants and urgency.

Everything here is pure.  The reference date and ``now`` are always
passed in, so the same inputs always give the same answer.

>>> prep_start("18:00", "entradas", date(2025, 12, 24))
datetime.datetime(2025, 12, 24, 16, 0)
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta, tzinfo
from types import MappingProxyType
from typing import Mapping, Optional

from modules.kitchen.constants import (
    DEFAULT_LEAD_HOURS,
    LATE_AFTER_MINUTES,
    SOON_WITHIN_MINUTES,
    START_NOW_WITHIN_MINUTES,
    UrgencyState,
)
from modules.kitchen.exceptions import InvalidTimeFormat, UnknownCategory
from modules.menu.constants import MenuCategory

_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?$")


@dataclass(frozen=True)
class LeadTimeTable:
    """Immutable category -> lead hours mapping.

    Must cover every ``MenuCategory`` with a positive number of hours.
    """

    hours: Mapping[str, int] = field(default_factory=lambda: dict(DEFAULT_LEAD_HOURS))

    def __post_init__(self) -> None:
        hours = {str(category): value for category, value in self.hours.items()}
        unknown = set(hours) - set(MenuCategory.values)
        if unknown:
            raise ValueError(f"Unknown categories: {', '.join(sorted(unknown))}.")
        missing = set(MenuCategory.values) - set(hours)
        if missing:
            raise ValueError(f"Missing lead time for: {', '.join(sorted(missing))}.")
        for category, value in hours.items():
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ValueError(
                    f"Lead time for '{category}' must be a positive integer, got {value!r}."
                )
        object.__setattr__(self, "hours", MappingProxyType(hours))

    def hours_for(self, category: str) -> int:
        try:
            return self.hours[category]
        except KeyError:
            raise UnknownCategory(f"Unknown category '{category}'.") from None

    def with_overrides(self, overrides: Mapping[str, int]) -> LeadTimeTable:
        return LeadTimeTable({**self.hours, **overrides})

    def as_dict(self) -> dict[str, int]:
        return dict(self.hours)


DEFAULT_LEAD_TIMES = LeadTimeTable()


def parse_delivery_time(value: str) -> time:
    """Parse ``HH:mm`` (an optional ``:ss`` suffix is tolerated).

    Raises:
        InvalidTimeFormat: not that shape, or hour/minute out of range.
    """
    match = _TIME_RE.match(value.strip()) if isinstance(value, str) else None
    if not match:
        raise InvalidTimeFormat(f"Invalid delivery time {value!r}; expected HH:mm.")
    hour, minute = int(match.group(1)), int(match.group(2))
    second = int(match.group(3) or 0)
    if not (0 <= hour <= 23 and 0 <= minute <= 59 and 0 <= second <= 59):
        raise InvalidTimeFormat(f"Delivery time {value!r} is out of range.")
    return time(hour, minute, second)


def prep_start(
    delivery_time: str,
    category: str,
    reference_date: date,
    lead_times: LeadTimeTable = DEFAULT_LEAD_TIMES,
    tz: Optional[tzinfo] = None,
) -> datetime:
    """Instant at which the kitchen should start preparing an item.

    ``reference_date`` + ``delivery_time`` minus the category lead hours.
    The result may fall on the previous day.  With ``tz`` the result is
    aware in that zone; otherwise it is naive.

    Raises:
        InvalidTimeFormat: malformed ``delivery_time``.
        UnknownCategory: ``category`` has no lead time.
    """
    delivery = datetime.combine(reference_date, parse_delivery_time(delivery_time), tzinfo=tz)
    return delivery - timedelta(hours=lead_times.hours_for(category))


def minutes_until(prep_start_at: datetime, now: datetime) -> float:
    return (prep_start_at - now).total_seconds() / 60


def classify(prep_start_at: datetime, now: datetime) -> UrgencyState:
    diff = minutes_until(prep_start_at, now)
    if diff < LATE_AFTER_MINUTES:
        return UrgencyState.ATRASADO
    if diff <= START_NOW_WITHIN_MINUTES:
        return UrgencyState.PREPARAR_AHORA
    if diff <= SOON_WITHIN_MINUTES:
        return UrgencyState.PROXIMAMENTE
    return UrgencyState.FUTURO

"""Plain-text rendering of the kitchen board for terminals."""

from __future__ import annotations

from datetime import datetime
from typing import List

from modules.kitchen.constants import UrgencyState, ViewMode
from modules.kitchen.dtos import PreparationItem
from modules.kitchen.projector import KitchenProjector
from modules.kitchen.timing import classify
from modules.menu.constants import MenuCategory

URGENCY_MARKERS = {
    UrgencyState.ATRASADO: "!!",
    UrgencyState.PREPARAR_AHORA: ">>",
    UrgencyState.PROXIMAMENTE: "..",
    UrgencyState.FUTURO: "  ",
}


def render_item(item: PreparationItem, now: datetime) -> str:
    urgency = classify(item.prep_start, now)
    name = item.menu_item_name
    extras = [extra for extra in (item.variant_name, item.sauce_name) if extra]
    if extras:
        name = f"{name} ({', '.join(extras)})"
    line = (
        f"{URGENCY_MARKERS[urgency]} {item.prep_start:%H:%M} "
        f"{item.order_number:<14} {item.quantity}x {name} "
        f"[{item.status}] -> {item.delivery_time} {item.customer_name}"
    )
    if item.notes:
        line += f" / {item.notes}"
    return line


def render_board(
    projector: KitchenProjector,
    view_mode: str,
    now: datetime,
    show_completed: bool = False,
) -> str:
    lines: List[str] = [
        f"COCINA {projector.reference_date:%Y-%m-%d} | {now:%H:%M} | {ViewMode(view_mode).label}",
        "",
    ]
    if view_mode == ViewMode.BY_CATEGORY:
        labels = dict(MenuCategory.choices)
        for category, items in projector.by_category(show_completed).items():
            hours = projector.lead_times.hours_for(category)
            lines.append(f"== {labels[category]} ({hours} h) ==")
            lines.extend(render_item(item, now) for item in items)
            if not items:
                lines.append("   (sin platillos)")
            lines.append("")
    else:
        items = projector.timeline(now, show_completed)
        lines.extend(render_item(item, now) for item in items)
        if not items:
            lines.append("   (sin platillos)")
        lines.append("")

    for skipped in projector.skipped:
        lines.append(f"?? {skipped.order_number} {skipped.item_id}: {skipped.reason}")
    return "\n".join(lines)

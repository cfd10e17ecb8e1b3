"""Kitchen constants: urgency states, station order and view modes."""

from django.db import models

from modules.menu.constants import MenuCategory


class UrgencyState(models.TextChoices):
    ATRASADO = "atrasado", "Atrasado"
    PREPARAR_AHORA = "preparar_ahora", "Preparar ahora"
    PROXIMAMENTE = "proximamente", "Próximamente"
    FUTURO = "futuro", "Futuro"


class ViewMode(models.TextChoices):
    BY_CATEGORY = "by_category", "Por categoría"
    TIMELINE = "timeline", "Línea de tiempo"


# Minutes relative to prep start (negative = already past it).
LATE_AFTER_MINUTES = -15
START_NOW_WITHIN_MINUTES = 15
SOON_WITHIN_MINUTES = 60

# Timeline sort weights; "preparar_ahora" sorts ahead of "atrasado".
URGENCY_WEIGHT: dict[str, int] = {
    UrgencyState.PREPARAR_AHORA: 0,
    UrgencyState.ATRASADO: 1,
    UrgencyState.PROXIMAMENTE: 2,
    UrgencyState.FUTURO: 3,
}

STATION_ORDER: tuple[str, ...] = (
    MenuCategory.PLATOS_FUERTES,
    MenuCategory.ENTRADAS,
    MenuCategory.COMPLEMENTOS,
    MenuCategory.POSTRES_BEBIDAS,
)

DEFAULT_LEAD_HOURS: dict[str, int] = {
    MenuCategory.PLATOS_FUERTES: 3,
    MenuCategory.ENTRADAS: 2,
    MenuCategory.COMPLEMENTOS: 2,
    MenuCategory.POSTRES_BEBIDAS: 1,
}

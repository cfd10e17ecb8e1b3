"""Order domain constants.

Choices for orders and their items, plus the kitchen preparation cycle
of an item: ``pendiente -> preparando -> listo -> pendiente``.  The last
step lets an operator undo an item marked ready by mistake.
"""

from django.db import models


class OrderStatus(models.TextChoices):
    PENDIENTE = "pendiente", "Pendiente"
    EN_PREPARACION = "en_preparacion", "En preparación"
    COMPLETADO = "completado", "Completado"


class ItemStatus(models.TextChoices):
    PENDIENTE = "pendiente", "Pendiente"
    PREPARANDO = "preparando", "Preparando"
    LISTO = "listo", "Listo"


class OrderOrigin(models.TextChoices):
    FACEBOOK = "Facebook", "Facebook"
    WHATSAPP = "WhatsApp", "WhatsApp"
    INSTAGRAM = "Instagram", "Instagram"
    REFERIDO = "Referido", "Referido"
    OTRO = "Otro", "Otro"


class PaymentMethod(models.TextChoices):
    EFECTIVO = "efectivo", "Efectivo"
    TRANSFERENCIA = "transferencia", "Transferencia"
    PENDIENTE = "pendiente", "Pendiente"


NEXT_ITEM_STATUS: dict[str, str] = {
    ItemStatus.PENDIENTE: ItemStatus.PREPARANDO,
    ItemStatus.PREPARANDO: ItemStatus.LISTO,
    ItemStatus.LISTO: ItemStatus.PENDIENTE,
}

ORDER_NUMBER_MAX_RETRIES = 5

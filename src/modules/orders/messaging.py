"""Customer confirmation messages.

Builds the ``wa.me`` link staff use to confirm an order over WhatsApp.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING
from urllib.parse import quote

from django.conf import settings

if TYPE_CHECKING:
    from modules.orders.models import Order

CONFIRMATION_TEMPLATE = (
    "Hola {customer}, confirmamos tu pedido de {business} para las {time}. "
    "Total: ${total}. ¡Gracias por tu preferencia!"
)


def build_confirmation_message(order: Order) -> str:
    return CONFIRMATION_TEMPLATE.format(
        customer=order.customer_name,
        business=settings.BUSINESS_NAME,
        time=order.delivery_time.strftime("%H:%M"),
        total=order.total,
    )


def build_whatsapp_link(order: Order) -> str:
    """Return ``https://wa.me/<country><digits>?text=<message>``.

    Non-digit characters are stripped from the phone number.  Raises
    ``ValueError`` when the order has no usable phone.
    """
    digits = re.sub(r"\D", "", order.phone or "")
    if not digits:
        raise ValueError(f"Order {order.order_number} has no phone number.")
    text = quote(build_confirmation_message(order), safe="!'()*")
    return f"https://wa.me/{settings.WHATSAPP_COUNTRY_CODE}{digits}?text={text}"

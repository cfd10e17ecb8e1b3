import django_filters

from modules.orders.constants import OrderStatus
from modules.orders.models import Order


class OrderFilter(django_filters.FilterSet):
    status = django_filters.ChoiceFilter(
        field_name="status", choices=OrderStatus.choices
    )
    delivery_from = django_filters.TimeFilter(
        field_name="delivery_time", lookup_expr="gte"
    )
    delivery_to = django_filters.TimeFilter(
        field_name="delivery_time", lookup_expr="lte"
    )

    class Meta:
        model = Order
        fields = ["status", "delivery_from", "delivery_to"]

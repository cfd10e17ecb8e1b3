import django_filters

from modules.menu.constants import MenuCategory
from modules.menu.models import MenuItem


class MenuItemFilter(django_filters.FilterSet):
    name = django_filters.CharFilter(field_name="name", lookup_expr="icontains")
    category = django_filters.ChoiceFilter(
        field_name="category", choices=MenuCategory.choices
    )
    active = django_filters.BooleanFilter(field_name="is_active")

    class Meta:
        model = MenuItem
        fields = ["name", "category", "active"]

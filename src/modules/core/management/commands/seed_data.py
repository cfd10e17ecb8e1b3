from __future__ import annotations

import random
from datetime import time
from decimal import Decimal

from django.core.management.base import BaseCommand

from modules.menu.constants import SAUCES_ITEM_NAME, MenuCategory
from modules.menu.models import MenuItem, MenuVariant
from modules.menu.repositories.django_repository import MenuDjangoRepository
from modules.orders.constants import OrderOrigin, PaymentMethod
from modules.orders.dtos import CreateOrderDTO, CreateOrderItemDTO
from modules.orders.models import Order
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.services import OrderService

# name, category, unit, base price, variant type, prep minutes, variants
MENU = [
    ("Pierna adobada", MenuCategory.PLATOS_FUERTES, "kg", Decimal("420.00"), "tamaño", 180,
     [("Medio kilo", Decimal("220.00")), ("Kilo", Decimal("420.00"))]),
    ("Pavo relleno", MenuCategory.PLATOS_FUERTES, "pz", Decimal("1800.00"), "relleno", 240,
     [("Carne molida", None), ("Frutos secos", Decimal("1950.00"))]),
    ("Bacalao a la vizcaína", MenuCategory.PLATOS_FUERTES, "kg", Decimal("650.00"), "", 150, []),
    ("Romeritos", MenuCategory.ENTRADAS, "litro", Decimal("180.00"), "", 90, []),
    ("Crema de chile poblano", MenuCategory.ENTRADAS, "litro", Decimal("120.00"), "", 60, []),
    ("Ensalada de manzana", MenuCategory.COMPLEMENTOS, "litro", Decimal("110.00"), "", 45, []),
    ("Puré de papa", MenuCategory.COMPLEMENTOS, "litro", Decimal("90.00"), "", 40, []),
    ("Spaghetti blanco", MenuCategory.COMPLEMENTOS, "litro", Decimal("95.00"), "", 40, []),
    ("Ponche de frutas", MenuCategory.POSTRES_BEBIDAS, "litro", Decimal("80.00"), "", 60, []),
    ("Pay de queso", MenuCategory.POSTRES_BEBIDAS, "pz", None, "sabor", 30,
     [("Natural", Decimal("260.00")), ("Zarzamora", Decimal("290.00"))]),
    (SAUCES_ITEM_NAME, MenuCategory.COMPLEMENTOS, "litro", None, "salsa", 20,
     [("Ciruela", Decimal("90.00")), ("Manzana", Decimal("90.00")), ("Chipotle", Decimal("80.00"))]),
]

CUSTOMERS = [
    ("María López", "55 1234 5678", OrderOrigin.WHATSAPP),
    ("José Hernández", "55 2345 6789", OrderOrigin.FACEBOOK),
    ("Guadalupe Martínez", "55 3456 7890", OrderOrigin.INSTAGRAM),
    ("Juan García", "55 4567 8901", OrderOrigin.REFERIDO),
    ("Rosa Sánchez", "55 5678 9012", OrderOrigin.WHATSAPP),
    ("Luis Ramírez", "", OrderOrigin.OTRO),
]


class Command(BaseCommand):
    help = "Seed database with the seasonal menu and sample orders."

    def add_arguments(self, parser):
        parser.add_argument("--orders", type=int, default=12)

    def handle(self, *args, **options):
        random.seed(42)
        self.stdout.write("Seeding development data...")

        items = self._seed_menu()
        orders_created = self._seed_orders(items, options["orders"])

        self.stdout.write(
            self.style.SUCCESS(
                f"Seed completed: menu_items={len(items)}, orders={orders_created}"
            )
        )

    def _seed_menu(self) -> list[MenuItem]:
        self.stdout.write("Creating menu...")
        items: list[MenuItem] = []
        for name, category, unit, price, variant_type, prep_minutes, variants in MENU:
            item, created = MenuItem.objects.get_or_create(
                name=name,
                defaults={
                    "category": category,
                    "unit": unit,
                    "base_price": price,
                    "variant_type": variant_type,
                    "prep_minutes": prep_minutes,
                },
            )
            if created:
                for variant_name, variant_price in variants:
                    MenuVariant.objects.create(
                        menu_item=item, name=variant_name, price=variant_price
                    )
            items.append(item)
        self.stdout.write(self.style.SUCCESS("Creating menu... Done!"))
        return items

    def _seed_orders(self, items: list[MenuItem], count: int) -> int:
        self.stdout.write("Creating orders...")
        if Order.objects.exists():
            self.stdout.write(self.style.WARNING("Skipping orders (already seeded)."))
            return 0

        service = OrderService(
            order_repository=OrderDjangoRepository(),
            menu_repository=MenuDjangoRepository(),
        )
        sauces = list(MenuVariant.objects.filter(menu_item__name=SAUCES_ITEM_NAME))
        dishes = [item for item in items if item.name != SAUCES_ITEM_NAME]

        for _ in range(count):
            name, phone, origin = random.choice(CUSTOMERS)
            lines = []
            for dish in random.sample(dishes, k=random.randint(1, 4)):
                variants = list(dish.variants.all())
                lines.append(
                    CreateOrderItemDTO(
                        menu_item_id=dish.id,
                        variant_id=random.choice(variants).id if variants else None,
                        sauce_id=(
                            random.choice(sauces).id
                            if sauces and dish.category == MenuCategory.PLATOS_FUERTES
                            else None
                        ),
                        quantity=random.randint(1, 3),
                    )
                )
            service.create_order(
                CreateOrderDTO(
                    customer_name=name,
                    phone=phone,
                    origin=origin,
                    delivery_time=time(random.randint(12, 22), random.choice([0, 30])),
                    deposit=Decimal(random.choice([0, 100, 200])),
                    payment_method=random.choice(PaymentMethod.values),
                    items=lines,
                )
            )

        self.stdout.write(self.style.SUCCESS("Creating orders... Done!"))
        return count

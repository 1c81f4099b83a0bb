from __future__ import annotations

import random
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction

from modules.accounts.models import UserRole
from modules.orders.dtos import CreateOrderDTO, CreateOrderItemDTO
from modules.orders.services import OrderService
from modules.products.models import Product


class Command(BaseCommand):
    help = "Seed database with development data (accounts, catalog, orders)."

    def add_arguments(self, parser):
        parser.add_argument(
            "--orders",
            type=int,
            default=5,
            help="Number of PLACED orders to create for the demo user.",
        )

    def handle(self, *args, **options):
        random.seed(42)
        self.stdout.write("Seeding development data...")

        with transaction.atomic():
            users_created, customer = self._seed_users()
            products = self._seed_products()
        orders_created = self._seed_orders(customer, products, options["orders"])

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"users={users_created}, "
                f"products={len(products)}, "
                f"orders={orders_created}"
            )
        )

    def _seed_users(self):
        User = get_user_model()
        created = 0
        if not User.objects.filter(username="admin").exists():
            User.objects.create_superuser(
                "admin",
                email="admin@example.com",
                password="admin123",
                name="Store Admin",
            )
            created += 1
        customer = User.objects.filter(username="user").first()
        if customer is None:
            customer = User.objects.create_user(
                "user",
                email="user@example.com",
                password="user123",
                name="Demo Customer",
                role=UserRole.USER,
            )
            created += 1
        return created, customer

    def _seed_products(self) -> list[Product]:
        self.stdout.write("Creating products...")
        products: list[Product] = []
        catalog = [
            ("Monitor 27\"", Decimal("899.00"), Decimal("1299.90"), True),
            ("Mechanical Keyboard", Decimal("210.00"), Decimal("399.90"), True),
            ("Gaming Mouse", Decimal("120.00"), Decimal("249.90"), True),
            ("Notebook 14\"", Decimal("2900.00"), Decimal("3999.00"), True),
            ("Headset", Decimal("150.00"), Decimal("299.90"), True),
            ("Office Desk", Decimal("520.00"), Decimal("899.00"), True),
            ("Ergonomic Chair", Decimal("980.00"), Decimal("1499.00"), True),
            ("A4 Paper", Decimal("18.00"), Decimal("29.90"), True),
            ("LED Lamp", Decimal("31.00"), Decimal("59.90"), True),
            ("Prototype Tablet", Decimal("1500.00"), Decimal("2499.00"), False),
        ]
        for name, purchase_price, sale_price, is_visible in catalog:
            product = Product.objects.alive().filter(name=name).first()
            if product is None:
                product = Product.objects.create(
                    name=name,
                    description=f"Sample product: {name}",
                    purchase_price=purchase_price,
                    sale_price=sale_price,
                    stock=random.randint(10, 200),
                    is_visible=is_visible,
                )
            products.append(product)
        self.stdout.write(self.style.SUCCESS("Creating products... Done!"))
        return products

    def _seed_orders(self, customer, products: list[Product], count: int) -> int:
        """Orders go through ``OrderService`` so totals and notifications are real."""
        visible = [product for product in products if product.is_visible]
        if count <= 0 or not visible:
            self.stdout.write(self.style.WARNING("Skipping orders."))
            return 0

        self.stdout.write("Creating orders...")
        service = OrderService()
        for _ in range(count):
            sample = random.sample(visible, k=min(random.randint(1, 3), len(visible)))
            service.create_order(
                CreateOrderDTO(
                    user_id=customer.id,
                    items=[
                        CreateOrderItemDTO(
                            product_id=str(product.id),
                            quantity=random.randint(1, 3),
                        )
                        for product in sample
                    ],
                )
            )
        self.stdout.write(self.style.SUCCESS("Creating orders... Done!"))
        return count

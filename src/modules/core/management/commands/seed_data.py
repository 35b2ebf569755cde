from __future__ import annotations

import random
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from modules.customers.models import Customer
from modules.customers.repositories.django_repository import CustomerDjangoRepository
from modules.discounts.models import DiscountCode, DiscountCodeStatus
from modules.discounts.repositories.django_repository import DiscountCodeDjangoRepository
from modules.orders.constants import OrderStatus
from modules.orders.dtos import CreateOrderDTO, CreateOrderItemDTO
from modules.orders.models import Order
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.services import OrderService
from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository

SEED_ORDER_COUNT = 20


class Command(BaseCommand):
    help = "Seed database with deterministic development data."

    def add_arguments(self, parser):
        parser.add_argument(
            "--orders",
            type=int,
            default=SEED_ORDER_COUNT,
            help="Number of orders to place through the order workflow.",
        )

    def handle(self, *args, **options):
        random.seed(42)
        self.stdout.write("Seeding development data...")

        customers = self._seed_customers()
        products = self._seed_products()
        codes = self._seed_codes()
        orders_created = self._seed_orders(customers, products, codes, options["orders"])

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"customers={len(customers)}, "
                f"products={len(products)}, "
                f"codes={len(codes)}, "
                f"orders={orders_created}"
            )
        )

    def _seed_customers(self) -> list[Customer]:
        self.stdout.write("Creating customers...")
        customers: list[Customer] = []
        seed_customers = [
            ("Ana", "Souza", "ana@example.com", Decimal("5000.00")),
            ("Bruno", "Lima", "bruno@example.com", Decimal("1200.00")),
            ("Carla", "Mendes", "carla@example.com", Decimal("300.00")),
            ("Daniel", "Costa", "daniel@example.com", Decimal("0.00")),
            ("Elena", "Alves", "elena@example.com", Decimal("9800.00")),
            ("Farid", "Rocha", "farid@example.com", Decimal("750.00")),
        ]
        for first_name, last_name, email, balance in seed_customers:
            customer, _ = Customer.objects.get_or_create(
                email=email,
                defaults={
                    "first_name": first_name,
                    "last_name": last_name,
                    "balance": balance,
                },
            )
            customers.append(customer)
        self.stdout.write(self.style.SUCCESS("Creating customers... Done!"))
        return customers

    def _seed_products(self) -> list[Product]:
        self.stdout.write("Creating products...")
        products: list[Product] = []
        catalog = [
            ("Monitor 27\"", Decimal("1299.90")),
            ("Mechanical Keyboard", Decimal("399.90")),
            ("Gaming Mouse", Decimal("249.90")),
            ("Laptop 14\"", Decimal("3999.00")),
            ("Headset", Decimal("299.90")),
            ("Office Desk", Decimal("899.00")),
            ("Ergonomic Chair", Decimal("1499.00")),
            ("A4 Paper", Decimal("29.90")),
            ("Notebook", Decimal("19.90")),
            ("Desk Lamp", Decimal("59.90")),
        ]
        for name, price in catalog:
            product, _ = Product.objects.get_or_create(
                name=name,
                defaults={"price": price, "stock": random.randint(5, 60)},
            )
            products.append(product)
        self.stdout.write(self.style.SUCCESS("Creating products... Done!"))
        return products

    def _seed_codes(self) -> list[DiscountCode]:
        self.stdout.write("Creating discount codes...")
        codes: list[DiscountCode] = []
        seed_codes = [
            ("WELCOME10", Decimal("10.00"), DiscountCodeStatus.ACTIVE),
            ("SPRING50", Decimal("50.00"), DiscountCodeStatus.ACTIVE),
            ("OLD2020", Decimal("20.00"), DiscountCodeStatus.EXPIRED),
            ("PAUSED", Decimal("15.00"), DiscountCodeStatus.INACTIVE),
        ]
        for code, discount, status in seed_codes:
            discount_code = DiscountCode.objects.filter(code__iexact=code).first()
            if discount_code is None:
                discount_code = DiscountCode.objects.create(
                    code=code, discount=discount, status=status
                )
            codes.append(discount_code)
        self.stdout.write(self.style.SUCCESS("Creating discount codes... Done!"))
        return codes

    def _seed_orders(
        self,
        customers: list[Customer],
        products: list[Product],
        codes: list[DiscountCode],
        count: int,
    ) -> int:
        """Place orders through ``OrderService`` so stock and balances agree."""
        self.stdout.write("Creating orders...")
        if Order.objects.exists():
            self.stdout.write(self.style.WARNING("Skipping orders (already seeded)."))
            return 0

        service = OrderService(
            order_repository=OrderDjangoRepository(),
            customer_repository=CustomerDjangoRepository(),
            product_repository=ProductDjangoRepository(),
            discount_repository=DiscountCodeDjangoRepository(),
        )
        active_codes = [c.code for c in codes if c.is_active]
        orders_created = 0

        for _ in range(count):
            in_stock = [p for p in Product.objects.filter(stock__gt=0)]
            if not in_stock:
                break
            chosen = random.sample(in_stock, k=min(random.randint(1, 3), len(in_stock)))
            dto = CreateOrderDTO(
                customer_id=random.choice(customers).id,
                items=[
                    CreateOrderItemDTO(
                        product_id=product.id,
                        quantity=random.randint(1, min(3, product.stock)),
                    )
                    for product in chosen
                ],
                redemption_code=random.choice(active_codes + [None, None]),
            )
            with transaction.atomic():
                order = service.create_order(dto)
                outcome = random.choice(
                    [OrderStatus.PROCESSING, OrderStatus.COMPLETED, OrderStatus.FAILED]
                )
                if outcome != OrderStatus.PROCESSING:
                    service.update_status(order.id, outcome)
            orders_created += 1

        self.stdout.write(self.style.SUCCESS("Creating orders... Done!"))
        return orders_created

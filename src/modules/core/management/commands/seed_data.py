from __future__ import annotations

import random
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from modules.products.dtos import CreateProductDTO, ProductPriceDTO
from modules.products.models import Product
from modules.products.repositories.django_repository import (
    ProductDjangoRepository,
    ProductStoreDjangoRepository,
)
from modules.products.services import ProductService
from modules.stores.models import Store
from modules.stores.repositories.django_repository import StoreDjangoRepository

DEFAULT_STORES = [
    "Loja Principal - Centro",
    "Loja Filial - Zona Norte",
    "Loja Filial - Zona Sul",
    "Loja Online",
]

SAMPLE_PRODUCTS = [
    ("Monitor 27\"", Decimal("899.90")),
    ("Teclado Mecânico", Decimal("249.90")),
    ("Mouse Gamer", Decimal("129.90")),
    ("Headset", Decimal("189.90")),
    ("Cadeira Ergonômica", Decimal("999.00")),
    ("Papel A4", Decimal("19.90")),
    ("Caneta Azul", Decimal("2.50")),
    ("Caderno", Decimal("12.90")),
]


class Command(BaseCommand):
    help = "Seed database with the default stores and, optionally, sample products."

    def add_arguments(self, parser):
        parser.add_argument(
            "--with-products",
            action="store_true",
            help="Also create sample products priced in every store.",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        random.seed(42)
        self.stdout.write("Seeding data...")

        stores = self._seed_stores()
        products_created = 0
        if options["with_products"]:
            products_created = self._seed_products(stores)

        self.stdout.write(
            self.style.SUCCESS(
                f"Seed completed: stores={len(stores)}, products={products_created}"
            )
        )

    def _seed_stores(self) -> list[Store]:
        self.stdout.write("Creating stores...")
        stores: list[Store] = []
        for description in DEFAULT_STORES:
            store, _ = Store.objects.get_or_create(description=description)
            stores.append(store)
        self.stdout.write(self.style.SUCCESS("Creating stores... Done!"))
        return stores

    def _seed_products(self, stores: list[Store]) -> int:
        self.stdout.write("Creating products...")
        service = ProductService(
            repository=ProductDjangoRepository(),
            price_repository=ProductStoreDjangoRepository(),
            store_repository=StoreDjangoRepository(),
        )
        created = 0
        for description, cost in SAMPLE_PRODUCTS:
            if Product.objects.filter(description=description).exists():
                continue
            markup = [Decimal(random.randint(120, 180)) / 100 for _ in stores]
            service.create_product(
                CreateProductDTO(
                    description=description,
                    cost=cost,
                    prices=[
                        ProductPriceDTO(store_id=store.id, sale_price=cost * factor)
                        for store, factor in zip(stores, markup)
                    ],
                )
            )
            created += 1
        self.stdout.write(self.style.SUCCESS("Creating products... Done!"))
        return created

from __future__ import annotations

from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from modules.products.exceptions import ProductAlreadyExists
from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.services import ProductService

SAMPLE_PRODUCTS = [
    {
        "id": 1,
        "name": 'Laptop 15"',
        "brand": "TechPro",
        "price": Decimal("1299"),
        "description": "Powerful laptop",
        "stock": 5,
    },
    {
        "id": 2,
        "name": "Wireless Mouse",
        "brand": "LogiX",
        "price": Decimal("39"),
        "description": "Ergonomic wireless mouse",
        "stock": 40,
    },
]


class Command(BaseCommand):
    help = "Seed the product table with sample inventory."

    def add_arguments(self, parser):
        parser.add_argument(
            "--reset",
            action="store_true",
            help="Delete every product before seeding.",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options["reset"]:
            deleted, _ = Product.objects.all().delete()
            self.stdout.write(f"Removed {deleted} existing products.")

        service = ProductService(repository=ProductDjangoRepository())
        created = 0
        for data in SAMPLE_PRODUCTS:
            try:
                service.create_product(data)
            except ProductAlreadyExists:
                self.stdout.write(f"Product {data['id']} already present, skipped.")
                continue
            created += 1

        self.stdout.write(
            self.style.SUCCESS(f"Seed completed: products={created}")
        )

"""Duplicate-id concurrency integration test.

Proves that concurrent creates of the same product id leave exactly one
stored record, with every other writer told the id is taken.

Scenario:
- 10 threads POST a product with **id = 7** through ``ProductService``.
- Exactly 1 succeeds, 9 raise ``ProductAlreadyExists``.
- The store holds one product with id 7, carrying the winner's name.

Uses ``TransactionTestCase`` so each thread sees committed data.  On SQLite
the test database is a file (see ``config.test_settings``) and writers
queue on the ``IMMEDIATE`` transaction lock.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed

import django
from django.test import TransactionTestCase

from modules.products.exceptions import ProductAlreadyExists
from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.services import ProductService

logger = logging.getLogger(__name__)

CONTESTED_ID = 7
NUM_WORKERS = 10


class TestDuplicateIdConcurrency(TransactionTestCase):
    """Prove id uniqueness under concurrent inserts and re-keys."""

    def _create_in_thread(self, thread_id: int) -> str:
        django.db.connections.close_all()
        service = ProductService(repository=ProductDjangoRepository())
        try:
            service.create_product(
                {
                    "id": CONTESTED_ID,
                    "name": f"Contender {thread_id}",
                    "brand": "RaceCo",
                    "price": "10.00",
                    "description": "Created under contention",
                    "stock": 1,
                }
            )
            return f"success:{thread_id}"
        except ProductAlreadyExists:
            logger.warning("Thread %d: ProductAlreadyExists (expected)", thread_id)
            return "duplicate"
        finally:
            django.db.connections.close_all()

    def test_concurrent_creates_keep_one_record(self):
        with ThreadPoolExecutor(max_workers=NUM_WORKERS) as pool:
            futures = [pool.submit(self._create_in_thread, i) for i in range(NUM_WORKERS)]
            results = [future.result() for future in as_completed(futures)]

        winners = [r for r in results if r.startswith("success")]
        self.assertEqual(len(winners), 1, f"Expected one winner, got {winners}")
        self.assertEqual(results.count("duplicate"), NUM_WORKERS - 1)

        stored = Product.objects.filter(pk=CONTESTED_ID)
        self.assertEqual(stored.count(), 1)
        winner_id = int(winners[0].split(":")[1])
        self.assertEqual(stored.get().name, f"Contender {winner_id}")

    def test_concurrent_rekeys_onto_same_id(self):
        for source in range(1, NUM_WORKERS + 1):
            Product.objects.create(
                id=100 + source,
                name=f"Source {source}",
                brand="RaceCo",
                price="5.00",
                description="Waiting to be re-keyed",
                stock=0,
            )

        def rekey(source: int) -> str:
            django.db.connections.close_all()
            service = ProductService(repository=ProductDjangoRepository())
            try:
                service.update_product(
                    100 + source,
                    {
                        "id": CONTESTED_ID,
                        "name": f"Source {source}",
                        "brand": "RaceCo",
                        "price": "5.00",
                        "description": "Re-keyed",
                        "stock": 0,
                    },
                )
                return "success"
            except ProductAlreadyExists:
                return "duplicate"
            finally:
                django.db.connections.close_all()

        with ThreadPoolExecutor(max_workers=NUM_WORKERS) as pool:
            results = list(pool.map(rekey, range(1, NUM_WORKERS + 1)))

        self.assertEqual(results.count("success"), 1)
        self.assertEqual(Product.objects.count(), NUM_WORKERS)
        self.assertTrue(Product.objects.filter(pk=CONTESTED_ID).exists())

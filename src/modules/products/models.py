"""Product model: a caller-keyed inventory record.

Storage-level rules:
- ``id`` is assigned by the caller and is the primary key, so the database
  itself rejects a second row with the same id.
- Price must be greater than zero and stock cannot be negative; CHECK
  constraints back up the validation done in the service layer.
- Rows are always read in ascending ``id`` order.
"""

from __future__ import annotations

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models

from modules.products.constants import (
    BRAND_MAX_LENGTH,
    DESCRIPTION_MAX_LENGTH,
    NAME_MAX_LENGTH,
    PRICE_DECIMAL_PLACES,
    PRICE_MAX_DIGITS,
)


class Product(models.Model):
    """Inventory product.

    A leaf entity: no timestamps, no relationships, no soft delete.  Changing
    ``id`` on an existing row (re-keying) is done by the repository with an
    UPDATE of the primary key; ``save()`` on an instance with a new ``id``
    would insert a second row instead.
    """

    id = models.IntegerField(primary_key=True)
    name = models.CharField(max_length=NAME_MAX_LENGTH)
    brand = models.CharField(max_length=BRAND_MAX_LENGTH)
    price = models.DecimalField(
        max_digits=PRICE_MAX_DIGITS,
        decimal_places=PRICE_DECIMAL_PLACES,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    description = models.CharField(max_length=DESCRIPTION_MAX_LENGTH)
    stock = models.IntegerField(default=0)

    class Meta:
        db_table = "products"
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price__gt=0),
                name="products_price_positive",
            ),
            models.CheckConstraint(
                condition=models.Q(stock__gte=0),
                name="products_stock_non_negative",
            ),
        ]

    def __str__(self) -> str:
        return f"#{self.id} {self.name} ({self.brand})"

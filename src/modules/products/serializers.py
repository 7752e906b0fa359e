"""Product DRF serializers for API output.

Input is never validated here: views hand the raw request body to the
Service Layer, which owns the product rules.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.products.models import Product


class ProductSerializer(serializers.ModelSerializer):
    """Read serializer for the Product resource."""

    class Meta:
        model = Product
        fields = ["id", "name", "brand", "price", "description", "stock"]
        read_only_fields = fields

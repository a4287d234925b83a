"""Product DRF serializers (output representation).

Input is validated by the pydantic DTOs in ``dtos.py``; these
serializers only render entities for API responses.
"""

from __future__ import annotations

import base64

from rest_framework import serializers

from modules.products.models import Product, ProductStore
from modules.stores.serializers import StoreSerializer


class Base64BinaryField(serializers.Field):
    """Render a binary column as a base64 string (``None`` stays ``None``)."""

    def to_representation(self, value):
        return base64.b64encode(bytes(value)).decode("ascii")


class ProductStoreSerializer(serializers.ModelSerializer):
    productId = serializers.IntegerField(source="product_id", read_only=True)
    storeId = serializers.IntegerField(source="store_id", read_only=True)
    salePrice = serializers.DecimalField(
        source="sale_price",
        max_digits=13,
        decimal_places=3,
        read_only=True,
    )
    store = StoreSerializer(read_only=True)

    class Meta:
        model = ProductStore
        fields = ["id", "productId", "storeId", "salePrice", "store"]
        read_only_fields = fields


class ProductSerializer(serializers.ModelSerializer):
    image = Base64BinaryField(read_only=True)
    prices = ProductStoreSerializer(many=True, read_only=True)

    class Meta:
        model = Product
        fields = ["id", "description", "cost", "image", "prices"]
        read_only_fields = fields

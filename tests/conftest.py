from decimal import Decimal

import pytest

from rest_framework.test import APIClient

from modules.products.models import Product, ProductStore
from modules.stores.models import Store


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def stores():
    """Three persisted stores."""
    return [
        Store.objects.create(description="Loja Principal - Centro"),
        Store.objects.create(description="Loja Filial - Zona Norte"),
        Store.objects.create(description="Loja Online"),
    ]


@pytest.fixture()
def make_product():
    """Factory persisting a product with ``{store: sale_price}`` prices."""

    def _make(description="Widget", cost=Decimal("10.00"), prices=None):
        product = Product.objects.create(description=description, cost=cost)
        for store, sale_price in (prices or {}).items():
            ProductStore.objects.create(
                product=product, store=store, sale_price=Decimal(sale_price)
            )
        return product

    return _make

"""Unit tests for the product repositories.

Covers:
- ProductDjangoRepository: look-ups, eager loading, search filters,
  ordering, pagination and delete.
- ProductStoreDjangoRepository: composite key look-up, conflicts,
  bulk insert and delete.
"""

from __future__ import annotations

from decimal import Decimal

import pytest
from django.db import connection
from django.test.utils import CaptureQueriesContext

from modules.products.dtos import ProductFilterDTO
from modules.products.models import Product, ProductStore
from modules.products.repositories.django_repository import (
    ProductDjangoRepository,
    ProductStoreDjangoRepository,
)
from modules.products.repositories.interfaces import (
    IProductRepository,
    IProductStoreRepository,
)

pytestmark = pytest.mark.unit


@pytest.fixture()
def repo():
    return ProductDjangoRepository()


@pytest.fixture()
def price_repo():
    return ProductStoreDjangoRepository()


def _search(repo, **params):
    return repo.search(ProductFilterDTO.model_validate(params))


# ===========================================================================
# Instantiation
# ===========================================================================


class TestRepositoryInstantiation:
    def test_product_repository_implements_interface(self, repo):
        assert isinstance(repo, IProductRepository)

    def test_price_repository_implements_interface(self, price_repo):
        assert isinstance(price_repo, IProductStoreRepository)


# ===========================================================================
# ProductDjangoRepository
# ===========================================================================


class TestProductLookups:
    def test_get_by_id(self, repo, make_product):
        product = make_product()
        assert repo.get_by_id(product.id) == product

    def test_get_by_id_missing(self, repo):
        assert repo.get_by_id(999999) is None

    def test_get_with_prices_prefetches_stores(self, repo, stores, make_product):
        product = make_product(prices={stores[0]: "1.00", stores[1]: "2.00"})

        loaded = repo.get_with_prices(product.id)

        with CaptureQueriesContext(connection) as ctx:
            descriptions = [price.store.description for price in loaded.prices.all()]
        assert len(ctx.captured_queries) == 0
        assert descriptions == [stores[0].description, stores[1].description]

    def test_get_with_prices_missing(self, repo):
        assert repo.get_with_prices(123456) is None

    def test_delete(self, repo, stores, make_product):
        product = make_product(prices={stores[0]: "1.00"})
        assert repo.delete(product.id) is True
        assert not Product.objects.filter(id=product.id).exists()
        assert ProductStore.objects.count() == 0

    def test_delete_missing(self, repo):
        assert repo.delete(424242) is False


class TestProductSearch:
    def test_pagination_and_count(self, repo, make_product):
        for idx in range(5):
            make_product(description=f"Product {idx}")

        rows, count = _search(repo, page=1, limit=2)

        assert len(rows) == 2
        assert count == 5

    def test_last_page(self, repo, make_product):
        created = [make_product(description=f"Product {idx}") for idx in range(5)]

        rows, count = _search(repo, page=3, limit=2)

        assert [r.id for r in rows] == [created[4].id]
        assert count == 5

    def test_page_past_end_is_empty(self, repo, make_product):
        make_product()
        rows, count = _search(repo, page=5, limit=10)
        assert rows == []
        assert count == 1

    def test_filter_by_id(self, repo, make_product):
        make_product(description="One")
        target = make_product(description="Two")
        rows, count = _search(repo, id=target.id)
        assert [r.id for r in rows] == [target.id]
        assert count == 1

    def test_description_is_case_insensitive_substring(self, repo, make_product):
        make_product(description="Blue Widget")
        make_product(description="WIDGET pro")
        make_product(description="Gadget")
        rows, count = _search(repo, description="widget")
        assert sorted(r.description for r in rows) == ["Blue Widget", "WIDGET pro"]
        assert count == 2

    def test_filter_by_cost(self, repo, make_product):
        make_product(description="Cheap", cost=Decimal("5.00"))
        make_product(description="Pricey", cost=Decimal("50.00"))
        rows, _ = _search(repo, cost="50")
        assert [r.description for r in rows] == ["Pricey"]

    def test_filter_by_sale_price_semi_join(self, repo, stores, make_product):
        match = make_product(
            description="Match", prices={stores[0]: "15.99", stores[1]: "20.00"}
        )
        make_product(description="Other", prices={stores[0]: "9.99"})

        rows, count = _search(repo, salePrice="15.99")

        assert [r.id for r in rows] == [match.id]
        assert count == 1
        assert len(rows[0].prices.all()) == 2

    def test_filters_are_conjunctive(self, repo, stores, make_product):
        make_product(description="Widget", cost=Decimal("1.00"), prices={stores[0]: "2.00"})
        make_product(description="Widget", cost=Decimal("3.00"), prices={stores[0]: "2.00"})
        rows, count = _search(repo, description="widg", cost="3", salePrice="2")
        assert count == 1
        assert rows[0].cost == Decimal("3.000")

    def test_sort_by_description_desc(self, repo, make_product):
        for description in ("Banana", "Apple", "Cherry"):
            make_product(description=description)
        rows, _ = _search(repo, sortBy="description", sortOrder="DESC")
        assert [r.description for r in rows] == ["Cherry", "Banana", "Apple"]

    def test_sort_by_cost_asc(self, repo, make_product):
        make_product(description="B", cost=Decimal("20.00"))
        make_product(description="A", cost=Decimal("10.00"))
        rows, _ = _search(repo, sortBy="cost")
        assert [r.description for r in rows] == ["A", "B"]


# ===========================================================================
# ProductStoreDjangoRepository
# ===========================================================================


class TestProductStoreRepository:
    def test_get_by_composite_key(self, price_repo, stores, make_product):
        product = make_product(prices={stores[1]: "4.00"})
        price = price_repo.get(product.id, stores[1].id)
        assert price.sale_price == Decimal("4.000")
        assert price_repo.get(product.id, stores[0].id) is None

    def test_list_for_product(self, price_repo, stores, make_product):
        product = make_product(prices={stores[0]: "1.00", stores[2]: "3.00"})
        make_product(description="Other", prices={stores[1]: "2.00"})
        rows = price_repo.list_for_product(product.id)
        assert [r.store_id for r in rows] == [stores[0].id, stores[2].id]

    def test_existing_store_ids(self, price_repo, stores, make_product):
        product = make_product(prices={stores[0]: "1.00", stores[2]: "3.00"})
        found = price_repo.existing_store_ids(
            product.id, [stores[2].id, stores[1].id, stores[0].id]
        )
        assert found == sorted([stores[0].id, stores[2].id])

    def test_bulk_create(self, price_repo, stores, make_product):
        product = make_product()
        price_repo.bulk_create(
            [
                ProductStore(product=product, store=stores[0], sale_price=Decimal("1")),
                ProductStore(product=product, store=stores[1], sale_price=Decimal("2")),
            ]
        )
        assert product.prices.count() == 2

    def test_delete(self, price_repo, stores, make_product):
        product = make_product(prices={stores[0]: "1.00", stores[1]: "2.00"})
        rows = price_repo.list_for_product(product.id)
        assert price_repo.delete(rows[:1]) == 1
        assert [r.store_id for r in price_repo.list_for_product(product.id)] == [
            stores[1].id
        ]

    def test_delete_nothing(self, price_repo):
        assert price_repo.delete([]) == 0

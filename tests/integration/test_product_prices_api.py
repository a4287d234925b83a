"""Integration tests for the per-store price endpoints.

Covers:
- POST /api/v1/products/{id}/prices/: create, conflicts, missing refs.
- DELETE /api/v1/products/{id}/prices/{storeId}/: remove and 404.
"""

from __future__ import annotations

from decimal import Decimal

import pytest

from modules.products.models import ProductStore

pytestmark = pytest.mark.integration


def _prices_url(product_id: int) -> str:
    return f"/api/v1/products/{product_id}/prices/"


class TestAddPrice:
    def test_returns_201_with_nested_store(self, api_client, stores, make_product):
        product = make_product()

        response = api_client.post(
            _prices_url(product.id),
            {"storeId": stores[1].id, "salePrice": 12.5},
            format="json",
        )

        assert response.status_code == 201
        data = response.json()
        assert data["productId"] == product.id
        assert data["storeId"] == stores[1].id
        assert data["salePrice"] == "12.500"
        assert data["store"] == {"id": stores[1].id, "description": stores[1].description}

    def test_second_add_conflicts_and_keeps_first(self, api_client, stores, make_product):
        product = make_product()
        url = _prices_url(product.id)
        api_client.post(url, {"storeId": stores[0].id, "salePrice": 10}, format="json")

        response = api_client.post(
            url, {"storeId": stores[0].id, "salePrice": 20}, format="json"
        )

        assert response.status_code == 409
        row = ProductStore.objects.get(product=product, store=stores[0])
        assert row.sale_price == Decimal("10")

    def test_unknown_product(self, api_client, stores):
        response = api_client.post(
            _prices_url(99999), {"storeId": stores[0].id, "salePrice": 1}, format="json"
        )
        assert response.status_code == 404

    def test_unknown_store(self, api_client, make_product):
        product = make_product()
        response = api_client.post(
            _prices_url(product.id), {"storeId": 99999, "salePrice": 1}, format="json"
        )
        assert response.status_code == 404
        assert response.json()["errors"][0]["attr"] == "storeId"

    @pytest.mark.parametrize(
        "body",
        [{"storeId": 1}, {"salePrice": 1}, {"storeId": 1, "salePrice": 0}],
    )
    def test_invalid_body(self, api_client, make_product, body):
        product = make_product()
        response = api_client.post(_prices_url(product.id), body, format="json")
        assert response.status_code == 400
        assert response.json()["type"] == "validation_error"

    def test_sale_price_rounding_to_zero_returns_400(self, api_client, stores, make_product):
        product = make_product()
        response = api_client.post(
            _prices_url(product.id),
            {"storeId": stores[0].id, "salePrice": "0.004"},
            format="json",
        )
        assert response.status_code == 400
        assert not product.prices.exists()


class TestRemovePrice:
    def test_returns_204(self, api_client, stores, make_product):
        product = make_product(prices={stores[0]: "1.00", stores[1]: "2.00"})

        response = api_client.delete(f"{_prices_url(product.id)}{stores[0].id}/")

        assert response.status_code == 204
        assert list(product.prices.values_list("store_id", flat=True)) == [stores[1].id]

    def test_missing_price_returns_404(self, api_client, stores, make_product):
        product = make_product(prices={stores[0]: "1.00"})
        response = api_client.delete(f"{_prices_url(product.id)}{stores[1].id}/")
        assert response.status_code == 404
        assert response.json()["errors"][0]["detail"] == (
            f"Price for product ID {product.id} and store ID {stores[1].id} not found"
        )

    def test_remove_then_readd(self, api_client, stores, make_product):
        product = make_product(prices={stores[0]: "1.00"})
        api_client.delete(f"{_prices_url(product.id)}{stores[0].id}/")
        response = api_client.post(
            _prices_url(product.id),
            {"storeId": stores[0].id, "salePrice": 3},
            format="json",
        )
        assert response.status_code == 201

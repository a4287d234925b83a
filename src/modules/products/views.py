"""Product API views.

Exposes the ``ProductService`` via HTTP using a DRF ViewSet.
Request bodies are turned into pydantic DTOs here; domain exceptions
raised by the service propagate to the project exception handler,
which maps them to 400 / 404 / 409 responses.

Create and update accept either JSON (``image`` as base64) or
multipart form data (``image`` as an uploaded file and ``prices`` as
a JSON-encoded string).
"""

from __future__ import annotations

import base64
import binascii
import json
from collections.abc import Mapping
from typing import Any, Dict

from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.exceptions import ParseError
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from modules.core.exceptions import DomainValidationError, validation_error_response
from modules.products.dtos import (
    CreateProductDTO,
    ProductFilterDTO,
    ProductPriceDTO,
    UpdateProductDTO,
)
from modules.products.repositories.django_repository import (
    ProductDjangoRepository,
    ProductStoreDjangoRepository,
)
from modules.products.serializers import ProductSerializer, ProductStoreSerializer
from modules.products.services import ProductService
from modules.stores.repositories.django_repository import StoreDjangoRepository

PRODUCT_FIELDS = ("description", "cost", "prices")


def _read_image(request: Request) -> bytes | None:
    upload = request.FILES.get("image")
    if upload is not None:
        return upload.read()

    raw = request.data.get("image")
    if raw in (None, ""):
        return None
    try:
        return base64.b64decode(raw, validate=True)
    except (binascii.Error, TypeError, ValueError) as exc:
        raise DomainValidationError(
            "Image must be a base64 encoded string or an uploaded file.",
            attr="image",
        ) from exc


def _product_payload(request: Request) -> Dict[str, Any]:
    """Collect the product fields present in the request body."""
    data = request.data
    if not isinstance(data, Mapping):
        raise ParseError("Expected a JSON object.")

    payload = {field: data.get(field) for field in PRODUCT_FIELDS if field in data}

    prices = payload.get("prices")
    if isinstance(prices, str):
        try:
            payload["prices"] = json.loads(prices)
        except ValueError as exc:
            raise DomainValidationError(
                "Prices must be a JSON encoded list.", attr="prices"
            ) from exc

    image = _read_image(request)
    if image is not None:
        payload["image"] = image
    return payload


class ProductViewSet(ViewSet):
    """ViewSet for Product CRUD and per-store price management.

    Uses ``ProductService`` with the Django repositories (DIP).
    All ORM access goes through the service/repository layer.
    """

    lookup_value_regex = r"\d{1,18}"

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = ProductService(
            repository=ProductDjangoRepository(),
            price_repository=ProductStoreDjangoRepository(),
            store_repository=StoreDjangoRepository(),
        )

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/products/"""
        params = {
            key: value
            for key, value in request.query_params.dict().items()
            if value != ""
        }
        try:
            filters = ProductFilterDTO.model_validate(params)
        except PydanticValidationError as exc:
            return validation_error_response(exc)

        result = self._service.list_products(filters)
        return Response(
            {
                "data": ProductSerializer(result["data"], many=True).data,
                "count": result["count"],
            }
        )

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/products/{pk}/"""
        product = self._service.get_product(int(pk))
        return Response(ProductSerializer(product).data)

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/products/"""
        try:
            dto = CreateProductDTO.model_validate(_product_payload(request))
        except PydanticValidationError as exc:
            return validation_error_response(exc)

        product = self._service.create_product(dto)
        return Response(ProductSerializer(product).data, status=status.HTTP_201_CREATED)

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT/PATCH /api/v1/products/{pk}/"""
        try:
            dto = UpdateProductDTO.model_validate(_product_payload(request))
        except PydanticValidationError as exc:
            return validation_error_response(exc)

        product = self._service.update_product(int(pk), dto)
        return Response(ProductSerializer(product).data)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/products/{pk}/"""
        return self.update(request, pk)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/products/{pk}/"""
        self._service.delete_product(int(pk))
        return Response(status=status.HTTP_204_NO_CONTENT)

    # ------------------------------------------------------------------
    # Prices
    # ------------------------------------------------------------------

    @action(detail=True, methods=["post"], url_path="prices")
    def add_price(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/v1/products/{pk}/prices/"""
        if not isinstance(request.data, Mapping):
            raise ParseError("Expected a JSON object.")
        try:
            dto = ProductPriceDTO.model_validate(dict(request.data.items()))
        except PydanticValidationError as exc:
            return validation_error_response(exc)

        price = self._service.add_price(int(pk), dto)
        return Response(
            ProductStoreSerializer(price).data, status=status.HTTP_201_CREATED
        )

    @action(
        detail=True,
        methods=["delete"],
        url_path=r"prices/(?P<store_id>\d{1,18})",
        url_name="remove-price",
    )
    def remove_price(
        self, request: Request, pk: str | None = None, store_id: str | None = None
    ) -> Response:
        """DELETE /api/v1/products/{pk}/prices/{store_id}/"""
        self._service.remove_price(int(pk), int(store_id))
        return Response(status=status.HTTP_204_NO_CONTENT)

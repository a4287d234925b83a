"""Store API views."""

from __future__ import annotations

from collections.abc import Mapping

from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.exceptions import ParseError
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from modules.core.exceptions import validation_error_response
from modules.stores.dtos import CreateStoreDTO
from modules.stores.repositories.django_repository import StoreDjangoRepository
from modules.stores.serializers import StoreSerializer
from modules.stores.services import StoreService


class StoreViewSet(ViewSet):
    """List, retrieve and create stores through ``StoreService``."""

    lookup_value_regex = r"\d{1,18}"

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = StoreService(repository=StoreDjangoRepository())

    def list(self, request: Request) -> Response:
        """GET /api/v1/stores/"""
        stores = self._service.list_stores()
        return Response(StoreSerializer(stores, many=True).data)

    def create(self, request: Request) -> Response:
        """POST /api/v1/stores/"""
        if not isinstance(request.data, Mapping):
            raise ParseError("Expected a JSON object.")
        try:
            dto = CreateStoreDTO(description=request.data.get("description"))
        except PydanticValidationError as exc:
            return validation_error_response(exc)

        store = self._service.create_store(dto)
        return Response(StoreSerializer(store).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/stores/{id}/"""
        store = self._service.get_store(int(pk))
        return Response(StoreSerializer(store).data)

"""Unit tests for the stores module.

Covers:
- CreateStoreDTO: stripping and length bounds.
- StoreDjangoRepository: ordering and missing_ids.
- StoreService: list, get, create.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from pydantic import ValidationError

from modules.stores.dtos import CreateStoreDTO
from modules.stores.exceptions import StoreNotFound
from modules.stores.models import Store
from modules.stores.repositories.django_repository import StoreDjangoRepository
from modules.stores.services import StoreService

pytestmark = pytest.mark.unit


# ===========================================================================
# CreateStoreDTO
# ===========================================================================


class TestCreateStoreDTO:
    def test_strips_description(self):
        assert CreateStoreDTO(description="  Loja Online ").description == "Loja Online"

    @pytest.mark.parametrize("description", ["", "   ", "s" * 101, None])
    def test_rejects_invalid_description(self, description):
        with pytest.raises(ValidationError):
            CreateStoreDTO(description=description)

    def test_max_length_accepted(self):
        assert len(CreateStoreDTO(description="s" * 100).description) == 100


# ===========================================================================
# StoreDjangoRepository
# ===========================================================================


class TestStoreDjangoRepository:
    def test_list_ordered_by_id(self, stores):
        repo = StoreDjangoRepository()
        assert [s.id for s in repo.list()] == [s.id for s in stores]

    def test_get_by_id(self, stores):
        repo = StoreDjangoRepository()
        assert repo.get_by_id(stores[1].id) == stores[1]
        assert repo.get_by_id(987654) is None

    def test_missing_ids(self, stores):
        repo = StoreDjangoRepository()
        assert repo.missing_ids([stores[0].id, 987654, 987655]) == {987654, 987655}

    def test_missing_ids_all_present(self, stores):
        repo = StoreDjangoRepository()
        assert repo.missing_ids(s.id for s in stores) == set()

    def test_missing_ids_empty_input(self):
        assert StoreDjangoRepository().missing_ids([]) == set()


# ===========================================================================
# StoreService
# ===========================================================================


class TestStoreService:
    def test_list_stores(self):
        repo = MagicMock()
        repo.list.return_value = [Store(id=1, description="A")]
        assert [s.id for s in StoreService(repository=repo).list_stores()] == [1]

    def test_get_store_not_found(self):
        repo = MagicMock()
        repo.get_by_id.return_value = None
        with pytest.raises(StoreNotFound) as exc_info:
            StoreService(repository=repo).get_store(7)
        assert exc_info.value.detail == "Stores not found: 7"
        assert exc_info.value.status_code == 404

    def test_create_store_persists(self):
        service = StoreService(repository=StoreDjangoRepository())
        store = service.create_store(CreateStoreDTO(description="Loja Nova"))
        assert store.id is not None
        assert Store.objects.get(id=store.id).description == "Loja Nova"

    def test_not_found_lists_sorted_ids(self):
        exc = StoreNotFound.for_ids({9, 3})
        assert exc.detail == "Stores not found: 3, 9"
        assert exc.attr == "storeId"

"""Store service layer (Use Cases)."""

from __future__ import annotations

from typing import TYPE_CHECKING, List

import structlog

from modules.stores.exceptions import StoreNotFound
from modules.stores.models import Store

if TYPE_CHECKING:
    from modules.stores.dtos import CreateStoreDTO
    from modules.stores.repositories.interfaces import IStoreRepository

logger = structlog.get_logger(__name__)


class StoreService:
    """Application service for Store use-cases.

    Receives an ``IStoreRepository`` via constructor injection (DIP).
    """

    def __init__(self, repository: IStoreRepository) -> None:
        self._repo = repository

    def list_stores(self) -> List[Store]:
        """Return every store; no filtering, no pagination."""
        return list(self._repo.list())

    def get_store(self, id: int) -> Store:
        """Retrieve a single store by ID.

        Raises:
            StoreNotFound: if the store does not exist.
        """
        store = self._repo.get_by_id(id)
        if not store:
            raise StoreNotFound.for_ids([id])
        return store

    def create_store(self, dto: CreateStoreDTO) -> Store:
        store = self._repo.save(Store(description=dto.description))
        logger.info("store.created", store_id=store.id)
        return store

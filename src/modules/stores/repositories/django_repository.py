"""Django ORM implementation of the Store repository."""

from __future__ import annotations

from typing import Iterable, List, Optional, Set

import structlog

from modules.stores.models import Store
from modules.stores.repositories.interfaces import IStoreRepository

logger = structlog.get_logger(__name__)


class StoreDjangoRepository(IStoreRepository):
    """Concrete Store repository backed by Django ORM."""

    def get_by_id(self, id: int) -> Optional[Store]:
        return Store.objects.filter(id=id).first()

    def list(self) -> List[Store]:
        return list(Store.objects.order_by("id"))

    def save(self, entity: Store) -> Store:
        entity.save()
        return entity

    def missing_ids(self, ids: Iterable[int]) -> Set[int]:
        wanted = set(ids)
        if not wanted:
            return set()
        found = set(
            Store.objects.filter(id__in=wanted).values_list("id", flat=True)
        )
        missing = wanted - found
        if missing:
            logger.info("store.missing", store_ids=sorted(missing))
        return missing

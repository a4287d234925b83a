"""Store repository interface."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Iterable, List, Set

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.stores.models import Store


class IStoreRepository(IRepository["Store"]):
    """Repository contract for stores."""

    @abstractmethod
    def list(self) -> List["Store"]:
        """Every store, ordered by id."""

    @abstractmethod
    def missing_ids(self, ids: Iterable[int]) -> Set[int]:
        """Return the subset of ``ids`` with no matching store."""

"""Store domain exceptions."""

from __future__ import annotations

from typing import Iterable

from modules.core.exceptions import NotFoundError


class StoreNotFound(NotFoundError):
    """One or more referenced stores do not exist."""

    @classmethod
    def for_ids(cls, store_ids: Iterable[int]) -> "StoreNotFound":
        ids = ", ".join(str(i) for i in sorted(store_ids))
        return cls(f"Stores not found: {ids}", attr="storeId")

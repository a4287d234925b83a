"""Product and price repository interfaces.

``IProductRepository`` extends ``IRepository[Product]`` with the
eager-loading and paginated look-ups used by the listing endpoints.
``IProductStoreRepository`` manages the (product, store, sale price)
associations on behalf of the product service.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Iterable, List, Optional, Sequence, Tuple

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.dtos import ProductFilterDTO
    from modules.products.models import Product, ProductStore


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product aggregate."""

    @abstractmethod
    def get_with_prices(self, id: int) -> Optional["Product"]:
        """Retrieve a product with its prices and each price's store."""

    @abstractmethod
    def search(self, filters: "ProductFilterDTO") -> Tuple[List["Product"], int]:
        """Return one page of matching products and the total match count."""

    @abstractmethod
    def delete(self, id: int) -> bool:
        """Remove a product and, through the cascade, its prices."""


class IProductStoreRepository(ABC):
    """Repository contract for product prices."""

    @abstractmethod
    def get(self, product_id: int, store_id: int) -> Optional["ProductStore"]:
        """Retrieve the price of a product in a store."""

    @abstractmethod
    def list_for_product(self, product_id: int) -> List["ProductStore"]:
        """All prices of a product, ordered by id."""

    @abstractmethod
    def existing_store_ids(
        self, product_id: int, store_ids: Iterable[int]
    ) -> List[int]:
        """Store ids among ``store_ids`` already priced for the product."""

    @abstractmethod
    def save(self, entity: "ProductStore") -> "ProductStore":
        """Persist (create or update) one price."""

    @abstractmethod
    def bulk_create(self, entities: Sequence["ProductStore"]) -> List["ProductStore"]:
        """Insert several prices at once."""

    @abstractmethod
    def delete(self, entities: Sequence["ProductStore"]) -> int:
        """Delete the given prices, returning how many rows went away."""

"""Product domain exceptions.

Raised by the Service Layer when business rules are violated.
The DRF exception handler in ``modules.core.exceptions`` translates
them into 400 / 404 / 409 responses.
"""

from __future__ import annotations

from typing import Iterable

from modules.core.exceptions import (
    ConflictError,
    DomainValidationError,
    NotFoundError,
)


class ProductNotFound(NotFoundError):
    """The requested product does not exist."""

    def __init__(self, product_id: int) -> None:
        super().__init__(f"Product with ID {product_id} not found")


class PriceNotFound(NotFoundError):
    """No price exists for the (product, store) pair."""

    def __init__(self, product_id: int, store_id: int) -> None:
        super().__init__(
            f"Price for product ID {product_id} and store ID {store_id} not found"
        )


class PricesRequired(DomainValidationError):
    """A create or update supplied an empty price list."""

    def __init__(self) -> None:
        super().__init__("At least one price must be provided", attr="prices")


class DuplicateStorePrice(ConflictError):
    """A product would end up with two prices for the same store."""

    @classmethod
    def in_request(cls) -> "DuplicateStorePrice":
        return cls("Duplicate store prices in request", attr="prices")

    @classmethod
    def existing(cls, store_ids: Iterable[int]) -> "DuplicateStorePrice":
        ids = ", ".join(str(i) for i in sorted(store_ids))
        return cls(f"Prices already exist for stores: {ids}", attr="prices")

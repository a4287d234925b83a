"""Product DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (DRF views) and the
Service layer.  DTOs are immutable (``frozen=True``) and accept the
camelCase field names of the HTTP API (``storeId``, ``salePrice``,
``sortBy`` ...) as well as their snake_case attribute names.

- ``ProductPriceDTO``: one (store, sale price) pair.
- ``CreateProductDTO``: input for product creation.
- ``UpdateProductDTO``: input for partial product updates.
- ``ProductFilterDTO``: filters, ordering and pagination for listings.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from modules.products.models import (
    DESCRIPTION_MAX_LENGTH,
    MONEY_DECIMAL_PLACES,
    MONEY_MAX_DIGITS,
)

TWO_PLACES = Decimal("0.01")
# Largest magnitude a decimal(13,3) column holds is below 10**10.
MONEY_LIMIT = Decimal(10) ** (MONEY_MAX_DIGITS - MONEY_DECIMAL_PLACES)
# Ids and offsets must fit a signed 64-bit integer column.
MAX_ID = 2**63 - 1
MAX_PAGE = 2**31
MAX_LIMIT = 1000


def round_money(value: Optional[Decimal]) -> Optional[Decimal]:
    """Round half-up to 2 decimal places; ``None`` passes through."""
    if value is None:
        return None
    return value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def money(value: Optional[Decimal], positive: bool = False) -> Optional[Decimal]:
    """Validate a monetary amount against the column bounds and round it.

    Bounds are checked on the rounded value, so ``0.004`` is not positive
    and ``9999999999.995`` overflows.
    """
    if value is None:
        return None
    if abs(value) >= MONEY_LIMIT:
        raise ValueError(f"must be less than {MONEY_LIMIT} in absolute value")
    value = round_money(value)
    if abs(value) >= MONEY_LIMIT:
        raise ValueError(f"must be less than {MONEY_LIMIT} in absolute value")
    if positive and value <= 0:
        raise ValueError("must be greater than 0 after rounding to 2 places")
    return value


_DTO_CONFIG = ConfigDict(
    frozen=True,
    populate_by_name=True,
    str_strip_whitespace=True,
)


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class ProductPriceDTO(BaseModel):
    """A sale price for one store.

    Validates:
    - ``store_id`` is a positive integer.
    - ``sale_price`` is rounded to 2 places, then must be greater than
      zero and fit the price column.
    """

    model_config = _DTO_CONFIG

    store_id: int = Field(alias="storeId", gt=0, le=MAX_ID)
    sale_price: Decimal = Field(alias="salePrice")

    @field_validator("sale_price")
    @classmethod
    def check_sale_price(cls, v: Decimal) -> Decimal:
        return money(v, positive=True)


class CreateProductDTO(BaseModel):
    """Immutable DTO for product creation requests.

    ``prices`` is required; an empty list is accepted here and rejected
    by the service, which owns the "at least one price" rule.
    """

    model_config = _DTO_CONFIG

    description: str = Field(min_length=1, max_length=DESCRIPTION_MAX_LENGTH)
    cost: Optional[Decimal] = None
    image: Optional[bytes] = None
    prices: List[ProductPriceDTO]

    @field_validator("cost")
    @classmethod
    def round_cost(cls, v: Optional[Decimal]) -> Optional[Decimal]:
        return money(v)


class UpdateProductDTO(BaseModel):
    """Immutable DTO for product update requests.

    All fields are optional; ``None`` leaves the stored value untouched.
    """

    model_config = _DTO_CONFIG

    description: Optional[str] = Field(
        default=None, min_length=1, max_length=DESCRIPTION_MAX_LENGTH
    )
    cost: Optional[Decimal] = None
    image: Optional[bytes] = None
    prices: Optional[List[ProductPriceDTO]] = None

    @field_validator("cost")
    @classmethod
    def round_cost(cls, v: Optional[Decimal]) -> Optional[Decimal]:
        return money(v)

    def scalar_changes(self) -> Dict[str, Any]:
        """Return the product columns supplied in this update."""
        changes = {
            "description": self.description,
            "cost": self.cost,
            "image": self.image,
        }
        return {field: value for field, value in changes.items() if value is not None}


class ProductFilterDTO(BaseModel):
    """Listing filters; all filters combine with AND."""

    model_config = _DTO_CONFIG

    id: Optional[int] = Field(default=None, ge=1, le=MAX_ID)
    description: Optional[str] = None
    cost: Optional[Decimal] = Field(default=None, gt=-MONEY_LIMIT, lt=MONEY_LIMIT)
    sale_price: Optional[Decimal] = Field(
        default=None, alias="salePrice", gt=-MONEY_LIMIT, lt=MONEY_LIMIT
    )
    page: int = Field(default=1, ge=1, le=MAX_PAGE)
    limit: int = Field(default=10, ge=1, le=MAX_LIMIT)
    sort_by: Literal["id", "description", "cost"] = Field(
        default="id", alias="sortBy"
    )
    sort_order: Literal["ASC", "DESC"] = Field(default="ASC", alias="sortOrder")

    @field_validator("sort_order", mode="before")
    @classmethod
    def normalise_sort_order(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def filter_data(self) -> Dict[str, Any]:
        """Filters that were actually supplied, keyed by filterset name."""
        data = {
            "id": self.id,
            "description": self.description,
            "cost": self.cost,
            "sale_price": self.sale_price,
        }
        return {key: value for key, value in data.items() if value is not None}

    def ordering(self) -> List[str]:
        prefix = "-" if self.sort_order == "DESC" else ""
        ordering = [f"{prefix}{self.sort_by}"]
        if self.sort_by != "id":
            ordering.append("id")
        return ordering

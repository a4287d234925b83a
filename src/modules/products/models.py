"""Product and per-store price models.

Business rules implemented at the storage layer:
- A product description holds at most 60 characters.
- ``cost`` and ``sale_price`` are fixed-point decimals with 3 fractional
  digits at rest (values are normalised to 2 places by the DTOs).
- A product has at most one price per store: UNIQUE (product, store).
- Deleting a product deletes its prices (CASCADE); a store referenced
  by a price cannot be deleted (PROTECT).
"""

from __future__ import annotations

import structlog
from django.db import models

from modules.stores.models import Store

logger = structlog.get_logger(__name__)

DESCRIPTION_MAX_LENGTH = 60
MONEY_MAX_DIGITS = 13
MONEY_DECIMAL_PLACES = 3


class Product(models.Model):
    """Product aggregate root; owns its ``prices``."""

    description = models.CharField(max_length=DESCRIPTION_MAX_LENGTH)
    cost = models.DecimalField(
        max_digits=MONEY_MAX_DIGITS,
        decimal_places=MONEY_DECIMAL_PLACES,
        null=True,
        blank=True,
    )
    image = models.BinaryField(null=True, blank=True)

    class Meta:
        db_table = "product"
        ordering = ["id"]

    def save(self, *args, **kwargs) -> None:
        is_new = self._state.adding
        super().save(*args, **kwargs)
        if is_new:
            logger.info(
                "product_created",
                product_id=self.id,
                description=self.description,
            )

    def __str__(self) -> str:
        return f"{self.id} - {self.description}"


class ProductStore(models.Model):
    """Sale price of one product in one store."""

    product = models.ForeignKey(
        Product,
        on_delete=models.CASCADE,
        related_name="prices",
    )
    store = models.ForeignKey(
        Store,
        on_delete=models.PROTECT,
        related_name="product_prices",
    )
    sale_price = models.DecimalField(
        max_digits=MONEY_MAX_DIGITS,
        decimal_places=MONEY_DECIMAL_PLACES,
    )

    class Meta:
        db_table = "product_store"
        ordering = ["id"]
        constraints = [
            models.UniqueConstraint(
                fields=["product", "store"],
                name="product_store_unique",
            ),
        ]

    def __str__(self) -> str:
        return f"product={self.product_id} store={self.store_id} price={self.sale_price}"

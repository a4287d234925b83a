"""Store model.

A store is a physical or virtual point of sale referenced by product
price associations.  Stores are created through the API and are never
updated or deleted there.
"""

from __future__ import annotations

import structlog
from django.db import models

logger = structlog.get_logger(__name__)

DESCRIPTION_MAX_LENGTH = 100


class Store(models.Model):
    description = models.CharField(max_length=DESCRIPTION_MAX_LENGTH)

    class Meta:
        db_table = "store"
        ordering = ["id"]

    def save(self, *args, **kwargs) -> None:
        is_new = self._state.adding
        super().save(*args, **kwargs)
        if is_new:
            logger.info(
                "store_created",
                store_id=self.id,
                description=self.description,
            )

    def __str__(self) -> str:
        return f"{self.id} - {self.description}"

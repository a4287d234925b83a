"""Django ORM implementations of the product repositories.

Error handling follows the Null Object pattern: look-ups return
``None`` instead of raising, and the Service Layer decides how to
translate a missing entity into a domain error.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple

import structlog
from django.db.models import Prefetch, QuerySet

from modules.products.dtos import ProductFilterDTO
from modules.products.filters import ProductFilter
from modules.products.models import Product, ProductStore
from modules.products.repositories.interfaces import (
    IProductRepository,
    IProductStoreRepository,
)

logger = structlog.get_logger(__name__)


def _with_prices(queryset: QuerySet) -> QuerySet:
    prices = ProductStore.objects.select_related("store").order_by("id")
    return queryset.prefetch_related(Prefetch("prices", queryset=prices))


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    def get_by_id(self, id: int) -> Optional[Product]:
        return Product.objects.filter(id=id).first()

    def get_with_prices(self, id: int) -> Optional[Product]:
        return _with_prices(Product.objects.filter(id=id)).first()

    def search(self, filters: ProductFilterDTO) -> Tuple[List[Product], int]:
        """Filter, order and paginate products.

        ``count`` is computed before slicing so it reflects every match.
        """
        queryset = ProductFilter(
            data=filters.filter_data(),
            queryset=Product.objects.all(),
        ).qs
        count = queryset.count()
        page = _with_prices(queryset.order_by(*filters.ordering()))
        rows = list(page[filters.offset : filters.offset + filters.limit])
        return rows, count

    def save(self, entity: Product) -> Product:
        entity.save()
        logger.info("product.saved", product_id=entity.id)
        return entity

    def delete(self, id: int) -> bool:
        """Hard-delete a product; its prices go with it (CASCADE)."""
        deleted, per_model = Product.objects.filter(id=id).delete()
        if not deleted:
            return False
        logger.info(
            "product.deleted",
            product_id=id,
            prices_deleted=per_model.get(ProductStore._meta.label, 0),
        )
        return True


class ProductStoreDjangoRepository(IProductStoreRepository):
    """Concrete price repository backed by Django ORM."""

    def get(self, product_id: int, store_id: int) -> Optional[ProductStore]:
        return (
            ProductStore.objects.select_related("store")
            .filter(product_id=product_id, store_id=store_id)
            .first()
        )

    def list_for_product(self, product_id: int) -> List[ProductStore]:
        return list(ProductStore.objects.filter(product_id=product_id).order_by("id"))

    def existing_store_ids(
        self, product_id: int, store_ids: Iterable[int]
    ) -> List[int]:
        return list(
            ProductStore.objects.filter(
                product_id=product_id, store_id__in=list(store_ids)
            )
            .order_by("store_id")
            .values_list("store_id", flat=True)
        )

    def save(self, entity: ProductStore) -> ProductStore:
        entity.save()
        logger.info(
            "product_store.saved",
            product_id=entity.product_id,
            store_id=entity.store_id,
            sale_price=str(entity.sale_price),
        )
        return entity

    def bulk_create(self, entities: Sequence[ProductStore]) -> List[ProductStore]:
        created = ProductStore.objects.bulk_create(list(entities))
        logger.info("product_store.bulk_created", count=len(created))
        return created

    def delete(self, entities: Sequence[ProductStore]) -> int:
        ids = [entity.id for entity in entities]
        if not ids:
            return 0
        deleted, _ = ProductStore.objects.filter(id__in=ids).delete()
        logger.info("product_store.deleted", price_ids=ids)
        return deleted

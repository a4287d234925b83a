"""Product service layer (Use Cases).

Orchestrates business logic for the Product aggregate and its per-store
prices, delegating persistence to injected repositories.

Business rules enforced here:
- A product is created with at least one price.
- A product has at most one price per store, both within a request and
  against the prices already stored.
- Prices may only reference existing stores.
- An update carrying ``prices`` synchronises the stored prices with the
  supplied list: missing stores are removed, known stores are updated in
  place and new stores are added.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, List, Sequence

import structlog
from django.db import transaction

from modules.products.exceptions import (
    DuplicateStorePrice,
    PriceNotFound,
    PricesRequired,
    ProductNotFound,
)
from modules.products.models import Product, ProductStore
from modules.stores.exceptions import StoreNotFound

if TYPE_CHECKING:
    from modules.products.dtos import (
        CreateProductDTO,
        ProductFilterDTO,
        ProductPriceDTO,
        UpdateProductDTO,
    )
    from modules.products.repositories.interfaces import (
        IProductRepository,
        IProductStoreRepository,
    )
    from modules.stores.repositories.interfaces import IStoreRepository

logger = structlog.get_logger(__name__)


class ProductService:
    """Application service for Product use-cases.

    Receives its repositories via constructor injection (DIP).
    """

    def __init__(
        self,
        repository: IProductRepository,
        price_repository: IProductStoreRepository,
        store_repository: IStoreRepository,
    ) -> None:
        self._repo = repository
        self._prices = price_repository
        self._stores = store_repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_product(self, dto: CreateProductDTO) -> Product:
        """Create a product together with its prices.

        Every check runs before the product row is written and the whole
        operation shares one transaction, so a rejected request leaves
        nothing behind.

        Raises:
            PricesRequired: if ``dto.prices`` is empty.
            DuplicateStorePrice: if two prices target the same store.
            StoreNotFound: if a price references an unknown store.
        """
        if not dto.prices:
            raise PricesRequired()
        self._check_price_list(dto.prices)

        product = self._repo.save(
            Product(description=dto.description, cost=dto.cost, image=dto.image)
        )
        log = logger.bind(product_id=product.id)

        self.add_prices(product, dto.prices)
        log.info("product.created", prices=len(dto.prices))
        return self.get_product(product.id)

    @transaction.atomic
    def update_product(self, id: int, dto: UpdateProductDTO) -> Product:
        """Apply a partial update and, if given, synchronise the prices.

        Raises:
            ProductNotFound: if the product does not exist.
            PricesRequired: if ``dto.prices`` is an empty list.
            DuplicateStorePrice: if two prices target the same store.
            StoreNotFound: if a price references an unknown store.
        """
        product = self._repo.get_by_id(id)
        if not product:
            raise ProductNotFound(id)

        log = logger.bind(product_id=id)

        changes = dto.scalar_changes()
        if changes:
            for field, value in changes.items():
                setattr(product, field, value)
            product = self._repo.save(product)
            log.info("product.updated", fields=sorted(changes))

        if dto.prices is not None:
            self._sync_prices(product, dto.prices)

        return self.get_product(id)

    @transaction.atomic
    def delete_product(self, id: int) -> None:
        """Delete a product; its prices are removed by the cascade.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        if not self._repo.get_by_id(id):
            raise ProductNotFound(id)
        self._repo.delete(id)
        logger.info("product.removed", product_id=id)

    @transaction.atomic
    def add_price(self, id: int, dto: ProductPriceDTO) -> ProductStore:
        """Add a price for one store.

        Raises:
            ProductNotFound: if the product does not exist.
            StoreNotFound: if the store does not exist.
            DuplicateStorePrice: if the store already has a price.
        """
        product = self._repo.get_by_id(id)
        if not product:
            raise ProductNotFound(id)

        missing = self._stores.missing_ids([dto.store_id])
        if missing:
            raise StoreNotFound.for_ids(missing)

        if self._prices.get(id, dto.store_id):
            logger.warning(
                "product_store.duplicate", product_id=id, store_id=dto.store_id
            )
            raise DuplicateStorePrice("A price for this store already exists")

        price = self._prices.save(
            ProductStore(product=product, store_id=dto.store_id, sale_price=dto.sale_price)
        )
        logger.info("product.price_added", product_id=id, store_id=dto.store_id)
        return price

    @transaction.atomic
    def remove_price(self, product_id: int, store_id: int) -> None:
        """Remove the price of a product in a store.

        Raises:
            PriceNotFound: if there is no such price.
        """
        price = self._prices.get(product_id, store_id)
        if not price:
            raise PriceNotFound(product_id, store_id)
        self._prices.delete([price])
        logger.info(
            "product.price_removed", product_id=product_id, store_id=store_id
        )

    def add_prices(
        self, product: Product, prices: Sequence[ProductPriceDTO]
    ) -> List[ProductStore]:
        """Insert prices for a product after re-checking for conflicts.

        Raises:
            DuplicateStorePrice: naming every store already priced.
        """
        store_ids = [price.store_id for price in prices]
        existing = self._prices.existing_store_ids(product.id, store_ids)
        if existing:
            logger.warning(
                "product_store.duplicate", product_id=product.id, store_ids=existing
            )
            raise DuplicateStorePrice.existing(existing)

        return self._prices.bulk_create(
            [
                ProductStore(
                    product=product,
                    store_id=price.store_id,
                    sale_price=price.sale_price,
                )
                for price in prices
            ]
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_products(self, filters: ProductFilterDTO) -> Dict[str, object]:
        """Return ``{"data": [...], "count": N}`` for one page of products."""
        rows, count = self._repo.search(filters)
        return {"data": rows, "count": count}

    def get_product(self, id: int) -> Product:
        """Retrieve a product with its prices and their stores.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        product = self._repo.get_with_prices(id)
        if not product:
            raise ProductNotFound(id)
        return product

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _check_price_list(self, prices: Sequence[ProductPriceDTO]) -> None:
        store_ids = [price.store_id for price in prices]
        if len(store_ids) != len(set(store_ids)):
            raise DuplicateStorePrice.in_request()

        missing = self._stores.missing_ids(store_ids)
        if missing:
            raise StoreNotFound.for_ids(missing)

    def _sync_prices(self, product: Product, prices: Sequence[ProductPriceDTO]) -> None:
        """Make the stored prices of ``product`` match ``prices``.

        Rows for stores absent from ``prices`` are deleted, as are rows
        whose store no longer exists.  Remaining rows get the new sale
        price; stores without a row get a new one.
        """
        if not prices:
            raise PricesRequired()
        self._check_price_list(prices)

        log = logger.bind(product_id=product.id)
        wanted = {price.store_id: price for price in prices}

        existing = self._prices.list_for_product(product.id)
        # Store FKs are PROTECT, so orphans only come from edits made outside
        # the ORM; they are dropped with a warning instead of failing the sync.
        orphaned = self._stores.missing_ids({row.store_id for row in existing})

        kept: Dict[int, ProductStore] = {}
        to_remove: List[ProductStore] = []
        for row in existing:
            if row.store_id in orphaned:
                log.warning(
                    "product_store.orphan_removed",
                    price_id=row.id,
                    store_id=row.store_id,
                )
                to_remove.append(row)
            elif row.store_id not in wanted:
                to_remove.append(row)
            else:
                kept[row.store_id] = row

        self._prices.delete(to_remove)

        new_prices: List[ProductPriceDTO] = []
        for store_id, price in wanted.items():
            row = kept.get(store_id)
            if row is None:
                new_prices.append(price)
            elif row.sale_price != price.sale_price:
                row.sale_price = price.sale_price
                self._prices.save(row)

        if new_prices:
            self.add_prices(product, new_prices)

        log.info(
            "product.prices_synced",
            removed=len(to_remove),
            updated=len(kept),
            added=len(new_prices),
        )

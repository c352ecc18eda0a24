"""Business operations on products and categories, with read-through caching."""

from __future__ import annotations

import threading
from collections.abc import Callable
from dataclasses import dataclass

from .logger import get_logger
from .models import Product, ProductCategory, SearchProductParameter
from .repository import ProductRepository

BackgroundRunner = Callable[[Callable[[], None]], None]


def _start_thread(task: Callable[[], None]) -> None:
    threading.Thread(target=task, name="product-cache-writer", daemon=True).start()


@dataclass
class ProductService:
    """Product operations on top of a repository.

    ``run_in_background`` schedules work that the caller should not wait for,
    such as refreshing the cache after a miss; by default it starts a thread.
    """

    product_repository: ProductRepository
    run_in_background: BackgroundRunner = _start_thread

    def get_product_by_id(self, product_id: int) -> Product:
        """Return the product from the cache, or from the database on a miss.

        After a miss the product is written back to the cache in the background.
        """
        try:
            cached = self.product_repository.get_product_by_id_from_redis(product_id)
        except Exception as exc:
            get_logger().error(
                "product_repository.get_product_by_id_from_redis got error %s",
                exc,
                extra={"fields": {"productID": product_id}},
            )
            cached = None

        if cached is not None and cached.id != 0:
            return cached

        product = self.product_repository.find_product_by_id(product_id)
        self.run_in_background(lambda: self._cache_product(product, product_id))
        return product

    def _cache_product(self, product: Product, product_id: int) -> None:
        try:
            self.product_repository.set_product_by_id(product, product_id)
        except Exception as exc:
            get_logger().error(
                "product_repository.set_product_by_id got error %s",
                exc,
                extra={"fields": {"productID": product_id}},
            )

    def get_product_category_by_id(self, product_category_id: int) -> ProductCategory:
        return self.product_repository.find_product_category_by_id(product_category_id)

    def create_new_product(self, param: Product) -> int:
        return self.product_repository.insert_new_product(param)

    def create_new_product_category(self, param: ProductCategory) -> int:
        return self.product_repository.insert_new_product_category(param)

    def update_product(self, param: Product) -> Product:
        return self.product_repository.update_product(param)

    def update_product_category(self, param: ProductCategory) -> ProductCategory:
        return self.product_repository.update_product_category(param)

    def delete_product_by_id(self, product_id: int) -> None:
        self.product_repository.delete_product(product_id)

    def delete_product_category_by_id(self, product_category_id: int) -> None:
        self.product_repository.delete_product_category(product_category_id)

    def search_product(self, param: SearchProductParameter) -> tuple[list[Product], int]:
        return self.product_repository.search_product(param)
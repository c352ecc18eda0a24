"""Use cases exposed to the HTTP layer."""

from __future__ import annotations

from dataclasses import dataclass

from .logger import get_logger
from .models import Product, ProductCategory, SearchProductParameter
from .service import ProductService


@dataclass
class ProductUsecase:
    product_service: ProductService

    def get_product_by_id(self, product_id: int) -> Product:
        return self.product_service.get_product_by_id(product_id)

    def get_product_category_by_id(self, product_category_id: int) -> ProductCategory:
        return self.product_service.get_product_category_by_id(product_category_id)

    def create_new_product(self, param: Product) -> int:
        try:
            return self.product_service.create_new_product(param)
        except Exception as exc:
            get_logger().error(
                "product_service.create_new_product got error %s",
                exc,
                extra={"fields": {"name": param.name, "category": param.category_id}},
            )
            raise

    def create_new_product_category(self, param: ProductCategory) -> int:
        try:
            return self.product_service.create_new_product_category(param)
        except Exception as exc:
            get_logger().error(
                "product_service.create_new_product_category got error %s",
                exc,
                extra={"fields": {"name": param.name}},
            )
            raise

    def edit_product(self, param: Product) -> Product:
        return self.product_service.update_product(param)

    def edit_product_category(self, param: ProductCategory) -> ProductCategory:
        return self.product_service.update_product_category(param)

    def delete_product(self, product_id: int) -> None:
        self.product_service.delete_product_by_id(product_id)

    def delete_product_category(self, product_category_id: int) -> None:
        self.product_service.delete_product_category_by_id(product_category_id)

    def search_product(self, param: SearchProductParameter) -> tuple[list[Product], int]:
        return self.product_service.search_product(param)
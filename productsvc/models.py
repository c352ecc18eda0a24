"""Domain models and request/response shapes for the product service."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict, dataclass, field
from typing import Any


def _check(key: str, value: Any, kind: type) -> Any:
    if kind is float:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
    elif kind is int:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    elif isinstance(value, kind):
        return value
    raise ValueError(
        f"field {key!r}: expected {kind.__name__}, got {type(value).__name__}"
    )


def _decode(data: Any, spec: dict[str, type]) -> dict[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")
    return {
        key: _check(key, data[key], kind)
        for key, kind in spec.items()
        if data.get(key) is not None
    }


_PRODUCT_FIELDS = {
    "id": int,
    "name": str,
    "description": str,
    "price": float,
    "stock": int,
    "category_id": int,
}
_CATEGORY_FIELDS = {"id": int, "name": str}
_ACTION_FIELDS = {"action": str}


@dataclass
class Product:
    id: int = 0
    name: str = ""
    description: str = ""
    price: float = 0.0
    stock: int = 0
    category_id: int = 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Product:
        """Build a product from decoded JSON, rejecting mistyped fields."""
        return cls(**_decode(data, _PRODUCT_FIELDS))


@dataclass
class ProductCategory:
    id: int = 0
    name: str = ""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ProductCategory:
        """Build a category from decoded JSON, rejecting mistyped fields."""
        return cls(**_decode(data, _CATEGORY_FIELDS))


@dataclass
class ProductManagementParameter:
    action: str = ""
    product: Product = field(default_factory=Product)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ProductManagementParameter:
        """Read the action and the product fields from one flat JSON object."""
        action = _decode(data, _ACTION_FIELDS).get("action", "")
        return cls(action=action, product=Product.from_dict(data))


@dataclass
class ProductCategoryManagementParameter:
    action: str = ""
    product_category: ProductCategory = field(default_factory=ProductCategory)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ProductCategoryManagementParameter:
        """Read the action and the category fields from one flat JSON object."""
        action = _decode(data, _ACTION_FIELDS).get("action", "")
        return cls(action=action, product_category=ProductCategory.from_dict(data))


@dataclass
class SearchProductParameter:
    name: str = ""
    category: str = ""
    min_price: float = 0.0
    max_price: float = 0.0
    page: int = 0
    page_size: int = 0
    order_by: str = ""
    sort: str = ""


@dataclass
class SearchProductResponse:
    products: list[Product] = field(default_factory=list)
    page: int = 0
    page_size: int = 0
    total_count: int = 0
    total_pages: int = 0
    next_page_url: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "products": [product.to_dict() for product in self.products],
            "page": self.page,
            "page_size": self.page_size,
            "total_count": self.total_count,
            "total_pages": self.total_pages,
            "next_page_url": self.next_page_url,
        }
"""Persistence for products and categories: SQL storage plus a Redis cache."""

from __future__ import annotations

import dataclasses
import json
from dataclasses import dataclass
from datetime import timedelta
from typing import Any

from sqlalchemy import (
    BigInteger,
    Column,
    Float,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    and_,
    delete,
    func,
    insert,
    select,
    text,
    update,
)
from sqlalchemy.engine import Engine

from .models import Product, ProductCategory, SearchProductParameter

_ID_TYPE = BigInteger().with_variant(Integer, "sqlite")

_metadata = MetaData()

_category = Table(
    "product_category",
    _metadata,
    Column("id", _ID_TYPE, primary_key=True, autoincrement=True),
    Column("name", String(255), nullable=False, default=""),
)

_product = Table(
    "product",
    _metadata,
    Column("id", _ID_TYPE, primary_key=True, autoincrement=True),
    Column("name", String(255), nullable=False, default=""),
    Column("description", Text, nullable=False, default=""),
    Column("price", Float, nullable=False, default=0.0),
    Column("stock", Integer, nullable=False, default=0),
    Column("category_id", BigInteger, nullable=False, default=0),
)

_PRODUCT_CACHE_TTL = timedelta(minutes=5)
_CATEGORY_CACHE_TTL = timedelta(minutes=1)
_SORT_ORDERS = ("ASC", "DESC")
_DEFAULT_ORDER_BY = "product.name"


class RecordNotFoundError(LookupError):
    """Raised when a looked-up record does not exist."""

    def __init__(self, message: str = "record not found") -> None:
        super().__init__(message)


def create_schema(engine: Engine) -> None:
    """Create the product and product_category tables if they are missing."""
    _metadata.create_all(engine)


def _product_key(product_id: int) -> str:
    return f"product:{product_id}"


def _category_key(product_category_id: int) -> str:
    return f"product_category:{product_category_id}"


def _to_json(data: dict[str, Any]) -> str:
    return json.dumps(data, separators=(",", ":"))


@dataclass
class ProductRepository:
    redis: Any
    database: Engine

    # --- database -------------------------------------------------------

    def _find(self, table: Table, record_id: int) -> dict[str, Any]:
        stmt = (
            select(table)
            .where(table.c.id == record_id)
            .order_by(table.c.id.desc())
            .limit(1)
        )
        with self.database.connect() as conn:
            row = conn.execute(stmt).mappings().first()
        if row is None:
            raise RecordNotFoundError()
        return dict(row)

    def _insert(self, table: Table, values: dict[str, Any]) -> int:
        if not values.get("id"):
            values = {key: value for key, value in values.items() if key != "id"}
        with self.database.begin() as conn:
            result = conn.execute(insert(table).values(**values))
            return result.inserted_primary_key[0]

    def _save(self, table: Table, values: dict[str, Any]) -> int:
        record_id = values.get("id")
        if not record_id:
            return self._insert(table, values)
        changes = {key: value for key, value in values.items() if key != "id"}
        with self.database.begin() as conn:
            result = conn.execute(
                update(table).where(table.c.id == record_id).values(**changes)
            )
            if result.rowcount == 0:
                conn.execute(insert(table).values(**values))
        return record_id

    def _delete(self, table: Table, record_id: int) -> None:
        with self.database.begin() as conn:
            conn.execute(delete(table).where(table.c.id == record_id))

    def find_product_by_id(self, product_id: int) -> Product:
        return Product(**self._find(_product, product_id))

    def find_product_category_by_id(self, product_category_id: int) -> ProductCategory:
        return ProductCategory(**self._find(_category, product_category_id))

    def insert_new_product(self, product: Product) -> int:
        return self._insert(_product, product.to_dict())

    def insert_new_product_category(self, product_category: ProductCategory) -> int:
        return self._insert(_category, product_category.to_dict())

    def update_product(self, product: Product) -> Product:
        """Save every field of the product, creating it if it does not exist."""
        return dataclasses.replace(product, id=self._save(_product, product.to_dict()))

    def update_product_category(self, product_category: ProductCategory) -> ProductCategory:
        """Save the category, creating it if it does not exist."""
        new_id = self._save(_category, product_category.to_dict())
        return dataclasses.replace(product_category, id=new_id)

    def delete_product(self, product_id: int) -> None:
        self._delete(_product, product_id)

    def delete_product_category(self, product_category_id: int) -> None:
        self._delete(_category, product_category_id)

    def search_product(self, param: SearchProductParameter) -> tuple[list[Product], int]:
        """Filter, order and paginate products; return the page and the total match count."""
        joined = _product.join(_category, _category.c.id == _product.c.category_id)

        conditions = []
        if param.name:
            conditions.append(_product.c.name.ilike(f"%{param.name}%"))
        if param.category:
            conditions.append(_category.c.name == param.category)
        if param.min_price > 0:
            conditions.append(_product.c.price >= param.min_price)
        if param.max_price > 0:
            conditions.append(_product.c.price <= param.max_price)

        count_stmt = select(func.count()).select_from(joined)
        stmt = select(_product).select_from(joined)
        if conditions:
            count_stmt = count_stmt.where(and_(*conditions))
            stmt = stmt.where(and_(*conditions))

        order_by = param.order_by or _DEFAULT_ORDER_BY
        sort = param.sort if param.sort in _SORT_ORDERS else "ASC"
        stmt = stmt.order_by(text(f"{order_by} {sort}"))

        if param.page_size >= 0:
            stmt = stmt.limit(param.page_size)
        offset = (param.page - 1) * param.page_size
        if offset > 0:
            stmt = stmt.offset(offset)

        with self.database.connect() as conn:
            total = conn.execute(count_stmt).scalar_one()
            rows = conn.execute(stmt).mappings().all()
        return [Product(**dict(row)) for row in rows], int(total)

    # --- cache ----------------------------------------------------------

    def get_product_by_id_from_redis(self, product_id: int) -> Product:
        """Return the cached product, or an empty product (id 0) on a cache miss."""
        raw = self.redis.get(_product_key(product_id))
        if raw is None:
            return Product()
        data = json.loads(raw)
        return Product() if data is None else Product.from_dict(data)

    def get_product_category_by_id_from_redis(
        self, product_category_id: int
    ) -> ProductCategory | None:
        """Return the cached category, or None on a cache miss."""
        raw = self.redis.get(_category_key(product_category_id))
        if raw is None:
            return None
        data = json.loads(raw)
        return ProductCategory() if data is None else ProductCategory.from_dict(data)

    def set_product_by_id(self, product: Product, product_id: int) -> None:
        self.redis.setex(_product_key(product_id), _PRODUCT_CACHE_TTL, _to_json(product.to_dict()))

    def set_product_category_by_id(
        self, product_category: ProductCategory, product_category_id: int
    ) -> None:
        self.redis.setex(
            _category_key(product_category_id),
            _CATEGORY_CACHE_TTL,
            _to_json(product_category.to_dict()),
        )
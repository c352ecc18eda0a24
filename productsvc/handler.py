"""HTTP handlers for product and product-category endpoints."""

from __future__ import annotations

import json
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from flask import abort, jsonify, request
from flask.wrappers import Response

from .logger import get_logger
from .models import (
    ProductCategoryManagementParameter,
    ProductManagementParameter,
    SearchProductParameter,
    SearchProductResponse,
)
from .usecase import ProductUsecase

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_INT_PATTERN = re.compile(r"[+-]?[0-9]+")


def _reply(status: int, **payload: Any) -> Response:
    response = jsonify(payload)
    response.status_code = status
    return response


def _parse_int64(text: str) -> int:
    """Parse a base-10 signed 64-bit integer, strictly (no spaces or underscores)."""
    if not _INT_PATTERN.fullmatch(text):
        raise ValueError(f"invalid syntax: {text!r}")
    value = int(text)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise ValueError(f"value out of range: {text!r}")
    return value


def _atoi(text: str) -> int:
    """Parse an integer, yielding 0 on bad syntax and clamping out-of-range values."""
    if not _INT_PATTERN.fullmatch(text):
        return 0
    try:
        value = int(text)
    except ValueError:
        return 0
    return max(_INT64_MIN, min(_INT64_MAX, value))


def _parse_float(text: str) -> float:
    """Parse a float, yielding 0.0 when the text is not a number."""
    if not text or text != text.strip() or "_" in text:
        return 0.0
    try:
        return float(text)
    except ValueError:
        return 0.0


def _div_trunc(numerator: int, denominator: int) -> int:
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator >= 0) == (denominator >= 0) else -quotient


def _parse_product(data: Any) -> tuple[str, Any]:
    param = ProductManagementParameter.from_dict(data)
    return param.action, param.product


def _parse_category(data: Any) -> tuple[str, Any]:
    param = ProductCategoryManagementParameter.from_dict(data)
    return param.action, param.product_category


@dataclass(frozen=True)
class _Managed:
    label: str
    key: str
    parse: Callable[[Any], tuple[str, Any]]
    create: Callable[[Any], int]
    edit: Callable[[Any], Any]
    delete: Callable[[int], None]


@dataclass
class ProductHandler:
    """Flask view functions for the product API."""

    product_usecase: ProductUsecase

    # --- product category -------------------------------------------------

    def get_product_category_by_id(self, id: str) -> Response:
        return self._fetch(
            id,
            invalid_message="Invalid Product Category ID",
            log_key="productCategoryID",
            key="product_category",
            fetch=self.product_usecase.get_product_category_by_id,
        )

    def product_category_management(self) -> Response:
        return self._manage(
            _Managed(
                label="product category",
                key="product_category",
                parse=_parse_category,
                create=self.product_usecase.create_new_product_category,
                edit=self.product_usecase.edit_product_category,
                delete=self.product_usecase.delete_product_category,
            )
        )

    # --- product ------------------------------------------------------------

    def get_product_by_id(self, id: str) -> Response:
        return self._fetch(
            id,
            invalid_message="Invalid Product ID",
            log_key="productID",
            key="product",
            fetch=self.product_usecase.get_product_by_id,
        )

    def product_management(self) -> Response:
        return self._manage(
            _Managed(
                label="product",
                key="product",
                parse=_parse_product,
                create=self.product_usecase.create_new_product,
                edit=self.product_usecase.edit_product,
                delete=self.product_usecase.delete_product,
            )
        )

    def search_product(self) -> Response:
        args = request.args
        name = args.get("name", "")
        category = args.get("category", "")
        min_price = _parse_float(args.get("min_price", ""))
        max_price = _parse_float(args.get("max_price", ""))
        page = _atoi(args.get("page", "1"))
        page_size = _atoi(args.get("page_size", "10"))

        param = SearchProductParameter(
            name=name,
            category=category,
            min_price=min_price,
            max_price=max_price,
            page=page,
            page_size=page_size,
            order_by=args.get("order_by", ""),
            sort=args.get("sort", ""),
        )

        try:
            products, total_count = self.product_usecase.search_product(param)
        except Exception as exc:
            get_logger().error(
                "product_usecase.search_product got error %s",
                exc,
                extra={"fields": {"param": param}},
            )
            return _reply(200, error_message=str(exc))

        if page_size == 0:
            abort(500)
        total_pages = _div_trunc(total_count + page_size - 1, page_size)

        next_page_url = None
        if page < total_pages:
            next_page_url = (
                f"{request.host}/v1/product/search?name{name}&category={category}"
                f"&min_price={min_price:.0f}&max_price={max_price:.0f}"
                f"&page={page + 1}&page_size={page_size}"
            )

        result = SearchProductResponse(
            products=products,
            page=page,
            page_size=page_size,
            total_count=total_count,
            total_pages=total_pages,
            next_page_url=next_page_url,
        )
        return _reply(200, data=result.to_dict())

    # --- shared -------------------------------------------------------------

    def _fetch(
        self,
        raw_id: str,
        *,
        invalid_message: str,
        log_key: str,
        key: str,
        fetch: Callable[[int], Any],
    ) -> Response:
        log = get_logger()
        try:
            record_id = _parse_int64(raw_id)
        except ValueError as exc:
            log.error("parse id got error %s", exc, extra={"fields": {log_key: raw_id}})
            return _reply(400, error_message=invalid_message)

        try:
            record = fetch(record_id)
        except Exception as exc:
            log.error("fetch got error %s", exc, extra={"fields": {log_key: record_id}})
            return _reply(500, error_message=str(exc))

        return _reply(200, message="Success", **{key: record.to_dict()})

    def _manage(self, spec: _Managed) -> Response:
        log = get_logger()
        try:
            data = json.loads(request.get_data())
            action, entity = spec.parse({} if data is None else data)
        except ValueError as exc:
            log.error(str(exc))
            return _reply(400, error_message="Invalid Input")

        if not action:
            log.error("Missing required action parameter")
            return _reply(400, error_message="Missing required action parameter")

        fields = {"param": {"action": action, **entity.to_dict()}}

        if action in ("edit", "delete") and entity.id == 0:
            log.error("Invalid request - %s id is empty", spec.label, extra={"fields": fields})
            return _reply(400, error_message="Invalid request")

        if action == "add":
            try:
                new_id = spec.create(entity)
            except Exception as exc:
                log.error("create %s got error %s", spec.label, exc, extra={"fields": fields})
                return _reply(500, error_message=str(exc))
            return _reply(200, message=f"Successfully create new {spec.label}: {new_id}")

        if action == "edit":
            try:
                saved = spec.edit(entity)
            except Exception as exc:
                log.error("edit %s got error %s", spec.label, exc, extra={"fields": fields})
                return _reply(500, error_message=str(exc))
            return _reply(
                200,
                message=f"Successfully edit {spec.label}.",
                **{spec.key: saved.to_dict()},
            )

        if action == "delete":
            try:
                spec.delete(entity.id)
            except Exception as exc:
                log.error("delete %s got error %s", spec.label, exc, extra={"fields": fields})
                return _reply(500, error_message=str(exc))
            return _reply(200, message=f"Successfully delete {spec.label} ID {entity.id}.")

        log.error("Invalid Action")
        return _reply(400, error_message="Invalid Action")


__all__ = ["ProductHandler", "Mapping"] if False else ["ProductHandler"]
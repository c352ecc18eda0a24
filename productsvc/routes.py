"""URL routing for the product API."""

from __future__ import annotations

from flask import Flask

from .handler import ProductHandler
from .middleware import register_request_logger

_REQUEST_TIMEOUT_SECONDS = 5


def setup_routes(app: Flask, product_handler: ProductHandler) -> None:
    """Attach the request logger and every product endpoint to ``app``."""
    register_request_logger(app, _REQUEST_TIMEOUT_SECONDS)
    app.add_url_rule(
        "/v1/product",
        "product_management",
        product_handler.product_management,
        methods=["POST"],
    )
    app.add_url_rule(
        "/v1/product-category",
        "product_category_management",
        product_handler.product_category_management,
        methods=["POST"],
    )
    app.add_url_rule(
        "/v1/product/<id>",
        "get_product_by_id",
        product_handler.get_product_by_id,
        methods=["GET"],
    )
    app.add_url_rule(
        "/v1/product-category/<id>",
        "get_product_category_by_id",
        product_handler.get_product_category_by_id,
        methods=["GET"],
    )
    app.add_url_rule(
        "/v1/product/search",
        "search_product",
        product_handler.search_product,
        methods=["GET"],
    )
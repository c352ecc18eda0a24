"""Application assembly and the command that starts the server."""

from __future__ import annotations

import argparse
import sys

from flask import Flask

from .config import ConfigError, load_config
from .handler import ProductHandler
from .logger import setup_logger
from .repository import ProductRepository
from .resources import init_db, init_redis
from .routes import setup_routes
from .service import ProductService
from .usecase import ProductUsecase


def create_app(product_handler: ProductHandler) -> Flask:
    """Build the Flask application serving ``product_handler``."""
    app = Flask("productsvc")
    setup_routes(app, product_handler)
    return app


def main(argv: list[str] | None = None) -> int:
    """Load the configuration, connect to Redis and the database, and serve."""
    parser = argparse.ArgumentParser(prog="productsvc", description="Product HTTP service.")
    parser.add_argument(
        "--env-file",
        default=".env",
        help="dotenv file, or directory holding .env (default: .env)",
    )
    args = parser.parse_args(argv)

    try:
        cfg = load_config(args.env_file)
        redis_client = init_redis(cfg)
        engine = init_db(cfg)
    except (ConfigError, ConnectionError) as exc:
        print(exc, file=sys.stderr)
        return 1

    logger = setup_logger()

    repository = ProductRepository(redis=redis_client, database=engine)
    handler = ProductHandler(ProductUsecase(ProductService(repository)))
    app = create_app(handler)

    port = cfg.app.port
    try:
        port_number = int(port) if port else None
    except ValueError:
        print(f"invalid app port: {port!r}", file=sys.stderr)
        return 1

    logger.info("Server running on port: %s", port)
    app.run(host="0.0.0.0", port=port_number)
    return 0
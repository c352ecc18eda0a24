"""Connections to the database and the Redis cache."""

from __future__ import annotations

import logging

import redis
from sqlalchemy import create_engine, text
from sqlalchemy.engine import URL, Engine
from sqlalchemy.exc import SQLAlchemyError

from .config import Config, ConfigError

_log = logging.getLogger(__name__)

_POSTGRES_ALIASES = {"", "postgres", "postgresql", "pgx"}
_CONNECT_TIMEOUT_SECONDS = 5


def _port(value: str, what: str) -> int | None:
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        raise ConfigError(f"invalid {what} port: {value!r}") from None


def build_database_url(cfg: Config) -> URL:
    """Build the SQLAlchemy URL for the configured database (PostgreSQL by default)."""
    db = cfg.database
    driver = db.driver.strip().lower()
    if driver == "sqlite":
        return URL.create("sqlite", database=db.name or None)

    drivername = "postgresql" if driver in _POSTGRES_ALIASES else driver
    query = {"sslmode": "disable"} if drivername == "postgresql" else {}
    return URL.create(
        drivername,
        username=db.user or None,
        password=db.password or None,
        host=db.host or None,
        port=_port(db.port, "database"),
        database=db.name or None,
        query=query,
    )


def init_db(cfg: Config) -> Engine:
    """Create the database engine and check that a connection can be made."""
    url = build_database_url(cfg)
    try:
        engine = create_engine(url)
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except (SQLAlchemyError, ImportError) as exc:
        raise ConnectionError(f"Failed to connect to DB: {exc}") from exc
    _log.info("Connected to DB")
    return engine


def init_redis(cfg: Config) -> redis.Redis:
    """Create the Redis client and check that the server answers a ping."""
    client = redis.Redis(
        host=cfg.redis.host or "localhost",
        port=_port(cfg.redis.port, "redis") or 6379,
        password=cfg.redis.password or None,
        socket_connect_timeout=_CONNECT_TIMEOUT_SECONDS,
    )
    try:
        client.ping()
    except redis.RedisError as exc:
        raise ConnectionError(f"Failed connect to redis: {exc}") from exc
    _log.info("Connected to Redis")
    return client
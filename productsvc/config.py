"""Service configuration read from a dotenv file, overridden by the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from pathlib import Path

from dotenv import dotenv_values


class ConfigError(Exception):
    """Raised when the configuration cannot be read."""


@dataclass(frozen=True)
class AppConfig:
    port: str = ""


@dataclass(frozen=True)
class DatabaseConfig:
    driver: str = ""
    host: str = ""
    user: str = ""
    password: str = ""
    name: str = ""
    port: str = ""


@dataclass(frozen=True)
class RedisConfig:
    host: str = ""
    password: str = ""
    port: str = ""


@dataclass(frozen=True)
class JwtConfig:
    secret: str = ""


@dataclass(frozen=True)
class Config:
    app: AppConfig = field(default_factory=AppConfig)
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    redis: RedisConfig = field(default_factory=RedisConfig)
    jwt: JwtConfig = field(default_factory=JwtConfig)


# Each section reads the keys named PREFIX_<FIELD> (for example DB_HOST).
_SECTIONS = (
    ("app", AppConfig, "APP"),
    ("database", DatabaseConfig, "DB"),
    ("redis", RedisConfig, "REDIS"),
)


def _keys(cls, prefix: str) -> dict[str, str]:
    return {f.name: f"{prefix}_{f.name.upper()}" for f in fields(cls)}


def _section(cls, prefix: str, values: dict[str, str]):
    return cls(**{attr: values.get(key, "") for attr, key in _keys(cls, prefix).items()})


def load_config(path: str | os.PathLike = ".env") -> Config:
    """Load the configuration from a dotenv file (or a directory holding ``.env``).

    Environment variables take precedence over values from the file.
    """
    env_path = Path(path)
    if env_path.is_dir():
        env_path = env_path / ".env"
    if not env_path.is_file():
        raise ConfigError(f"error read config file: {env_path} not found")

    try:
        file_values = dotenv_values(env_path)
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"error read config file: {exc}") from exc

    values = {key: value or "" for key, value in file_values.items()}
    for _, cls, prefix in _SECTIONS:
        for key in _keys(cls, prefix).values():
            if key in os.environ:
                values[key] = os.environ[key]

    sections = {name: _section(cls, prefix, values) for name, cls, prefix in _SECTIONS}
    return Config(**sections)
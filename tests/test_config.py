import pytest

from productsvc.config import (
    Config,
    ConfigError,
    DatabaseConfig,
    JwtConfig,
    load_config,
)

ALL_KEYS = [
    "APP_PORT",
    "DB_DRIVER",
    "DB_HOST",
    "DB_USER",
    "DB_PASSWORD",
    "DB_NAME",
    "DB_PORT",
    "REDIS_HOST",
    "REDIS_PASSWORD",
    "REDIS_PORT",
]

ENV_TEXT = """\
APP_PORT=8080
DB_DRIVER=postgres
DB_HOST=db.example.com
DB_USER=user
DB_PASSWORD=password
DB_NAME=products
DB_PORT=5432
REDIS_HOST=cache.example.com
REDIS_PASSWORD=password
REDIS_PORT=6379
"""


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ALL_KEYS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def env_file(tmp_path):
    path = tmp_path / ".env"
    path.write_text(ENV_TEXT)
    return path


def test_load_config_reads_all_sections(env_file):
    cfg = load_config(env_file)
    assert cfg.app.port == "8080"
    assert cfg.database.driver == "postgres"
    assert cfg.database.host == "db.example.com"
    assert cfg.database.user == "user"
    assert cfg.database.password == "password"
    assert cfg.database.name == "products"
    assert cfg.database.port == "5432"
    assert cfg.redis.host == "cache.example.com"
    assert cfg.redis.password == "password"
    assert cfg.redis.port == "6379"


def test_load_config_accepts_directory(env_file):
    assert load_config(env_file.parent) == load_config(env_file)


def test_environment_overrides_file(env_file, monkeypatch):
    monkeypatch.setenv("APP_PORT", "9090")
    monkeypatch.setenv("DB_HOST", "other.example.com")
    cfg = load_config(env_file)
    assert cfg.app.port == "9090"
    assert cfg.database.host == "other.example.com"
    assert cfg.redis.host == "cache.example.com"


def test_missing_keys_are_empty(tmp_path):
    path = tmp_path / ".env"
    path.write_text("APP_PORT=8080\n")
    cfg = load_config(path)
    assert cfg.app.port == "8080"
    assert cfg.database == DatabaseConfig()
    assert cfg.jwt == JwtConfig()


def test_missing_file_raises(tmp_path):
    with pytest.raises(ConfigError):
        load_config(tmp_path / "absent.env")


def test_config_defaults_are_empty():
    cfg = Config()
    assert cfg.app.port == ""
    assert cfg.redis.port == ""
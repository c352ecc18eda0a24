import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from productsvc.app import create_app, main
from productsvc.handler import ProductHandler
from productsvc.repository import ProductRepository, create_schema
from productsvc.service import ProductService
from productsvc.usecase import ProductUsecase

_ENV_KEYS = [
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


class FakeRedis:
    def __init__(self):
        self.store = {}

    def get(self, key):
        return self.store.get(key)

    def setex(self, key, ttl, value):
        self.store[key] = value


@pytest.fixture
def handler():
    engine = create_engine(
        "sqlite://", poolclass=StaticPool, connect_args={"check_same_thread": False}
    )
    create_schema(engine)
    repo = ProductRepository(redis=FakeRedis(), database=engine)
    return ProductHandler(ProductUsecase(ProductService(repo, run_in_background=lambda t: t())))


@pytest.fixture
def clean_env(monkeypatch):
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_create_app_serves_categories(handler):
    client = create_app(handler).test_client()
    created = client.post("/v1/product-category", json={"action": "add", "name": "tools"})
    assert created.status_code == 200
    category_id = int(created.get_json()["message"].rsplit(":", 1)[1])
    fetched = client.get(f"/v1/product-category/{category_id}")
    assert fetched.get_json()["product_category"] == {"id": category_id, "name": "tools"}


def test_create_app_rejects_wrong_method(handler):
    client = create_app(handler).test_client()
    assert client.get("/v1/product").status_code == 405


def test_main_fails_without_config(tmp_path, clean_env, capsys):
    assert main(["--env-file", str(tmp_path / "missing.env")]) == 1
    assert "error read config file" in capsys.readouterr().err


def test_main_fails_when_redis_unreachable(tmp_path, clean_env, capsys):
    env_file = tmp_path / ".env"
    env_file.write_text("APP_PORT=8080\nREDIS_HOST=127.0.0.1\nREDIS_PORT=1\n")
    assert main(["--env-file", str(tmp_path)]) == 1
    assert "Failed connect to redis" in capsys.readouterr().err
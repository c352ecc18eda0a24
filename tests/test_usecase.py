import logging

import pytest
from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.pool import StaticPool

from productsvc.models import Product, ProductCategory, SearchProductParameter
from productsvc.repository import ProductRepository, RecordNotFoundError, create_schema
from productsvc.service import ProductService
from productsvc.usecase import ProductUsecase


class FakeRedis:
    def __init__(self):
        self.store = {}

    def get(self, key):
        return self.store.get(key)

    def setex(self, key, ttl, value):
        self.store[key] = value


class _Capture(logging.Handler):
    def __init__(self):
        super().__init__()
        self.records = []

    def emit(self, record):
        self.records.append(record)


def _engine(with_schema=True):
    eng = create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    if with_schema:
        create_schema(eng)
    return eng


def _usecase(engine):
    service = ProductService(ProductRepository(FakeRedis(), engine), run_in_background=lambda task: task())
    return ProductUsecase(service)


@pytest.fixture
def usecase():
    return _usecase(_engine())


@pytest.fixture
def capture():
    handler = _Capture()
    logger = logging.getLogger("productsvc")
    logger.addHandler(handler)
    yield handler
    logger.removeHandler(handler)


def test_create_and_get_product(usecase):
    cat_id = usecase.create_new_product_category(ProductCategory(name="Garden"))
    pid = usecase.create_new_product(Product(name="Rake", price=15.0, stock=2, category_id=cat_id))

    product = usecase.get_product_by_id(pid)

    assert product == Product(id=pid, name="Rake", price=15.0, stock=2, category_id=cat_id)
    assert usecase.get_product_category_by_id(cat_id).name == "Garden"


def test_edit_product_returns_saved(usecase):
    cat_id = usecase.create_new_product_category(ProductCategory(name="Garden"))
    pid = usecase.create_new_product(Product(name="Rake", category_id=cat_id))

    edited = usecase.edit_product(Product(id=pid, name="Hoe", category_id=cat_id))

    assert edited.id == pid
    assert edited.name == "Hoe"


def test_edit_category(usecase):
    cat_id = usecase.create_new_product_category(ProductCategory(name="Garden"))
    edited = usecase.edit_product_category(ProductCategory(id=cat_id, name="Yard"))
    assert edited == ProductCategory(id=cat_id, name="Yard")
    assert usecase.get_product_category_by_id(cat_id) == edited


def test_delete_product(usecase):
    cat_id = usecase.create_new_product_category(ProductCategory(name="Garden"))
    pid = usecase.create_new_product(Product(name="Rake", category_id=cat_id))

    usecase.delete_product(pid)

    with pytest.raises(RecordNotFoundError):
        usecase.get_product_by_id(pid)


def test_delete_category(usecase):
    cat_id = usecase.create_new_product_category(ProductCategory(name="Garden"))
    usecase.delete_product_category(cat_id)
    with pytest.raises(RecordNotFoundError):
        usecase.get_product_category_by_id(cat_id)


def test_search_product_by_name(usecase):
    cat_id = usecase.create_new_product_category(ProductCategory(name="Garden"))
    usecase.create_new_product(Product(name="Rake", category_id=cat_id))
    usecase.create_new_product(Product(name="Shovel", category_id=cat_id))

    products, total = usecase.search_product(SearchProductParameter(name="rak", page=1, page_size=10))

    assert total == 1
    assert [p.name for p in products] == ["Rake"]


def test_create_product_failure_is_logged_and_raised(capture):
    usecase = _usecase(_engine(with_schema=False))

    with pytest.raises(OperationalError):
        usecase.create_new_product(Product(name="Rake", category_id=7))

    errors = [r for r in capture.records if r.levelno == logging.ERROR]
    assert errors[-1].fields == {"name": "Rake", "category": 7}


def test_create_category_failure_is_logged_and_raised(capture):
    usecase = _usecase(_engine(with_schema=False))

    with pytest.raises(OperationalError):
        usecase.create_new_product_category(ProductCategory(name="Garden"))

    errors = [r for r in capture.records if r.levelno == logging.ERROR]
    assert errors[-1].fields == {"name": "Garden"}
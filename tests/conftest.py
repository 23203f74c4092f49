"""Fixture pytest dla testow storefront."""

import os

#ustawienia czytane przy imporcie, wiec najpierw srodowisko
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CELERY_TASK_ALWAYS_EAGER"] = "1"
os.environ["CELERY_BROKER_URL"] = "memory://"
os.environ["CELERY_RESULT_BACKEND"] = "cache+memory://"
os.environ["API_TOKENS"] = "token-alice:1,token-bob:2"
os.environ["LOG_JSON"] = "0"

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from storefront.api.routers.carts import get_product_client
from storefront.data.database import Base, SessionLocal, engine, get_db
from storefront.data.models import UserModel
from storefront.domain.errors import CatalogUnavailable
from storefront.main import create_app
from storefront.services.address_service import AddressService
from storefront.services.cart_service import CartService
from storefront.services.checkout_service import CheckoutService
from storefront.services.order_service import OrderService

ALICE = 1
BOB = 2

ALICE_HEADERS = {"Authorization": "Bearer token-alice"}
BOB_HEADERS = {"Authorization": "Bearer token-bob"}


class FakeProductClient:
    """Katalog w procesie. Ceny mozna zmieniac miedzy wywolaniami."""

    def __init__(self, prices=None):
        self.prices = dict(prices or {})
        self.available = True
        self.calls = []

    def fetch_product(self, product_id):
        self.calls.append(product_id)
        if not self.available:
            raise CatalogUnavailable()
        price = self.prices.get(product_id)
        if price is None:
            return None
        return {"id": product_id, "name": f"Product {product_id}", "price": str(price)}


@pytest.fixture(autouse=True)
def schema():
    import storefront.data.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    session.add_all([UserModel(id=ALICE, name="alice"), UserModel(id=BOB, name="bob")])
    session.commit()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def catalog():
    return FakeProductClient(
        {
            1: Decimal("10.00"),
            2: Decimal("25.00"),
            3: Decimal("39.90"),
        }
    )


@pytest.fixture
def address_service(db):
    return AddressService(db)


@pytest.fixture
def cart_service(db, catalog):
    return CartService(db, catalog)


@pytest.fixture
def checkout_service(db, cart_service):
    return CheckoutService(db, cart_service)


@pytest.fixture
def order_service(db):
    return OrderService(db)


@pytest.fixture
def address_payload():
    def make(**overrides):
        data = {
            "street": "1 Main St",
            "city": "Springfield",
            "state": "IL",
            "postal_code": "62701",
            "country": "US",
            "is_default": False,
        }
        data.update(overrides)
        return data

    return make


@pytest.fixture
def client(catalog):
    app = create_app()

    def override_get_db():
        session = SessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_product_client] = lambda: catalog

    test_client = TestClient(app)
    test_client.post("/users", json={"id": ALICE, "name": "alice"})
    test_client.post("/users", json={"id": BOB, "name": "bob"})
    return test_client

"""
==============================================================================
Pytest Configuration and Fixtures
==============================================================================

Provides test database, exchange rate stub, client and product fixtures.

==============================================================================
"""

import os

# Application startup must not touch the local catalog database
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["PRODUCTS_FILE"] = "tests/missing-products.json"

import pytest
from typing import Generator, List
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from app.main import app
from app.db.database import Base, configure_sqlite_engine, get_db
from app.db.models import Product
from app.db.repository import ProductRepository
from app.core.dependencies import get_exchange_rate_service
from app.services.product_service import ProductService


# ============================================================================
# DATABASE FIXTURES
# ============================================================================

# In-memory SQLite for testing
SQLALCHEMY_TEST_DATABASE_URL = "sqlite://"

engine = configure_sqlite_engine(create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
))

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """Create a fresh database for each test."""
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


# ============================================================================
# EXCHANGE RATE FIXTURES
# ============================================================================

class StubExchangeRateService:
    """Exchange rate service returning a fixed rate and counting calls."""

    url = "https://rates.test/usd"

    def __init__(self, rate: float = 2.0):
        self.rate = rate
        self.calls = 0

    def fetch_usd_rate(self) -> float:
        self.calls += 1
        return self.rate

    def close(self) -> None:
        pass


@pytest.fixture
def exchange_rates() -> StubExchangeRateService:
    """Exchange rate stub fixed at 2.0."""
    return StubExchangeRateService(rate=2.0)


@pytest.fixture
def product_service(db: Session, exchange_rates: StubExchangeRateService) -> ProductService:
    """Product service over the test database and rate stub."""
    return ProductService(ProductRepository(db), exchange_rates)


@pytest.fixture(scope="function")
def client(db: Session, exchange_rates: StubExchangeRateService) -> Generator[TestClient, None, None]:
    """Create test client with database and exchange rate overrides."""
    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_exchange_rate_service] = lambda: exchange_rates

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# ============================================================================
# PRODUCT FIXTURES
# ============================================================================

def make_product(code: str, name: str, price_eur: float, available: bool = True) -> Product:
    """Build an unsaved product."""
    return Product(code=code, name=name, price_eur=price_eur, available=available)


@pytest.fixture
def premium_widget(db: Session) -> Product:
    """Store a single premium widget."""
    product = make_product("P123456789", "Premium Widget", 99.99)
    db.add(product)
    db.commit()
    db.refresh(product)
    return product


@pytest.fixture
def catalog(db: Session) -> List[Product]:
    """Store a small mixed catalog."""
    products = [
        make_product("P123456789", "Premium Widget", 99.99),
        make_product("W000000001", "Basic widget", 19.5),
        make_product("G000000001", "Steel Gadget", 45.0, available=False),
        make_product("L000000001", "Desk Lamp", 32.49),
    ]
    db.add_all(products)
    db.commit()
    for product in products:
        db.refresh(product)
    return products

"""
conftest.py — Shared Test Fixtures for the Products API

Provides an in-memory SQLite Database, a FastAPI TestClient built by
create_app() around it, and a product factory.

Business Rules:
- All tests run against an isolated in-memory DB (fresh schema per test)
- The app under test uses the same Database the fixtures seed through
- Settings never read the developer's .env file

Called by: all test files via pytest autodiscovery
Depends on: product_api.main (create_app), product_api.database (Database)
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from product_api.config import Settings
from product_api.database import Database
from product_api.main import create_app
from product_api.models import Base, Product

TEST_DB_URL = "sqlite://"  # in-memory


@pytest.fixture()
def settings() -> Settings:
    return Settings(_env_file=None, database_url=TEST_DB_URL, log_level="WARNING")


@pytest.fixture()
def database() -> Database:
    db = Database(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield db
    db.dispose()


@pytest.fixture()
def db_session(database: Database) -> Session:
    """Create all tables, yield a session, then tear down."""
    Base.metadata.create_all(bind=database.engine)
    session = database.session_factory()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=database.engine)


@pytest.fixture()
def app(settings: Settings, database: Database):
    return create_app(settings, database)


@pytest.fixture()
def client(app, db_session: Session) -> TestClient:
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def make_product(db_session: Session):
    """Factory: insert a product directly through the session."""

    def _make(name: str = "Keyboard", price: float = 199.99, availability: bool = True) -> Product:
        product = Product(name=name, price=price, availability=availability)
        db_session.add(product)
        db_session.commit()
        db_session.refresh(product)
        return product

    return _make


@pytest.fixture()
def test_product(make_product) -> Product:
    return make_product(name="Monitor", price=500)

import os

# Must be set before catalog_api.config is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["SECRET_KEY"] = "test-secret-key"

from decimal import Decimal
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from catalog_api.auth import create_access_token
from catalog_api.database import Base, get_db, init_db
from catalog_api.main import app
from catalog_api.models.user import UserRole
from catalog_api.schemas.product import ProductCreate
from catalog_api.schemas.user import UserCreate
from catalog_api.services.products import ProductService
from catalog_api.services.users import UserService


@pytest.fixture()
def engine():
    """Fresh in-memory database per test, shared by every session."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture()
def db(session_factory) -> Generator[Session, None, None]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(session_factory) -> Generator[TestClient, None, None]:
    """TestClient whose requests run against the in-memory database."""

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def make_user(db):
    def _make_user(username="alice", email=None, password="secret123", role=None):
        return UserService(db).create(
            UserCreate(
                username=username,
                email=email or f"{username}@example.com",
                password=password,
                role=role,
            )
        )

    return _make_user


@pytest.fixture()
def make_product(db):
    def _make_product(sku="A1", name="Widget", brand="Acme", price="9.99", quantity=5, **extra):
        return ProductService(db).create(
            ProductCreate(sku=sku, name=name, brand=brand, price=Decimal(price), quantity=quantity, **extra)
        )

    return _make_product


def _auth_headers(user) -> dict:
    token = create_access_token(user_id=user.id, username=user.username, role=user.role)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def admin(make_user):
    return make_user(username="root", role=UserRole.ADMIN)


@pytest.fixture()
def admin_headers(admin) -> dict:
    return _auth_headers(admin)


@pytest.fixture()
def regular_user(make_user):
    return make_user(username="bob")


@pytest.fixture()
def user_headers(regular_user) -> dict:
    return _auth_headers(regular_user)

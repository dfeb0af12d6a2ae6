"""
Shared pytest fixtures

The environment is configured before the package is imported: an in-memory
SQLite database and the cheapest bcrypt cost factor.
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["LOG_LEVEL"] = "WARNING"

from uuid import uuid4  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import func  # noqa: E402

from storerate.core.auth import hash_password  # noqa: E402
from storerate.db import SessionLocal, drop_db, init_db  # noqa: E402
from storerate.main import create_app  # noqa: E402
from storerate.models import Store, User, UserRole  # noqa: E402

PASSWORD = "Secret#Pass1"


@pytest.fixture(autouse=True)
def database():
    """Fresh tables for every test"""
    drop_db()
    init_db()
    yield
    drop_db()


@pytest.fixture
def app():
    return create_app()


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db():
    session = SessionLocal()
    yield session
    session.close()


def count_rows(model) -> int:
    """Count rows of a model in a throwaway session"""
    with SessionLocal() as session:
        return session.query(func.count(model.id)).scalar()


@pytest.fixture
def create_user():
    """Insert a user directly, bypassing the API"""

    def _create(role: UserRole = UserRole.USER, email: str = None, name: str = None) -> User:
        with SessionLocal() as session:
            user = User(
                name=name or f"Test {role.value} account holder",
                email=email or f"{role.value}-{uuid4().hex[:8]}@example.com",
                password_hash=hash_password(PASSWORD),
                role=role,
                address="1 Test Street",
            )
            session.add(user)
            session.commit()
            session.refresh(user)
            return user

    return _create


@pytest.fixture
def create_store():
    """Insert a store directly, bypassing the API"""

    def _create(owner: User = None, name: str = "Corner Shop", address: str = "10 High Street") -> Store:
        with SessionLocal() as session:
            store = Store(
                name=name,
                email=f"store-{uuid4().hex[:8]}@example.com",
                address=address,
                owner_id=owner.id if owner else None,
            )
            session.add(store)
            session.commit()
            session.refresh(store)
            return store

    return _create


@pytest.fixture
def auth_headers(app):
    """Start a session for a user and return the bearer header"""

    def _headers(user: User) -> dict:
        session = app.state.session_store.create(user.id)
        return {"Authorization": f"Bearer {session.token}"}

    return _headers


@pytest.fixture
def admin(create_user):
    return create_user(UserRole.ADMIN)


@pytest.fixture
def owner(create_user):
    return create_user(UserRole.STORE_OWNER)


@pytest.fixture
def regular_user(create_user):
    return create_user(UserRole.USER)

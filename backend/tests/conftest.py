"""
Pytest configuration and fixtures for backend tests.
"""

import itertools
import os
from datetime import date, datetime, timedelta, timezone

# The application engine (used by the lifespan on TestClient startup) must
# never reach a real PostgreSQL from the test run.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "test"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from florist_api.core.dependencies import get_clock
from florist_api.main import app
from florist_api.models import Base, Order
from florist_api.seed import seed_reference_data
from florist_api.services.domain import LabelService
from shared.config.constants import OrderStatus, Roles
from shared.infrastructure.db import get_db
from shared.security.auth import sign_jwt


_id_counter = itertools.count(1000)

# Wednesday 2026-03-04, 10:00 in Singapore
NOW = datetime(2026, 3, 4, 2, 0, tzinfo=timezone.utc)
TODAY = date(2026, 3, 4)


# SQLite in-memory database for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def next_id():
    """Generate a unique suffix for test entity ids."""
    return next(_id_counter)


class FrozenClock:
    """Clock that only moves when a test moves it."""

    def __init__(self, now: datetime = NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **delta) -> datetime:
        self.now = self.now + timedelta(**delta)
        return self.now


def auth_header(user_id: str, role: str, name: str | None = None) -> dict[str, str]:
    """Bearer header carrying a token the API accepts."""
    payload = {"sub": user_id, "roles": [role]}
    if name:
        payload["name"] = name
    return {"Authorization": f"Bearer {sign_jwt(payload)}"}


@pytest.fixture(scope="function")
def db_session():
    """
    Create a fresh database session for each test.
    Uses SQLite in-memory for isolation.
    """
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def clock():
    return FrozenClock()


@pytest.fixture(scope="function")
def client(db_session, clock):
    """
    Create a test client with database session and clock overrides.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: clock

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def seed_reference(db_session):
    """Default labels, the three stores, the florist roster and the catalog."""
    LabelService(db_session).seed_defaults()
    seed_reference_data(db_session)


@pytest.fixture
def make_order(db_session, seed_reference):
    """
    Factory for orders on TODAY. Defaults to a pending store-1 order of
    prod-1 (Medium / Bouquet).
    """
    def _make(**overrides) -> Order:
        fields = {
            "id": f"order-{next_id()}",
            "store_id": "store-1",
            "product_id": "prod-1",
            "delivery_date": TODAY,
            "product_name": "Trio Matthiola in White",
            "timeslot": "9:00 AM - 11:00 AM",
            "status": OrderStatus.PENDING,
            "version": 0,
        }
        fields.update(overrides)
        order = Order(**fields)
        db_session.add(order)
        db_session.commit()
        return order

    return _make


@pytest.fixture
def admin_headers():
    return auth_header("admin-1", Roles.ADMIN, "Sarah Manager")


@pytest.fixture
def florist_headers():
    return auth_header("florist-1", Roles.FLORIST, "Maya")


@pytest.fixture
def other_florist_headers():
    return auth_header("florist-2", Roles.FLORIST, "Jenny")

"""
Pytest configuration and fixtures.

Every API test runs against both storage backends: a fresh MemoryStorage and a
fresh SQLite file under tmp_path with all tables created.
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.core.database import Base
from app.main import app
from app.storage import DatabaseStorage, MemoryStorage, get_storage

# Import all models to ensure they register with Base.metadata
from app.models import (  # noqa: F401
    BandwidthMetric,
    Device,
    IdsRule,
    PasswordEntry,
    PasswordVault,
    SecurityEvent,
    SystemMetric,
)

BACKENDS = ["memory", "database"]


@pytest.fixture(scope="function")
def session_factory(tmp_path):
    """Session factory bound to a throwaway SQLite database file."""
    engine = create_engine(
        f"sqlite:///{tmp_path / 'test_netmon_dashboard.db'}",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def memory_storage():
    return MemoryStorage()


@pytest.fixture(scope="function")
def database_storage(session_factory):
    db = session_factory()
    try:
        yield DatabaseStorage(db)
    finally:
        db.close()


@pytest.fixture(scope="function", params=BACKENDS)
def storage(request):
    """Store-level fixture parametrised over both backends."""
    return request.getfixturevalue(f"{request.param}_storage")


def _override_storage(request, session_factory):
    if request.param == "memory":
        store = MemoryStorage()

        def override_get_storage():
            yield store
    else:
        def override_get_storage():
            db = session_factory()
            try:
                yield DatabaseStorage(db)
            finally:
                db.close()

    app.dependency_overrides[get_storage] = override_get_storage


@pytest.fixture(scope="function", params=BACKENDS)
def client(request, session_factory):
    """
    Create a test client with the storage dependency overridden.

    The database variant opens a new session per request, as get_storage does.
    """
    _override_storage(request, session_factory)
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def error_client():
    """
    Test client that returns 500 responses instead of re-raising server errors.

    Callers install their own get_storage override.
    """
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def create_device(client):
    """Factory creating a device through the API and returning its JSON body."""

    def _create(**overrides):
        payload = {
            "name": "Core Router",
            "type": "router",
            "ipAddress": "10.0.0.1",
            "status": "online",
            "bandwidth": 120.5,
            "maxBandwidth": 1000,
            "model": "ASR 1000",
            "location": "DC-1",
        }
        payload.update(overrides)
        response = client.post("/api/devices", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _create

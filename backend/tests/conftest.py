"""
Pytest configuration and shared fixtures for backend tests.
"""
import json
import pytest
from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock
from httpx import ASGITransport, AsyncClient

from billed.config import Settings
from billed.deps import get_store_dependency
from billed.users.schemas import UserSession
from main import app


USER_EMAIL = "employee@test.tld"


@pytest.fixture
def test_settings() -> Settings:
    """Create test settings with overridden values."""
    return Settings(
        ENV="test",
        PORT=8000,
        STORE_API_URL="http://store.test",
        STORE_API_TOKEN="test-jwt",
        STORE_API_TIMEOUT=5,
    )


@pytest.fixture
def bills_fixture() -> list[dict]:
    """Bills as returned by the store `list()` call."""
    return [
        {
            "id": "47qAXb6fIm2zOKkLzMro",
            "email": "a@a",
            "type": "Hôtel et logement",
            "name": "encore",
            "date": "2004-04-04",
            "amount": 400,
            "vat": "80",
            "pct": 20,
            "commentary": "séminaire billed",
            "fileUrl": "https://test.storage.tld/v0/b/billable.png",
            "fileName": "preview-facture-free-201801-pdf-1.jpg",
            "status": "pending",
        },
        {
            "id": "BeKy5Mo4jkmdfPGYpTxZ",
            "email": "a@a",
            "type": "Transports",
            "name": "test1",
            "date": "2001-01-01",
            "amount": 100,
            "vat": "",
            "pct": 20,
            "commentary": "plop",
            "fileUrl": "https://test.storage.tld/v0/b/billable.jpg",
            "fileName": "1592770761.jpeg",
            "status": "refused",
        },
        {
            "id": "UIUZtnPQvnbFnB0ozvJh",
            "email": "a@a",
            "type": "Services en ligne",
            "name": "test3",
            "date": "2003-03-03",
            "amount": 300,
            "vat": "60",
            "pct": 20,
            "commentary": "",
            "fileUrl": "https://test.storage.tld/v0/b/billable.jpg",
            "fileName": "facture-client-php-exportee-dans-document-pdf-enregistre-sur-disque-dur.png",
            "status": "accepted",
        },
        {
            "id": "qcCK3SzECmaZAGRrHjaC",
            "email": "a@a",
            "type": "Restaurants et bars",
            "name": "test2",
            "date": "2002-02-02",
            "amount": 200,
            "vat": "40",
            "pct": 20,
            "commentary": "test2",
            "fileUrl": "https://test.storage.tld/v0/b/billable.png",
            "fileName": "preview-facture-free-201801-pdf-1.jpg",
            "status": "refused",
        },
    ]


@pytest.fixture
def mock_store(bills_fixture: list[dict]) -> MagicMock:
    """
    Store double with the `bills().list/create/update` contract.
    `bills()` always returns the same resource so calls can be asserted on it.
    """
    resource = MagicMock()
    resource.list = AsyncMock(return_value=bills_fixture)
    resource.create = AsyncMock(return_value={"fileUrl": "fake_url", "key": "fake_key"})
    resource.update = AsyncMock(return_value={})

    store = MagicMock()
    store.bills = MagicMock(return_value=resource)
    return store


@pytest.fixture
def user_session() -> UserSession:
    return UserSession(email=USER_EMAIL, type="Employee")


@pytest.fixture
def on_navigate() -> MagicMock:
    return MagicMock()


@pytest.fixture
def user_header() -> dict[str, str]:
    return {"X-User": json.dumps({"type": "Employee", "email": USER_EMAIL})}


@pytest.fixture
async def client(mock_store: MagicMock) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client for FastAPI application.
    Overrides the store dependency with the mock store.
    """
    app.dependency_overrides[get_store_dependency] = lambda: mock_store

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()

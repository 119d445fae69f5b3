"""
Pytest Configuration and Shared Fixtures

In-memory record store and identity provider fakes, sample records and an
HTTP client wired to the application with those fakes injected.
"""

import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

os.environ["CONFIG"] = str(Path(__file__).parent / "config" / "test.yaml")

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from propertyhub_backend.core.exceptions import (  # noqa: E402
    DatabaseError,
    ExternalServiceError,
    IdentityNotFoundError,
)
from propertyhub_backend.main import app  # noqa: E402
from propertyhub_backend.modules.auth.jwt_service import (  # noqa: E402
    create_access_token,
)
from propertyhub_backend.modules.auth.schemas import (  # noqa: E402
    CallerContext,
    IdentityRecord,
)
from propertyhub_backend.modules.auth.dependencies import (  # noqa: E402
    get_identity_provider,
)
from propertyhub_backend.modules.records.dependencies import (  # noqa: E402
    get_record_repository,
)

FIXED_NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


class FakeRecordRepository:
    """Dict-backed ``RecordRepository``."""

    def __init__(self, records: dict[str, dict[str, dict[str, Any]]] | None = None):
        self.records = records or {}
        self.calls: list[tuple[str, str]] = []

    def add(self, collection: str, record_id: str, data: dict[str, Any]) -> None:
        self.records.setdefault(collection, {})[record_id] = data

    async def get_by_id(self, collection: str, record_id: str) -> dict[str, Any] | None:
        self.calls.append((collection, record_id))
        data = self.records.get(collection, {}).get(record_id)
        return {**data, "id": record_id} if data is not None else None

    async def get_by_field(
        self, collection: str, field: str, value: Any
    ) -> list[dict[str, Any]]:
        return [
            {**data, "id": record_id}
            for record_id, data in self.records.get(collection, {}).items()
            if data.get(field) == value
        ]

    async def delete(self, collection: str, record_ids: list[str]) -> int:
        stored = self.records.get(collection, {})
        removed = [record_id for record_id in record_ids if stored.pop(record_id, None) is not None]
        return len(removed)


class FailingRecordRepository:
    """``RecordRepository`` whose store is unreachable."""

    async def get_by_id(self, collection: str, record_id: str) -> dict[str, Any] | None:
        raise DatabaseError(f"Failed to load {collection}/{record_id}")

    async def get_by_field(
        self, collection: str, field: str, value: Any
    ) -> list[dict[str, Any]]:
        raise DatabaseError(f"Failed to query {collection} by {field}")

    async def delete(self, collection: str, record_ids: list[str]) -> int:
        raise DatabaseError(f"Failed to delete from {collection}")


class FakeIdentityProvider:
    """Email-keyed ``IdentityProvider``."""

    def __init__(self, emails: list[str] | None = None):
        self.identities = {
            email.lower(): IdentityRecord(uid=f"uid-{index}", email=email)
            for index, email in enumerate(emails or [])
        }

    async def get_user_by_email(self, email: str) -> IdentityRecord:
        identity = self.identities.get(email.lower())
        if identity is None:
            raise IdentityNotFoundError(email)
        return identity


class FailingIdentityProvider:
    """``IdentityProvider`` whose backend is unreachable."""

    async def get_user_by_email(self, email: str) -> IdentityRecord:
        raise ExternalServiceError("identity", "get_user_by_email")


@pytest.fixture()
def fixed_clock():
    """Clock pinned to 2024-06-15 12:00 UTC."""
    return lambda: FIXED_NOW


@pytest.fixture()
def repository():
    """Record store with one user per role and one property."""
    repo = FakeRecordRepository()
    repo.add("users", "owner-1", {"email": "owner@example.com", "name": "Olivia Owner", "role": "owner"})
    repo.add("users", "admin-1", {"email": "admin@example.com", "name": "Adam Admin", "role": "admin"})
    repo.add("users", "tenant-1", {"email": "tenant@example.com", "name": "Tina Tenant", "role": "tenant"})
    repo.add(
        "properties",
        "property-1",
        {"address": "Calle Mayor 12, Madrid", "type": "residential", "ownerId": "owner-1", "value": 250000},
    )
    return repo


@pytest.fixture()
def empty_repository():
    return FakeRecordRepository()


@pytest.fixture()
def identity():
    """Identity provider that already knows one email."""
    return FakeIdentityProvider(["taken@example.com"])


@pytest.fixture()
def failing_repository():
    return FailingRecordRepository()


@pytest.fixture()
def failing_identity():
    return FailingIdentityProvider()


@pytest.fixture()
def caller():
    """An authenticated admin caller."""
    return CallerContext(uid="admin-1", email="admin@example.com", role="admin")


@pytest.fixture()
def valid_user():
    """Complete user payload that passes every rule."""
    return {
        "email": "new.user@example.com",
        "name": "Nora New",
        "role": "tenant",
        "phone": "(555) 123-4567",
    }


@pytest.fixture()
def valid_property():
    """Complete property payload that passes every rule."""
    return {
        "address": "Avenida del Puerto 45, Valencia",
        "type": "residential",
        "ownerId": "owner-1",
        "value": 185000,
        "purchaseDate": "2020-03-01",
        "description": "Two bedroom flat near the beach",
        "bedrooms": 2,
        "bathrooms": 1,
        "squareMeters": 78.5,
        "yearBuilt": 1998,
        "features": ["balcony", "elevator"],
    }


@pytest.fixture()
def valid_document():
    """Complete document payload that passes every rule."""
    return {
        "name": "Purchase deed",
        "type": "deed",
        "propertyId": "property-1",
        "ownerId": "owner-1",
        "driveFileId": "drive-abc123",
        "fileSize": 2 * 1024 * 1024,
        "mimeType": "application/pdf",
        "tags": ["legal"],
    }


@pytest.fixture()
def auth_headers():
    """Bearer token for an admin caller."""
    token = create_access_token("admin-1", email="admin@example.com", role="admin")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def owner_headers():
    """Bearer token for a non-admin caller."""
    token = create_access_token("owner-1", email="owner@example.com", role="owner")
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def client(repository, identity):
    """HTTP client with the in-memory fakes injected."""
    app.dependency_overrides[get_record_repository] = lambda: repository
    app.dependency_overrides[get_identity_provider] = lambda: identity

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()

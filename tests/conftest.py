"""
Shared pytest fixtures and configuration for all tests.
"""

import uuid
from collections.abc import AsyncGenerator, Generator
from contextlib import asynccontextmanager
from datetime import date
from typing import Any
from unittest.mock import MagicMock, patch

import pytest
import pytest_asyncio
import strawberry
from sqlalchemy.ext.asyncio import AsyncSession

from medications.dbmodels import Base, Prescriptions
from medications.exceptions import PrescriptionNotFoundError


class InMemoryPrescriptionStore:
    """Stand-in for the prescriptions repository module, keyed by prescription ID.

    Mirrors the repository function signatures so it can be patched in
    wherever resolvers and loaders import the repository.
    """

    def __init__(self) -> None:
        self.rows: dict[uuid.UUID, Prescriptions] = {}
        self.batch_calls: list[list[uuid.UUID]] = []

    async def find_all(self, session: Any) -> list[Prescriptions]:
        return list(self.rows.values())

    async def find_by_id(self, session: Any, prescription_id: uuid.UUID) -> Prescriptions | None:
        return self.rows.get(prescription_id)

    async def get_by_id(self, session: Any, prescription_id: uuid.UUID) -> Prescriptions:
        row = self.rows.get(prescription_id)
        if row is None:
            raise PrescriptionNotFoundError(prescription_id)
        return row

    async def find_by_ids(self, session: Any, prescription_ids: Any) -> list[Prescriptions]:
        ids = list(prescription_ids)
        self.batch_calls.append(ids)
        return [self.rows[i] for i in ids if i in self.rows]

    async def find_by_member(self, session: Any, member_id: uuid.UUID) -> list[Prescriptions]:
        return [row for row in self.rows.values() if row.member_id == member_id]

    async def find_by_provider(self, session: Any, provider_id: uuid.UUID) -> list[Prescriptions]:
        return [row for row in self.rows.values() if row.provider_id == provider_id]

    async def find_by_status(self, session: Any, status: str) -> list[Prescriptions]:
        return [row for row in self.rows.values() if row.status == status]

    async def save(self, session: Any, prescription: Prescriptions) -> Prescriptions:
        if prescription.id is None:
            prescription.id = uuid.uuid4()
        self.rows[prescription.id] = prescription
        return prescription

    def add(self, **overrides: Any) -> Prescriptions:
        values: dict[str, Any] = {
            "id": uuid.uuid4(),
            "member_id": uuid.uuid4(),
            "provider_id": uuid.uuid4(),
            "medication_name": "Lisinopril",
            "dosage": "10mg",
            "frequency": "daily",
            "start_date": date(2024, 1, 1),
            "end_date": None,
            "pharmacy": "Main Street Pharmacy",
            "refills_remaining": 3,
            "status": "ACTIVE",
            "notes": None,
        }
        values.update(overrides)
        row = Prescriptions(**values)
        self.rows[row.id] = row
        return row


@asynccontextmanager
async def _fake_session() -> AsyncGenerator[MagicMock, None]:
    yield MagicMock(spec=AsyncSession)


@pytest.fixture
def store() -> Generator[InMemoryPrescriptionStore, None, None]:
    """Patch the repository and session factory used by resolvers and loaders."""
    store = InMemoryPrescriptionStore()
    with (
        patch("medications.graphql.resolvers.prescription.prescriptions_repo", store),
        patch("medications.graphql.resolvers.prescription.get_async_session", _fake_session),
        patch("medications.graphql.loaders.prescriptions_repo", store),
        patch("medications.graphql.loaders.get_async_session", _fake_session),
    ):
        yield store


@pytest.fixture
def mock_session() -> MagicMock:
    """A session double whose async methods are AsyncMocks."""
    return MagicMock(spec=AsyncSession)


@pytest.fixture
def mock_info() -> MagicMock:
    """Create a mock GraphQL info object with request context."""
    info = MagicMock(spec=strawberry.Info)
    info.context = {"request": MagicMock(), "loaders": MagicMock()}
    return info


@pytest.fixture
def sample_prescription() -> Prescriptions:
    """Create a sample prescription row for testing."""
    return Prescriptions(
        id=uuid.uuid4(),
        member_id=uuid.uuid4(),
        provider_id=uuid.uuid4(),
        medication_name="Amoxicillin",
        dosage="500mg",
        frequency="three times daily",
        start_date=date(2024, 3, 1),
        end_date=date(2024, 3, 10),
        pharmacy="Corner Pharmacy",
        refills_remaining=3,
        status="ACTIVE",
        notes="Take with food",
    )

@pytest_asyncio.fixture(scope="function")
async def sqlite_database(tmp_path: Any) -> AsyncGenerator[str, None]:
    """Point the shared connection pool at a fresh SQLite file holding the schema."""
    from medications.database.connection import (
        dispose_database,
        get_async_session,
        init_database,
        reset_database,
    )

    dsn = f"sqlite+aiosqlite:///{tmp_path / 'medications.db'}"
    reset_database()
    init_database(dsn, force_reinit=True)

    async with get_async_session() as session:
        connection = await session.connection()
        await connection.run_sync(Base.metadata.create_all)

    yield dsn

    await dispose_database()


# Test markers
def pytest_configure(config: Any) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: mark test as unit test")
    config.addinivalue_line("markers", "integration: mark test as integration test")

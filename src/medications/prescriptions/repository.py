"""Repository helpers for prescription records."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..dbmodels import Prescriptions
from ..exceptions import PrescriptionNotFoundError


async def find_all(session: AsyncSession) -> list[Prescriptions]:
    res = await session.execute(select(Prescriptions))
    return list(res.scalars().all())


async def find_by_id(session: AsyncSession, prescription_id: UUID) -> Prescriptions | None:
    stmt = select(Prescriptions).where(Prescriptions.id == prescription_id)
    res = await session.execute(stmt)
    return res.scalar_one_or_none()


async def get_by_id(session: AsyncSession, prescription_id: UUID) -> Prescriptions:
    """Load a prescription, raising PrescriptionNotFoundError when it does not exist."""
    prescription = await find_by_id(session, prescription_id)
    if prescription is None:
        raise PrescriptionNotFoundError(prescription_id)
    return prescription


async def find_by_ids(session: AsyncSession, prescription_ids: Iterable[UUID]) -> list[Prescriptions]:
    ids = list(prescription_ids)
    if not ids:
        return []
    stmt = select(Prescriptions).where(Prescriptions.id.in_(ids))
    res = await session.execute(stmt)
    return list(res.scalars().all())


async def find_by_member(session: AsyncSession, member_id: UUID) -> list[Prescriptions]:
    stmt = select(Prescriptions).where(Prescriptions.member_id == member_id)
    res = await session.execute(stmt)
    return list(res.scalars().all())


async def find_by_provider(session: AsyncSession, provider_id: UUID) -> list[Prescriptions]:
    stmt = select(Prescriptions).where(Prescriptions.provider_id == provider_id)
    res = await session.execute(stmt)
    return list(res.scalars().all())


async def find_by_status(session: AsyncSession, status: str) -> list[Prescriptions]:
    stmt = select(Prescriptions).where(Prescriptions.status == status)
    res = await session.execute(stmt)
    return list(res.scalars().all())


async def save(session: AsyncSession, prescription: Prescriptions) -> Prescriptions:
    """Insert or update a prescription by identity and flush it to the database.

    No version check is made; concurrent writers to the same row see
    last-write-wins behaviour.
    """
    prescription.updated_at = datetime.now(UTC)
    session.add(prescription)
    await session.flush()
    return prescription

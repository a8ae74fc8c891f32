from __future__ import annotations

from typing import TYPE_CHECKING, Any
from uuid import UUID

import strawberry

from ...database.connection import get_async_session
from ...dbmodels import Prescriptions
from ...exceptions import MalformedInputError
from ...logging import get_logger
from ...prescriptions import repository as prescriptions_repo
from ..types.prescription import Prescription, PrescriptionStatus

if TYPE_CHECKING:
    from ..mutations.root import CreatePrescriptionInput, RefillPrescriptionInput

logger = get_logger(__name__)

# Every new prescription starts with this many refills, whatever the caller asks for.
DEFAULT_REFILLS = 3


def parse_identifier(value: Any, field: str = "ID") -> UUID:
    """Parse an identifier crossing the API boundary, failing loudly on bad input."""
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except ValueError as e:
        raise MalformedInputError(field, value) from e


def to_prescription_type(row: Prescriptions) -> Prescription:
    """Convert a SQLAlchemy model to the GraphQL type."""
    return Prescription(
        id=strawberry.ID(str(row.id)),
        member_id=strawberry.ID(str(row.member_id)),
        provider_id=strawberry.ID(str(row.provider_id)),
        medication_name=row.medication_name,
        dosage=row.dosage,
        frequency=row.frequency,
        start_date=row.start_date,
        end_date=row.end_date,
        pharmacy=row.pharmacy,
        refills_remaining=row.refills_remaining,
        status=PrescriptionStatus(row.status),
        notes=row.notes,
    )


# Query resolvers
async def resolve_prescriptions(info: strawberry.Info) -> list[Prescription]:
    async with get_async_session() as session:
        rows = await prescriptions_repo.find_all(session)
        return [to_prescription_type(row) for row in rows]


async def resolve_prescription_by_id(info: strawberry.Info, id: str) -> Prescription | None:
    """
    Resolve a prescription by its ID.

    An unknown ID yields null rather than an error; only a malformed ID fails.
    """
    prescription_id = parse_identifier(id, "prescription ID")

    async with get_async_session() as session:
        row = await prescriptions_repo.find_by_id(session, prescription_id)
        if row is None:
            logger.info("Prescription not found", prescription_id=str(prescription_id))
            return None
        return to_prescription_type(row)


async def resolve_prescriptions_by_member(
    info: strawberry.Info, member_id: str
) -> list[Prescription]:
    member_uuid = parse_identifier(member_id, "member ID")

    async with get_async_session() as session:
        rows = await prescriptions_repo.find_by_member(session, member_uuid)
        return [to_prescription_type(row) for row in rows]


async def resolve_prescriptions_by_provider(
    info: strawberry.Info, provider_id: str
) -> list[Prescription]:
    provider_uuid = parse_identifier(provider_id, "provider ID")

    async with get_async_session() as session:
        rows = await prescriptions_repo.find_by_provider(session, provider_uuid)
        return [to_prescription_type(row) for row in rows]


async def resolve_prescriptions_by_status(
    info: strawberry.Info, status: PrescriptionStatus
) -> list[Prescription]:
    async with get_async_session() as session:
        rows = await prescriptions_repo.find_by_status(session, status.value)
        return [to_prescription_type(row) for row in rows]


async def resolve_prescription_reference(info: strawberry.Info, id: str) -> Prescription | None:
    """
    Resolve a Prescription entity reference sent by the federation gateway.

    Lookups go through the request's DataLoader so that an ``_entities`` call
    carrying many representations is served by a single query.
    """
    prescription_id = parse_identifier(id, "prescription ID")

    row = await info.context["loaders"].prescription_loader.load(prescription_id)
    if row is None:
        logger.info("Prescription reference not found", prescription_id=str(prescription_id))
        return None
    return to_prescription_type(row)


# Mutation resolvers
async def create_prescription(info: strawberry.Info, input: CreatePrescriptionInput) -> Prescription:
    """
    Create a new prescription.

    Status is always ACTIVE and refills always DEFAULT_REFILLS on creation.
    """
    member_id = parse_identifier(input.member_id, "member ID")
    provider_id = parse_identifier(input.provider_id, "provider ID")

    async with get_async_session() as session:
        row = Prescriptions(
            member_id=member_id,
            provider_id=provider_id,
            medication_name=input.medication_name,
            dosage=input.dosage,
            frequency=input.frequency,
            start_date=input.start_date,
            end_date=input.end_date,
            pharmacy=input.pharmacy,
            notes=input.notes,
            refills_remaining=DEFAULT_REFILLS,
            status=PrescriptionStatus.ACTIVE.value,
        )
        row = await prescriptions_repo.save(session, row)

        logger.info(
            "Prescription created",
            prescription_id=str(row.id),
            member_id=str(member_id),
            provider_id=str(provider_id),
        )
        return to_prescription_type(row)


async def cancel_prescription(info: strawberry.Info, id: str) -> Prescription:
    """Mark a prescription as cancelled, whatever its current status."""
    prescription_id = parse_identifier(id, "prescription ID")

    async with get_async_session() as session:
        row = await prescriptions_repo.get_by_id(session, prescription_id)
        row.status = PrescriptionStatus.CANCELLED.value
        row = await prescriptions_repo.save(session, row)

        logger.info("Prescription cancelled", prescription_id=str(prescription_id))
        return to_prescription_type(row)


async def refill_prescription(
    info: strawberry.Info, input: RefillPrescriptionInput
) -> Prescription:
    """
    Add refills to a prescription.

    The count is not bounded: a negative ``additional_refills`` lowers the
    remaining refills and may take them below zero.
    """
    prescription_id = parse_identifier(input.prescription_id, "prescription ID")

    async with get_async_session() as session:
        row = await prescriptions_repo.get_by_id(session, prescription_id)
        row.refills_remaining = row.refills_remaining + input.additional_refills
        row = await prescriptions_repo.save(session, row)

        logger.info(
            "Prescription refilled",
            prescription_id=str(prescription_id),
            additional_refills=input.additional_refills,
            refills_remaining=row.refills_remaining,
        )
        return to_prescription_type(row)


async def complete_prescription(info: strawberry.Info, id: str) -> Prescription:
    """Mark a prescription as completed and clear its remaining refills."""
    prescription_id = parse_identifier(id, "prescription ID")

    async with get_async_session() as session:
        row = await prescriptions_repo.get_by_id(session, prescription_id)
        row.status = PrescriptionStatus.COMPLETED.value
        row.refills_remaining = 0
        row = await prescriptions_repo.save(session, row)

        logger.info("Prescription completed", prescription_id=str(prescription_id))
        return to_prescription_type(row)

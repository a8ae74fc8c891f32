"""
Prescription GraphQL type definitions
"""

from datetime import date

import strawberry

from ...dbmodels import PrescriptionStatus
from ...federation.references import member_reference, provider_reference
from .entities import Member, Provider

# Registered with GraphQL as the PrescriptionStatus enum
strawberry.enum(PrescriptionStatus)


@strawberry.federation.type(keys=["id"])
class Prescription:
    """A prescription issued to a member by a provider."""

    id: strawberry.ID
    member_id: strawberry.ID
    provider_id: strawberry.ID
    medication_name: str
    dosage: str
    frequency: str
    start_date: date
    end_date: date | None
    pharmacy: str | None
    refills_remaining: int
    status: PrescriptionStatus
    notes: str | None

    @strawberry.field
    def member(self) -> Member:
        """The member this prescription belongs to, resolved by the members subgraph."""
        return Member.from_reference(member_reference(self))

    @strawberry.field
    def provider(self) -> Provider:
        """The prescribing provider, resolved by the providers subgraph."""
        return Provider.from_reference(provider_reference(self))

    @classmethod
    async def resolve_reference(
        cls, info: strawberry.Info, id: strawberry.ID
    ) -> "Prescription | None":
        """Resolve a Prescription for the gateway from its ``@key`` fields."""
        from ..resolvers.prescription import resolve_prescription_reference

        return await resolve_prescription_reference(info, id)

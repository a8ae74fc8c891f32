"""
Root GraphQL mutation definitions
"""

from datetime import date

import strawberry

from ..types.prescription import Prescription


# Input types for mutations
@strawberry.input
class CreatePrescriptionInput:
    """Input for creating a prescription.

    Status and refill count are not accepted; they are set on creation.
    """

    member_id: strawberry.ID
    provider_id: strawberry.ID
    medication_name: str
    dosage: str
    frequency: str
    start_date: date
    end_date: date | None = None
    pharmacy: str | None = None
    notes: str | None = None


@strawberry.input
class RefillPrescriptionInput:
    """Input for adding refills to a prescription."""

    prescription_id: strawberry.ID
    additional_refills: int


@strawberry.type
class Mutation:
    """Root GraphQL mutation type."""

    @strawberry.mutation(name="createPrescription")
    async def create_prescription(
        self, info: strawberry.Info, input: CreatePrescriptionInput
    ) -> Prescription:
        """Create a new prescription."""
        from ..resolvers.prescription import create_prescription

        return await create_prescription(info, input)

    @strawberry.mutation(name="cancelPrescription")
    async def cancel_prescription(self, info: strawberry.Info, id: strawberry.ID) -> Prescription:
        """Cancel a prescription."""
        from ..resolvers.prescription import cancel_prescription

        return await cancel_prescription(info, id)

    @strawberry.mutation(name="refillPrescription")
    async def refill_prescription(
        self, info: strawberry.Info, input: RefillPrescriptionInput
    ) -> Prescription:
        """Add refills to a prescription."""
        from ..resolvers.prescription import refill_prescription

        return await refill_prescription(info, input)

    @strawberry.mutation(name="completePrescription")
    async def complete_prescription(
        self, info: strawberry.Info, id: strawberry.ID
    ) -> Prescription:
        """Mark a prescription as completed."""
        from ..resolvers.prescription import complete_prescription

        return await complete_prescription(info, id)

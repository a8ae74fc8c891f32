"""
Root GraphQL query definitions
"""

import strawberry

from ..types.prescription import Prescription, PrescriptionStatus


@strawberry.type
class Query:
    """Root GraphQL query type."""

    @strawberry.field
    async def prescriptions(self, info: strawberry.Info) -> list[Prescription]:
        """Get all prescriptions."""
        from ..resolvers.prescription import resolve_prescriptions

        return await resolve_prescriptions(info)

    @strawberry.field
    async def prescription(self, info: strawberry.Info, id: strawberry.ID) -> Prescription | None:
        """Get a prescription by ID."""
        from ..resolvers.prescription import resolve_prescription_by_id

        return await resolve_prescription_by_id(info, id)

    @strawberry.field
    async def prescriptions_by_member(
        self, info: strawberry.Info, member_id: strawberry.ID
    ) -> list[Prescription]:
        """Get prescriptions for a member."""
        from ..resolvers.prescription import resolve_prescriptions_by_member

        return await resolve_prescriptions_by_member(info, member_id)

    @strawberry.field
    async def prescriptions_by_provider(
        self, info: strawberry.Info, provider_id: strawberry.ID
    ) -> list[Prescription]:
        """Get prescriptions written by a provider."""
        from ..resolvers.prescription import resolve_prescriptions_by_provider

        return await resolve_prescriptions_by_provider(info, provider_id)

    @strawberry.field
    async def prescriptions_by_status(
        self, info: strawberry.Info, status: PrescriptionStatus
    ) -> list[Prescription]:
        """Get prescriptions with the given status."""
        from ..resolvers.prescription import resolve_prescriptions_by_status

        return await resolve_prescriptions_by_status(info, status)

"""
Error types raised by the medications subgraph.

Resolvers let these propagate; Strawberry reports the message in the
``errors`` array of the GraphQL response.
"""

from uuid import UUID


class MedicationsError(Exception):
    """Base class for medications subgraph errors."""


class PrescriptionNotFoundError(MedicationsError):
    """Raised when a write targets a prescription that does not exist."""

    def __init__(self, prescription_id: UUID | str):
        self.prescription_id = prescription_id
        super().__init__(f"Prescription with ID {prescription_id} not found")


class MalformedInputError(MedicationsError, ValueError):
    """Raised when a value crossing the API boundary cannot be parsed."""

    def __init__(self, field: str, value: object):
        self.field = field
        self.value = value
        super().__init__(f"Invalid {field}: {value!r}")

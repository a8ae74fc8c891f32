"""
Entity reference encoding.

Members and providers are owned by other subgraphs. This service only knows
their identifiers, so it hands the gateway a ``{__typename, id}`` stub and
lets the owning subgraph resolve the rest of the object.
"""

from typing import Any, Protocol
from uuid import UUID

EntityReference = dict[str, str]

MEMBER_TYPENAME = "Member"
PROVIDER_TYPENAME = "Provider"


class HasForeignKeys(Protocol):
    member_id: Any
    provider_id: Any


def entity_reference(typename: str, entity_id: UUID | str) -> EntityReference:
    """Build a federation reference stub carrying only ``__typename`` and ``id``."""
    return {"__typename": typename, "id": str(entity_id)}


def member_reference(prescription: HasForeignKeys) -> EntityReference:
    return entity_reference(MEMBER_TYPENAME, prescription.member_id)


def provider_reference(prescription: HasForeignKeys) -> EntityReference:
    return entity_reference(PROVIDER_TYPENAME, prescription.provider_id)

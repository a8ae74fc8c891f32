"""
Stub types for entities owned by other subgraphs
"""

from typing import Self

import strawberry
from strawberry.federation.schema_directives import Key
from strawberry.federation.types import FieldSet

from ...federation.references import EntityReference
from ...logging import get_logger

logger = get_logger(__name__)



class ExternalEntity:
    """Shared behaviour for reference-only entity types."""

    @classmethod
    def from_reference(cls, reference: EntityReference) -> Self:
        return cls(id=strawberry.ID(reference["id"]))  # type: ignore[call-arg]

    @classmethod
    def resolve_reference(cls, id: strawberry.ID) -> None:
        # Not owned here; the gateway must ask the owning subgraph.
        logger.debug("Declining entity reference", typename=cls.__name__, id=id)
        return None


@strawberry.federation.type(keys=[Key(fields=FieldSet("id"), resolvable=False)])
class Member(ExternalEntity):
    """Member entity owned by the members subgraph."""

    id: strawberry.ID


@strawberry.federation.type(keys=[Key(fields=FieldSet("id"), resolvable=False)])
class Provider(ExternalEntity):
    """Provider entity owned by the providers subgraph."""

    id: strawberry.ID

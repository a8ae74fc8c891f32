"""Apollo Federation helpers for the medications subgraph."""

from .references import EntityReference, entity_reference, member_reference, provider_reference

__all__ = ["EntityReference", "entity_reference", "member_reference", "provider_reference"]

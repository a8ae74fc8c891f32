"""
Database models for the medications subgraph (authoritative ORM definitions).

This module defines the SQLAlchemy Base with a naming convention for stable
Alembic autogenerate diffs, and exposes `target_metadata` for Alembic.
"""

from datetime import date, datetime
from enum import Enum
from uuid import UUID, uuid4

from sqlalchemy import (
    CheckConstraint,
    Date,
    DateTime,
    Index,
    Integer,
    MetaData,
    PrimaryKeyConstraint,
    String,
    Text,
    Uuid,
    text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

# Naming convention for deterministic constraint/index names in Alembic diffs
naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class PrescriptionStatus(Enum):
    """Lifecycle state of a prescription; no transition rules are enforced."""

    ACTIVE = "ACTIVE"
    EXPIRED = "EXPIRED"
    CANCELLED = "CANCELLED"
    COMPLETED = "COMPLETED"


PRESCRIPTION_STATUSES = tuple(status.value for status in PrescriptionStatus)


class Base(DeclarativeBase):
    """Base class for all database models with type checking support."""

    metadata = MetaData(naming_convention=naming_convention)


class Prescriptions(Base):
    __tablename__ = "prescriptions"
    __table_args__ = (
        CheckConstraint(
            "status IN (" + ", ".join(f"'{s}'" for s in PRESCRIPTION_STATUSES) + ")",
            name="status_check",
        ),
        PrimaryKeyConstraint("id", name="prescriptions_pkey"),
        Index("idx_prescriptions_member", "member_id"),
        Index("idx_prescriptions_provider", "provider_id"),
        Index("idx_prescriptions_status", "status"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, default=uuid4)
    # Owned by other subgraphs; stored as opaque identifiers, no foreign keys.
    member_id: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    provider_id: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    medication_name: Mapped[str] = mapped_column(String(255), nullable=False)
    dosage: Mapped[str] = mapped_column(String(100), nullable=False)
    frequency: Mapped[str] = mapped_column(String(100), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date | None] = mapped_column(Date)
    pharmacy: Mapped[str | None] = mapped_column(String(255))
    refills_remaining: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default=text("0")
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="ACTIVE", server_default=text("'ACTIVE'")
    )
    notes: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(True), server_default=text("CURRENT_TIMESTAMP")
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(True), server_default=text("CURRENT_TIMESTAMP")
    )


target_metadata = Base.metadata

__all__ = [
    "Base",
    "Prescriptions",
    "PrescriptionStatus",
    "PRESCRIPTION_STATUSES",
    "target_metadata",
]

"""
Create the prescriptions table.

Revision ID: 20240101_000000_create_prescriptions
Revises:
Create Date: 2024-01-01 00:00:00
"""

import sqlalchemy as sa

from alembic import op  # type: ignore[reportMissingImports]

# revision identifiers, used by Alembic.
revision = "20240101_000000_create_prescriptions"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "prescriptions",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("member_id", sa.Uuid(), nullable=False),
        sa.Column("provider_id", sa.Uuid(), nullable=False),
        sa.Column("medication_name", sa.String(length=255), nullable=False),
        sa.Column("dosage", sa.String(length=100), nullable=False),
        sa.Column("frequency", sa.String(length=100), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("pharmacy", sa.String(length=255), nullable=True),
        sa.Column(
            "refills_remaining",
            sa.Integer(),
            server_default=sa.text("0"),
            nullable=False,
        ),
        sa.Column(
            "status",
            sa.String(length=20),
            server_default=sa.text("'ACTIVE'"),
            nullable=False,
        ),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.CheckConstraint(
            "status IN ('ACTIVE', 'EXPIRED', 'CANCELLED', 'COMPLETED')",
            name=op.f("ck_prescriptions_status_check"),
        ),
        sa.PrimaryKeyConstraint("id", name="prescriptions_pkey"),
    )
    op.create_index("idx_prescriptions_member", "prescriptions", ["member_id"])
    op.create_index("idx_prescriptions_provider", "prescriptions", ["provider_id"])
    op.create_index("idx_prescriptions_status", "prescriptions", ["status"])


def downgrade() -> None:
    op.drop_index("idx_prescriptions_status", table_name="prescriptions")
    op.drop_index("idx_prescriptions_provider", table_name="prescriptions")
    op.drop_index("idx_prescriptions_member", table_name="prescriptions")
    op.drop_table("prescriptions")

"""create medications and dose_events

Revision ID: 0001_initial
Revises:
Create Date: 2026-01-16 09:00:00

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "medications",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("generic_name", sa.String(length=255), nullable=False),
        sa.Column("category", sa.String(length=100), nullable=False),
        sa.Column("form", sa.String(length=100), nullable=False),
        sa.Column("strength", sa.String(length=100), nullable=False),
        sa.Column("notes", sa.Text(), nullable=False),
        sa.Column("is_builtin", sa.Boolean(), nullable=False),
        sa.Column("is_favorite", sa.Boolean(), nullable=False),
        sa.Column("doses_per_day", sa.Integer(), nullable=False),
        sa.Column("interval_days", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True)),
    )
    op.create_index("ix_medications_id", "medications", ["id"])
    op.create_index("ix_medications_name", "medications", ["name"])

    op.create_table(
        "dose_events",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("timestamp", sa.DateTime(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("amount", sa.String(length=100), nullable=False),
        sa.Column("is_completed", sa.Boolean(), nullable=False),
        sa.Column("notification_id", sa.String(length=512)),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_dose_events_id", "dose_events", ["id"])
    op.create_index("ix_dose_events_timestamp", "dose_events", ["timestamp"])


def downgrade():
    op.drop_index("ix_dose_events_timestamp", table_name="dose_events")
    op.drop_index("ix_dose_events_id", table_name="dose_events")
    op.drop_table("dose_events")
    op.drop_index("ix_medications_name", table_name="medications")
    op.drop_index("ix_medications_id", table_name="medications")
    op.drop_table("medications")

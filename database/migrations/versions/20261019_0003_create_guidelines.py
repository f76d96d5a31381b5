"""create guidelines

Revision ID: 20261019_0003
Revises: 20261019_0002
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

revision = "20261019_0003"
down_revision = "20261019_0002"
branch_labels = None
depends_on = None


DAY_COLUMNS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")
SEMESTER_COLUMNS = ("summer", "fall", "winter", "spring")


def _flag_columns(prefix: str, names: tuple[str, ...]) -> list[sa.Column]:
    return [
        sa.Column(f"{prefix}_{name}", sa.Boolean(), nullable=False, server_default=sa.text("false"))
        for name in names
    ]


def upgrade() -> None:
    op.create_table(
        "guidelines",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        *_flag_columns("semester", SEMESTER_COLUMNS),
        sa.Column("credits", sa.Integer(), nullable=False),
        sa.Column("meeting_amount", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_guidelines_credits", "guidelines", ["credits"])
    op.create_index("ix_guidelines_meeting_amount", "guidelines", ["meeting_amount"])

    op.create_table(
        "guideline_days",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("guideline_id", sa.String(length=36), sa.ForeignKey("guidelines.id", ondelete="CASCADE"), nullable=False),
        *_flag_columns("day", DAY_COLUMNS),
    )
    op.create_index("ix_guideline_days_guideline_id", "guideline_days", ["guideline_id"])

    op.create_table(
        "guideline_times",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("guideline_id", sa.String(length=36), sa.ForeignKey("guidelines.id", ondelete="CASCADE"), nullable=False),
        sa.Column("start_time", sa.Integer(), nullable=False),
        sa.Column("end_time", sa.Integer(), nullable=False),
    )
    op.create_index("ix_guideline_times_guideline_id", "guideline_times", ["guideline_id"])


def downgrade() -> None:
    op.drop_index("ix_guideline_times_guideline_id", table_name="guideline_times")
    op.drop_table("guideline_times")
    op.drop_index("ix_guideline_days_guideline_id", table_name="guideline_days")
    op.drop_table("guideline_days")
    op.drop_index("ix_guidelines_meeting_amount", table_name="guidelines")
    op.drop_index("ix_guidelines_credits", table_name="guidelines")
    op.drop_table("guidelines")

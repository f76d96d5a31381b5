"""create reference tables

Revision ID: 20261019_0001
Revises: None
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "campuses",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=30), nullable=False, unique=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    op.create_table(
        "buildings",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("campus_id", sa.String(length=36), sa.ForeignKey("campuses.id", ondelete="CASCADE"), nullable=True),
        sa.Column("name", sa.String(length=75), nullable=False),
        sa.Column("prefix", sa.String(length=4), nullable=False),
        sa.Column("classrooms", sa.String(length=255), nullable=False, server_default=""),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_buildings_campus_id", "buildings", ["campus_id"])
    op.create_index("ix_buildings_prefix", "buildings", ["prefix"], unique=True)

    op.create_table(
        "faculty",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=True, unique=True),
        sa.Column("department", sa.String(length=200), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_faculty_name", "faculty", ["name"])


def downgrade() -> None:
    op.drop_index("ix_faculty_name", table_name="faculty")
    op.drop_table("faculty")
    op.drop_index("ix_buildings_prefix", table_name="buildings")
    op.drop_index("ix_buildings_campus_id", table_name="buildings")
    op.drop_table("buildings")
    op.drop_table("campuses")

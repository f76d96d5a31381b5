"""create schedules and courses

Revision ID: 20261019_0002
Revises: 20261019_0001
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

revision = "20261019_0002"
down_revision = "20261019_0001"
branch_labels = None
depends_on = None


course_state_enum = sa.Enum("UNMODIFIED", "MODIFIED", name="course_state")
course_note_type_enum = sa.Enum("ACADEMIC_AFFAIRS", "DEPARTMENT", "CHANGES", name="course_note_type")

DAY_COLUMNS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")
SEMESTER_COLUMNS = ("summer", "fall", "winter", "spring")


def _flag_columns(prefix: str, names: tuple[str, ...]) -> list[sa.Column]:
    return [
        sa.Column(f"{prefix}_{name}", sa.Boolean(), nullable=False, server_default=sa.text("false"))
        for name in names
    ]


def upgrade() -> None:
    op.create_table(
        "schedules",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    op.create_table(
        "schedule_revisions",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("schedule_id", sa.String(length=36), sa.ForeignKey("schedules.id", ondelete="CASCADE"), nullable=True),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("file_name", sa.String(length=255), nullable=True),
        sa.Column("file", sa.LargeBinary(), nullable=True),
        sa.Column("onboarding", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_schedule_revisions_schedule_id", "schedule_revisions", ["schedule_id"])
    op.create_index("ix_schedule_revisions_onboarding", "schedule_revisions", ["onboarding"])

    op.create_table(
        "courses",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column(
            "revision_id",
            sa.String(length=36),
            sa.ForeignKey("schedule_revisions.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("type", sa.String(length=50), nullable=False, server_default="Unknown"),
        sa.Column("section_id", sa.Integer(), nullable=True),
        sa.Column("term", sa.Integer(), nullable=False),
        *_flag_columns("semester", SEMESTER_COLUMNS),
        sa.Column("div", sa.String(length=50), nullable=False, server_default=""),
        sa.Column("department", sa.String(length=6), nullable=False),
        sa.Column("subject", sa.String(length=6), nullable=False),
        sa.Column("course_number", sa.String(length=20), nullable=False),
        sa.Column("section", sa.String(length=10), nullable=False),
        sa.Column("title", sa.String(length=100), nullable=False),
        sa.Column("instruction_method", sa.String(length=20), nullable=False, server_default="LEC"),
        sa.Column("campus", sa.String(length=100), nullable=True),
        sa.Column("credits", sa.Integer(), nullable=False),
        sa.Column("capacity", sa.Integer(), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="Active"),
        sa.Column("state", course_state_enum, nullable=False, server_default="UNMODIFIED"),
        sa.Column("original_state", course_state_enum, nullable=False, server_default="UNMODIFIED"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_courses_revision_id", "courses", ["revision_id"])
    op.create_index("ix_courses_department", "courses", ["department"])

    op.create_table(
        "course_faculty",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("course_id", sa.String(length=36), sa.ForeignKey("courses.id", ondelete="CASCADE"), nullable=False),
        sa.Column("faculty_id", sa.String(length=36), sa.ForeignKey("faculty.id", ondelete="SET NULL"), nullable=True),
        sa.Column("faculty_name", sa.String(length=200), nullable=True),
    )
    op.create_index("ix_course_faculty_course_id", "course_faculty", ["course_id"])
    op.create_index("ix_course_faculty_faculty_id", "course_faculty", ["faculty_id"])

    op.create_table(
        "course_locations",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("course_id", sa.String(length=36), sa.ForeignKey("courses.id", ondelete="CASCADE"), nullable=False),
        *_flag_columns("day", DAY_COLUMNS),
        sa.Column("start_time", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("end_time", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_online", sa.Boolean(), nullable=False, server_default=sa.text("false")),
    )
    op.create_index("ix_course_locations_course_id", "course_locations", ["course_id"])

    op.create_table(
        "course_rooms",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column(
            "location_id",
            sa.String(length=36),
            sa.ForeignKey("course_locations.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("building_id", sa.String(length=36), sa.ForeignKey("buildings.id", ondelete="SET NULL"), nullable=True),
        sa.Column("building_label", sa.String(length=50), nullable=True),
        sa.Column("room", sa.String(length=50), nullable=False, server_default=""),
    )
    op.create_index("ix_course_rooms_location_id", "course_rooms", ["location_id"])
    op.create_index("ix_course_rooms_building_id", "course_rooms", ["building_id"])

    op.create_table(
        "course_notes",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("course_id", sa.String(length=36), sa.ForeignKey("courses.id", ondelete="CASCADE"), nullable=False),
        sa.Column("type", course_note_type_enum, nullable=False),
        sa.Column("note", sa.Text(), nullable=False, server_default=""),
    )
    op.create_index("ix_course_notes_course_id", "course_notes", ["course_id"])


def downgrade() -> None:
    op.drop_index("ix_course_notes_course_id", table_name="course_notes")
    op.drop_table("course_notes")
    op.drop_index("ix_course_rooms_building_id", table_name="course_rooms")
    op.drop_index("ix_course_rooms_location_id", table_name="course_rooms")
    op.drop_table("course_rooms")
    op.drop_index("ix_course_locations_course_id", table_name="course_locations")
    op.drop_table("course_locations")
    op.drop_index("ix_course_faculty_faculty_id", table_name="course_faculty")
    op.drop_index("ix_course_faculty_course_id", table_name="course_faculty")
    op.drop_table("course_faculty")
    op.drop_index("ix_courses_department", table_name="courses")
    op.drop_index("ix_courses_revision_id", table_name="courses")
    op.drop_table("courses")
    op.drop_index("ix_schedule_revisions_onboarding", table_name="schedule_revisions")
    op.drop_index("ix_schedule_revisions_schedule_id", table_name="schedule_revisions")
    op.drop_table("schedule_revisions")
    op.drop_table("schedules")
    course_note_type_enum.drop(op.get_bind(), checkfirst=True)
    course_state_enum.drop(op.get_bind(), checkfirst=True)

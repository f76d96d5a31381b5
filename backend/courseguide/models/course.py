import uuid
from datetime import date, datetime
from enum import Enum

from sqlalchemy import Boolean, Date, DateTime, Enum as SAEnum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from courseguide.db.base import Base
from courseguide.models.building import Building
from courseguide.models.faculty import Faculty
from courseguide.models.mixins import DayFlagsMixin, SemesterFlagsMixin
from courseguide.models.schedule import ScheduleRevision


def _enum_values(enum_cls) -> list[str]:
    return [item.value for item in enum_cls]


class CourseState(str, Enum):
    unmodified = "UNMODIFIED"
    modified = "MODIFIED"


class CourseNoteType(str, Enum):
    academic_affairs = "ACADEMIC_AFFAIRS"
    department = "DEPARTMENT"
    changes = "CHANGES"


class Course(SemesterFlagsMixin, Base):
    __tablename__ = "courses"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    revision_id: Mapped[str] = mapped_column(
        ForeignKey("schedule_revisions.id", ondelete="CASCADE"), nullable=False, index=True
    )
    type: Mapped[str] = mapped_column(String(50), nullable=False, default="Unknown")
    section_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    term: Mapped[int] = mapped_column(Integer, nullable=False)
    div: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    department: Mapped[str] = mapped_column(String(6), nullable=False, index=True)
    subject: Mapped[str] = mapped_column(String(6), nullable=False)
    course_number: Mapped[str] = mapped_column(String(20), nullable=False)
    section: Mapped[str] = mapped_column(String(10), nullable=False)
    title: Mapped[str] = mapped_column(String(100), nullable=False)
    instruction_method: Mapped[str] = mapped_column(String(20), nullable=False, default="LEC")
    campus: Mapped[str | None] = mapped_column(String(100), nullable=True)
    credits: Mapped[int] = mapped_column(Integer, nullable=False)
    capacity: Mapped[int] = mapped_column(Integer, nullable=False)
    start_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="Active")
    state: Mapped[CourseState] = mapped_column(
        SAEnum(CourseState, name="course_state", values_callable=_enum_values), nullable=False, default=CourseState.unmodified
    )
    original_state: Mapped[CourseState] = mapped_column(
        SAEnum(CourseState, name="course_state", values_callable=_enum_values), nullable=False, default=CourseState.unmodified
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), onupdate=func.now())

    revision: Mapped[ScheduleRevision] = relationship(back_populates="courses")
    faculty: Mapped[list["CourseFaculty"]] = relationship(
        back_populates="course", cascade="all, delete-orphan"
    )
    locations: Mapped[list["CourseLocation"]] = relationship(
        back_populates="course", cascade="all, delete-orphan"
    )
    notes: Mapped[list["CourseNote"]] = relationship(
        back_populates="course", cascade="all, delete-orphan"
    )

    def meeting_count(self) -> int:
        return sum(location.day_count() for location in self.locations)


class CourseFaculty(Base):
    """Faculty link; ``faculty_id`` is null when the name did not resolve."""

    __tablename__ = "course_faculty"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    course_id: Mapped[str] = mapped_column(ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True)
    faculty_id: Mapped[str | None] = mapped_column(
        ForeignKey("faculty.id", ondelete="SET NULL"), nullable=True, index=True
    )
    faculty_name: Mapped[str | None] = mapped_column(String(200), nullable=True)

    course: Mapped[Course] = relationship(back_populates="faculty")
    faculty: Mapped[Faculty | None] = relationship()


class CourseLocation(DayFlagsMixin, Base):
    __tablename__ = "course_locations"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    course_id: Mapped[str] = mapped_column(ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True)
    start_time: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    end_time: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_online: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    course: Mapped[Course] = relationship(back_populates="locations")
    rooms: Mapped[list["CourseRoom"]] = relationship(
        back_populates="location", cascade="all, delete-orphan"
    )


class CourseRoom(Base):
    """Room of a location; ``building_id`` is null when the prefix did not resolve."""

    __tablename__ = "course_rooms"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    location_id: Mapped[str] = mapped_column(
        ForeignKey("course_locations.id", ondelete="CASCADE"), nullable=False, index=True
    )
    building_id: Mapped[str | None] = mapped_column(
        ForeignKey("buildings.id", ondelete="SET NULL"), nullable=True, index=True
    )
    building_label: Mapped[str | None] = mapped_column(String(50), nullable=True)
    room: Mapped[str] = mapped_column(String(50), nullable=False, default="")

    location: Mapped[CourseLocation] = relationship(back_populates="rooms")
    building: Mapped[Building | None] = relationship()


class CourseNote(Base):
    __tablename__ = "course_notes"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    course_id: Mapped[str] = mapped_column(ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True)
    type: Mapped[CourseNoteType] = mapped_column(
        SAEnum(CourseNoteType, name="course_note_type", values_callable=_enum_values), nullable=False
    )
    note: Mapped[str] = mapped_column(Text, nullable=False, default="")

    course: Mapped[Course] = relationship(back_populates="notes")

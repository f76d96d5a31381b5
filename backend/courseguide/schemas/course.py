from __future__ import annotations

from datetime import date
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator

from courseguide.models.course import CourseNoteType, CourseState
from courseguide.services.day_pattern import format_days, pattern_from_columns
from courseguide.services.term_codec import current_two_digit_year
from courseguide.services.time_codec import format_time

TERM_YEAR_WINDOW = 2
# Column widths of CourseRoom.building_label and CourseFaculty.faculty_name.
BUILDING_LABEL_MAX = 50
FACULTY_NAME_MAX = 200


class ResolvedReference(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["resolved"] = "resolved"
    id: str


class UnresolvedReference(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["unresolved"] = "unresolved"
    raw_text: str


EntityReference = Annotated[ResolvedReference | UnresolvedReference, Field(discriminator="kind")]


class DayFlags(BaseModel):
    day_monday: bool = False
    day_tuesday: bool = False
    day_wednesday: bool = False
    day_thursday: bool = False
    day_friday: bool = False
    day_saturday: bool = False
    day_sunday: bool = False

    def has_any_day(self) -> bool:
        return any(
            (
                self.day_monday,
                self.day_tuesday,
                self.day_wednesday,
                self.day_thursday,
                self.day_friday,
                self.day_saturday,
                self.day_sunday,
            )
        )


class SemesterFlags(BaseModel):
    semester_summer: bool = False
    semester_fall: bool = False
    semester_winter: bool = False
    semester_spring: bool = False

    def has_any_semester(self) -> bool:
        return any((self.semester_summer, self.semester_fall, self.semester_winter, self.semester_spring))


def check_fallback_length(reference: ResolvedReference | UnresolvedReference, limit: int):
    if isinstance(reference, UnresolvedReference) and len(reference.raw_text) > limit:
        raise ValueError(f"Unmatched name must be at most {limit} characters")
    return reference


class RoomRow(BaseModel):
    model_config = ConfigDict(frozen=True)

    building: EntityReference
    room: str = Field(default="", max_length=50)

    @field_validator("building")
    @classmethod
    def validate_building_label(cls, value):
        return check_fallback_length(value, BUILDING_LABEL_MAX)


class LocationRow(DayFlags):
    model_config = ConfigDict(frozen=True)

    start_time: int = Field(ge=0, le=2359)
    end_time: int = Field(ge=0, le=2359)
    is_online: bool = False
    rooms: list[RoomRow] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_days(self) -> "LocationRow":
        if not self.has_any_day():
            raise ValueError("A location must meet on at least one day")
        return self


class FacultyLinkRow(BaseModel):
    model_config = ConfigDict(frozen=True)

    faculty: EntityReference

    @field_validator("faculty")
    @classmethod
    def validate_faculty_name(cls, value):
        return check_fallback_length(value, FACULTY_NAME_MAX)


class NoteRow(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: CourseNoteType
    note: str = ""


class CourseRow(SemesterFlags):
    """One spreadsheet section after mapping and reference resolution."""

    model_config = ConfigDict(frozen=True)

    type: str = Field(default="Unknown", max_length=50)
    section_id: int | None = Field(default=None, ge=1)
    term: int
    div: str = Field(default="", max_length=50)
    department: str = Field(min_length=2, max_length=6)
    subject: str = Field(min_length=2, max_length=6)
    course_number: str = Field(min_length=1, max_length=20)
    section: int = Field(ge=0, le=500)
    title: str = Field(min_length=7, max_length=100)
    instruction_method: str = Field(default="LEC", max_length=20)
    campus: str | None = Field(default=None, max_length=100)
    credits: int = Field(ge=0, le=12)
    capacity: int = Field(ge=1, le=500)
    start_date: date | None = None
    end_date: date | None = None
    status: str = Field(default="Active", max_length=20)
    faculty: list[FacultyLinkRow] = Field(min_length=1)
    notes: list[NoteRow] = Field(min_length=3)
    locations: list[LocationRow] = Field(default_factory=list)

    @field_validator("term")
    @classmethod
    def validate_term(cls, value: int) -> int:
        current = current_two_digit_year()
        if not current - TERM_YEAR_WINDOW <= value <= current + TERM_YEAR_WINDOW:
            raise ValueError(f"Term year must be within {TERM_YEAR_WINDOW} years of {current:02d}")
        return value

    @model_validator(mode="after")
    def validate_semester(self) -> "CourseRow":
        if not self.has_any_semester():
            raise ValueError("A course must have a semester defined based on the term")
        return self


class RoomOut(BaseModel):
    id: str
    building_id: str | None
    building_label: str | None
    room: str

    model_config = {"from_attributes": True}

    @computed_field
    @property
    def resolved(self) -> bool:
        return self.building_id is not None


class LocationOut(DayFlags):
    id: str
    start_time: int
    end_time: int
    is_online: bool
    rooms: list[RoomOut]

    model_config = {"from_attributes": True}

    @computed_field
    @property
    def days(self) -> str:
        return format_days(pattern_from_columns(self))

    @computed_field
    @property
    def display_time(self) -> str:
        return f"{format_time(self.start_time)} - {format_time(self.end_time)}"


class FacultyLinkOut(BaseModel):
    id: str
    faculty_id: str | None
    faculty_name: str | None

    model_config = {"from_attributes": True}

    @computed_field
    @property
    def resolved(self) -> bool:
        return self.faculty_id is not None


class NoteOut(BaseModel):
    id: str
    type: CourseNoteType
    note: str

    model_config = {"from_attributes": True}


class CourseOut(SemesterFlags):
    id: str
    revision_id: str
    type: str
    section_id: int | None
    term: int
    div: str
    department: str
    subject: str
    course_number: str
    section: str
    title: str
    instruction_method: str
    campus: str | None
    credits: int
    capacity: int
    start_date: date | None
    end_date: date | None
    status: str
    state: CourseState
    original_state: CourseState
    faculty: list[FacultyLinkOut]
    locations: list[LocationOut]
    notes: list[NoteOut]
    within_guideline: bool | None = None

    model_config = {"from_attributes": True}

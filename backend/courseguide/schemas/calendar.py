from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from courseguide.schemas.course import CourseOut
from courseguide.services.term_codec import SEMESTER_CODES


class CalendarFilters(BaseModel):
    semester: str | None = None
    faculty: list[str] = Field(default_factory=list)
    buildings: list[str] = Field(default_factory=list)
    departments: list[str] = Field(default_factory=list)
    credits: int | None = Field(default=None, ge=0, le=12)

    @field_validator("semester")
    @classmethod
    def validate_semester(cls, value: str | None) -> str | None:
        if value is None:
            return None
        code = value.strip().upper()
        if code not in SEMESTER_CODES:
            raise ValueError(f"Semester must be one of {', '.join(SEMESTER_CODES)}")
        return code


class CalendarOut(BaseModel):
    revision_id: str
    revision_name: str
    semester: str | None
    monday_courses: list[CourseOut]
    tuesday_courses: list[CourseOut]
    wednesday_courses: list[CourseOut]
    thursday_courses: list[CourseOut]
    friday_courses: list[CourseOut]
    saturday_courses: list[CourseOut]
    sunday_courses: list[CourseOut]

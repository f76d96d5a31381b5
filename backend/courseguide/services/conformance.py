"""Decide whether a persisted course fits at least one scheduling guideline.

A guideline matches when the semester, credits and meeting count agree, every
one of its day records covers all the days the course meets, and every one
of its time records equals the time of every course location. A guideline
without day or time records satisfies those checks vacuously.
"""

from __future__ import annotations

from typing import Iterable, Protocol

from sqlalchemy import and_, exists, false, func, not_, or_, select
from sqlalchemy.orm import Session

from courseguide.models.course import Course
from courseguide.models.guideline import Guideline, GuidelineDay, GuidelineTime
from courseguide.models.mixins import DAY_COLUMNS, SEMESTER_COLUMNS
from courseguide.schemas.course import CourseOut


class ConformanceMatcher(Protocol):
    def matches(self, course: Course) -> bool:
        ...


class StrictConformanceMatcher:
    """Time records must equal every location's start and end exactly."""

    def __init__(self, db: Session):
        self.db = db

    def semester_condition(self, course: Course):
        clauses = [getattr(Guideline, column) for column in SEMESTER_COLUMNS if getattr(course, column)]
        if not clauses:
            return false()
        return or_(*clauses)

    def day_condition(self, course: Course):
        required = [
            column for column in DAY_COLUMNS if any(getattr(location, column) for location in course.locations)
        ]
        if not required:
            return None
        uncovered = or_(*[not_(getattr(GuidelineDay, column)) for column in required])
        return ~exists().where(GuidelineDay.guideline_id == Guideline.id, uncovered)

    def time_condition(self, course: Course):
        if not course.locations:
            return None
        mismatch = or_(
            *[
                or_(
                    GuidelineTime.start_time != location.start_time,
                    GuidelineTime.end_time != location.end_time,
                )
                for location in course.locations
            ]
        )
        return ~exists().where(GuidelineTime.guideline_id == Guideline.id, mismatch)

    def conditions(self, course: Course) -> list:
        conditions = [
            self.semester_condition(course),
            Guideline.credits == course.credits,
            Guideline.meeting_amount == course.meeting_count(),
        ]
        for condition in (self.day_condition(course), self.time_condition(course)):
            if condition is not None:
                conditions.append(condition)
        return conditions

    def matches(self, course: Course) -> bool:
        count = self.db.execute(
            select(func.count(Guideline.id)).where(and_(*self.conditions(course)))
        ).scalar_one()
        return count > 0


def annotate_courses(
    courses: Iterable[Course], matcher: ConformanceMatcher
) -> list[CourseOut]:
    annotated = []
    for course in courses:
        payload = CourseOut.model_validate(course)
        payload.within_guideline = matcher.matches(course)
        annotated.append(payload)
    return annotated

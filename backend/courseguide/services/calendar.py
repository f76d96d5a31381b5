from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from courseguide.core.exceptions import ResourceNotFoundError
from courseguide.models.course import Course, CourseFaculty, CourseLocation, CourseRoom
from courseguide.models.mixins import DAY_COLUMNS
from courseguide.models.schedule import ScheduleRevision
from courseguide.schemas.calendar import CalendarFilters, CalendarOut
from courseguide.schemas.course import CourseOut
from courseguide.services.conformance import ConformanceMatcher, StrictConformanceMatcher, annotate_courses
from courseguide.services.term_codec import SEMESTER_CODES, SEMESTER_TITLES

# Tabs are shown in academic-year order rather than code order.
SEMESTER_ORDER = ("FA", "WI", "SP", "SU")


def get_revision(db: Session, revision_id: str) -> ScheduleRevision:
    revision = db.get(ScheduleRevision, revision_id)
    if revision is None:
        raise ResourceNotFoundError("Schedule revision", revision_id)
    return revision


def course_query(revision_id: str):
    return (
        select(Course)
        .where(Course.revision_id == revision_id)
        .options(
            selectinload(Course.faculty),
            selectinload(Course.notes),
            selectinload(Course.locations).selectinload(CourseLocation.rooms),
        )
        .order_by(Course.department, Course.subject, Course.course_number, Course.section)
    )


def list_revision_courses(
    db: Session, revision_id: str, matcher: ConformanceMatcher | None = None
) -> list[CourseOut]:
    get_revision(db, revision_id)
    courses = db.execute(course_query(revision_id)).scalars().all()
    return annotate_courses(courses, matcher or StrictConformanceMatcher(db))


def revision_semesters(db: Session, revision_id: str) -> list[dict[str, str]]:
    get_revision(db, revision_id)
    semesters = []
    for code in SEMESTER_ORDER:
        column = getattr(Course, SEMESTER_CODES[code])
        present = db.execute(
            select(Course.id).where(Course.revision_id == revision_id, column.is_(True)).limit(1)
        ).first()
        if present is not None:
            semesters.append({"code": code, "title": SEMESTER_TITLES[code]})
    return semesters


def revision_calendar(
    db: Session,
    revision_id: str,
    filters: CalendarFilters,
    matcher: ConformanceMatcher | None = None,
) -> CalendarOut:
    revision = get_revision(db, revision_id)

    query = course_query(revision_id)
    if filters.semester:
        query = query.where(getattr(Course, SEMESTER_CODES[filters.semester]).is_(True))
    if filters.faculty:
        query = query.where(Course.faculty.any(CourseFaculty.faculty_id.in_(filters.faculty)))
    if filters.buildings:
        query = query.where(
            Course.locations.any(CourseLocation.rooms.any(CourseRoom.building_id.in_(filters.buildings)))
        )
    if filters.departments:
        query = query.where(Course.department.in_(filters.departments))
    if filters.credits is not None:
        query = query.where(Course.credits == filters.credits)

    courses = db.execute(query).scalars().all()
    annotated = annotate_courses(courses, matcher or StrictConformanceMatcher(db))

    by_day: dict[str, list[CourseOut]] = {column: [] for column in DAY_COLUMNS}
    for course, payload in zip(courses, annotated):
        for column in DAY_COLUMNS:
            if any(getattr(location, column) for location in course.locations):
                by_day[column].append(payload)

    return CalendarOut(
        revision_id=revision.id,
        revision_name=revision.name,
        semester=filters.semester,
        **{f"{column.removeprefix('day_')}_courses": payload for column, payload in by_day.items()},
    )

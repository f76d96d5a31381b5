"""Turn an onboarding revision's spreadsheet into committed courses.

parse -> map -> resolve -> validate -> commit. Verification runs the same
steps and stops before writing anything. The commit is one transaction that
creates the schedule, flips the revision's ``onboarding`` flag with a
compare-and-swap and inserts every course with its children. If two requests
commit the same revision, only one of them sees the flag still set.
"""

from __future__ import annotations

import logging
from enum import Enum

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from courseguide.core.config import Settings, get_settings
from courseguide.core.exceptions import IngestionError, RevisionNotOnboardingError, TransactionFailureError
from courseguide.models.course import Course, CourseFaculty, CourseLocation, CourseNote, CourseRoom, CourseState
from courseguide.models.schedule import Schedule, ScheduleRevision
from courseguide.schemas.course import CourseRow, ResolvedReference
from courseguide.schemas.revision import ColumnMapping, IngestionResult
from courseguide.services.column_mapper import project_rows
from courseguide.services.entity_resolver import EntityResolver, Reference, session_factory_for
from courseguide.services.row_validator import validate_rows
from courseguide.services.spreadsheet import read_first_sheet

logger = logging.getLogger(__name__)


class IngestionMode(str, Enum):
    verify_only = "verify_only"
    commit = "commit"


def reference_columns(reference: Reference) -> tuple[str | None, str | None]:
    if isinstance(reference, ResolvedReference):
        return reference.id, None
    return None, reference.raw_text


def build_course(revision_id: str, row: CourseRow) -> Course:
    faculty = []
    for link in row.faculty:
        faculty_id, faculty_name = reference_columns(link.faculty)
        faculty.append(CourseFaculty(faculty_id=faculty_id, faculty_name=faculty_name))

    locations = []
    for location in row.locations:
        rooms = []
        for room in location.rooms:
            building_id, building_label = reference_columns(room.building)
            rooms.append(CourseRoom(building_id=building_id, building_label=building_label, room=room.room))
        locations.append(
            CourseLocation(
                **location.model_dump(exclude={"rooms"}),
                rooms=rooms,
            )
        )

    return Course(
        revision_id=revision_id,
        type=row.type,
        section_id=row.section_id,
        term=row.term,
        semester_summer=row.semester_summer,
        semester_fall=row.semester_fall,
        semester_winter=row.semester_winter,
        semester_spring=row.semester_spring,
        div=row.div,
        department=row.department,
        subject=row.subject,
        course_number=row.course_number,
        section=str(row.section),
        title=row.title,
        instruction_method=row.instruction_method,
        campus=row.campus,
        credits=row.credits,
        capacity=row.capacity,
        start_date=row.start_date,
        end_date=row.end_date,
        status=row.status,
        state=CourseState.unmodified,
        original_state=CourseState.unmodified,
        faculty=faculty,
        locations=locations,
        notes=[CourseNote(type=note.type, note=note.note) for note in row.notes],
    )


class IngestionPipeline:
    def __init__(self, db: Session, settings: Settings | None = None, resolver: EntityResolver | None = None):
        self.db = db
        self.settings = settings or get_settings()
        self.resolver = resolver or EntityResolver(
            session_factory_for(db),
            max_workers=self.settings.resolver_max_workers,
        )

    def load_revision(self, revision_id: str) -> ScheduleRevision:
        revision = self.db.execute(
            select(ScheduleRevision).where(
                ScheduleRevision.id == revision_id,
                ScheduleRevision.onboarding.is_(True),
            )
        ).scalar_one_or_none()
        if revision is None:
            raise RevisionNotOnboardingError(revision_id)
        return revision

    def prepare(self, revision: ScheduleRevision, mapping: ColumnMapping) -> list[CourseRow]:
        sheet = read_first_sheet(revision.file)
        rows = project_rows(sheet, mapping.as_index_map())
        drafts = self.resolver.resolve_rows(rows)
        return validate_rows([(row.row_number, draft) for row, draft in zip(rows, drafts)])

    def commit(self, revision_id: str, name: str, rows: list[CourseRow]) -> Schedule:
        try:
            schedule = Schedule()
            self.db.add(schedule)
            self.db.flush()

            result = self.db.execute(
                update(ScheduleRevision)
                .where(ScheduleRevision.id == revision_id, ScheduleRevision.onboarding.is_(True))
                .values(name=name, onboarding=False, schedule_id=schedule.id)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount != 1:
                self.db.rollback()
                logger.warning("Revision %s was committed by a concurrent request", revision_id)
                raise TransactionFailureError("Revision is no longer onboarding")

            self.db.add_all([build_course(revision_id, row) for row in rows])
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Committing revision %s failed", revision_id)
            raise TransactionFailureError() from exc

        self.db.refresh(schedule)
        return schedule

    def run(
        self,
        revision_id: str,
        mapping: ColumnMapping,
        mode: IngestionMode,
        name: str | None = None,
    ) -> IngestionResult:
        logger.info("Ingestion %s started for revision %s", mode.value, revision_id)
        try:
            revision = self.load_revision(revision_id)
            rows = self.prepare(revision, mapping)
            if mode is IngestionMode.verify_only:
                logger.info("Revision %s verified with %s course(s)", revision_id, len(rows))
                return IngestionResult(success=True, course_count=len(rows))

            schedule = self.commit(revision_id, name or revision.name, rows)
        except IngestionError as exc:
            return IngestionResult.from_error(exc)

        logger.info("Revision %s committed %s course(s) to schedule %s", revision_id, len(rows), schedule.id)
        return IngestionResult(success=True, schedule_id=schedule.id, course_count=len(rows))


def verify_organized_columns(db: Session, revision_id: str, mapping: ColumnMapping) -> IngestionResult:
    return IngestionPipeline(db).run(revision_id, mapping, IngestionMode.verify_only)


def create_schedule_revision(db: Session, revision_id: str, mapping: ColumnMapping, name: str) -> IngestionResult:
    return IngestionPipeline(db).run(revision_id, mapping, IngestionMode.commit, name=name)

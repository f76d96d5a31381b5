"""Resolve building and faculty tokens and assemble canonical course drafts.

Lookups are plain reads, so each distinct token is resolved once per batch
on a bounded thread pool. Every worker opens its own session; a SQLAlchemy
session must never be shared between threads. A miss is not an error: the
raw token is kept as an ``UnresolvedReference`` and persisted as fallback
text next to a null foreign key.
"""

from __future__ import annotations

import logging
import re
from concurrent.futures import ThreadPoolExecutor
from datetime import date, timedelta

from sqlalchemy import func, select
from sqlalchemy.orm import Session, sessionmaker

from courseguide.models.building import Building
from courseguide.models.course import CourseNoteType
from courseguide.models.faculty import Faculty
from courseguide.schemas.course import ResolvedReference, UnresolvedReference
from courseguide.services.column_mapper import MappedRow
from courseguide.services.day_pattern import parse_days
from courseguide.services.term_codec import parse_term
from courseguide.services.time_codec import parse_time

logger = logging.getLogger(__name__)

LINE_BREAK = re.compile(r"\r\n|\n|\r")
LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
ONLINE_BUILDING = "ONL"
# Excel serial day 1 is 1900-01-01 once the 1900 leap-year bug is accounted for.
EXCEL_EPOCH = date(1899, 12, 30)

NOTE_COLUMNS = (
    ("noteAcademicAffairs", CourseNoteType.academic_affairs),
    ("notePrintedComments", CourseNoteType.department),
    ("noteWhatHasChanged", CourseNoteType.changes),
)

Reference = ResolvedReference | UnresolvedReference


def split_lines(value: str | None) -> list[str]:
    if not value or not value.strip():
        return []
    return [line.strip() for line in LINE_BREAK.split(value.strip())]


def parse_int_lenient(value: str | None, default: int = 0) -> int:
    match = LEADING_INT.match(value or "")
    if match is None:
        return default
    return int(match.group(1))


def parse_sheet_date(value: str | None) -> date | None:
    text = (value or "").strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        pass
    serial = parse_int_lenient(text)
    if serial <= 0:
        return None
    return EXCEL_EPOCH + timedelta(days=serial)


def is_online_token(token: str) -> bool:
    return token.strip().upper() == ONLINE_BUILDING


class EntityResolver:
    def __init__(self, session_factory: sessionmaker, max_workers: int = 8):
        self.session_factory = session_factory
        self.max_workers = max(1, max_workers)

    def lookup_building(self, prefix: str) -> Reference:
        with self.session_factory() as session:
            building_id = session.execute(
                select(Building.id).where(Building.prefix == prefix).limit(1)
            ).scalar_one_or_none()
        if building_id is None:
            logger.debug("Unresolved building prefix %r", prefix)
            return UnresolvedReference(raw_text=prefix)
        return ResolvedReference(id=building_id)

    def lookup_faculty(self, name: str) -> Reference:
        with self.session_factory() as session:
            faculty_id = session.execute(
                select(Faculty.id).where(func.lower(Faculty.name) == name.lower()).limit(1)
            ).scalar_one_or_none()
        if faculty_id is None:
            logger.debug("Unresolved faculty name %r", name)
            return UnresolvedReference(raw_text=name)
        return ResolvedReference(id=faculty_id)

    def resolve_references(
        self, rows: list[MappedRow]
    ) -> tuple[dict[str, Reference], dict[str, Reference]]:
        prefixes: list[str] = []
        names: list[str] = []
        for row in rows:
            for token in split_lines(row.get("building")):
                if token and not is_online_token(token) and token not in prefixes:
                    prefixes.append(token)
            for token in split_lines(row.get("faculty")):
                if token and token not in names:
                    names.append(token)

        width = len(prefixes) + len(names)
        if width == 0:
            return {}, {}

        workers = min(self.max_workers, width)
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="resolver") as executor:
            building_results = list(executor.map(self.lookup_building, prefixes))
            faculty_results = list(executor.map(self.lookup_faculty, names))

        return dict(zip(prefixes, building_results)), dict(zip(names, faculty_results))

    def resolve_rows(self, rows: list[MappedRow]) -> list[dict]:
        """Return one canonical draft per row, in sheet order."""
        buildings, faculty = self.resolve_references(rows)
        return [build_draft(row, buildings, faculty) for row in rows]


def build_locations(row: MappedRow, buildings: dict[str, Reference]) -> list[dict]:
    building_tokens = split_lines(row.get("building"))
    rooms = split_lines(row.get("room"))
    start_times = split_lines(row.get("start_time"))
    end_times = split_lines(row.get("end_time"))
    day_lines = split_lines(row.get("days"))
    whole_days = parse_days(row.get("days"))

    locations = []
    for index, token in enumerate(building_tokens):
        if len(day_lines) < len(building_tokens):
            days = whole_days
        else:
            days = parse_days(day_lines[index])

        online = is_online_token(token)
        location_rooms = []
        if not online:
            location_rooms.append(
                {
                    "building": buildings.get(token) or UnresolvedReference(raw_text=token),
                    "room": rooms[index] if index < len(rooms) else "",
                }
            )

        locations.append(
            {
                **days.as_columns(),
                "start_time": parse_time(start_times[index]) if index < len(start_times) else 0,
                "end_time": parse_time(end_times[index]) if index < len(end_times) else 0,
                "is_online": online,
                "rooms": location_rooms,
            }
        )
    return locations


def build_draft(row: MappedRow, buildings: dict[str, Reference], faculty: dict[str, Reference]) -> dict:
    term = parse_term(row.get("term"))
    section_id_text = row.get("section_id").strip()

    return {
        "type": "Unknown",
        "section_id": parse_int_lenient(section_id_text) if section_id_text else None,
        "term": term.year,
        **term.semester_flags(),
        "div": row.get("div").strip(),
        "department": row.get("department").strip(),
        "subject": row.get("subject").strip(),
        "course_number": row.get("course_number").strip(),
        "section": parse_int_lenient(row.get("section")),
        "title": row.get("title").strip(),
        "instruction_method": row.get("instruction_method").strip() or "LEC",
        "campus": row.get("campus").strip() or None,
        "credits": parse_int_lenient(row.get("credits")),
        "capacity": parse_int_lenient(row.get("capacity")),
        "start_date": parse_sheet_date(row.get("start_date")),
        "end_date": parse_sheet_date(row.get("end_date")),
        "faculty": [
            {"faculty": faculty.get(name) or UnresolvedReference(raw_text=name)}
            for name in split_lines(row.get("faculty"))
            if name
        ],
        "locations": build_locations(row, buildings),
        "notes": [{"type": note_type, "note": row.get(column)} for column, note_type in NOTE_COLUMNS],
    }


def session_factory_for(db: Session) -> sessionmaker:
    return sessionmaker(bind=db.get_bind(), autocommit=False, autoflush=False)

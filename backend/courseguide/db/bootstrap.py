from __future__ import annotations

import logging

from sqlalchemy import inspect

from courseguide.db.base import Base
from courseguide.db.session import engine
import courseguide.models  # noqa: F401

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS: dict[str, set[str]] = {
    "buildings": {"id", "prefix", "name"},
    "faculty": {"id", "name"},
    "schedule_revisions": {"id", "schedule_id", "name", "file", "onboarding"},
    "courses": {"id", "revision_id", "term", "credits", "state", "original_state"},
    "course_faculty": {"id", "course_id", "faculty_id", "faculty_name"},
    "course_rooms": {"id", "location_id", "building_id", "building_label"},
    "guidelines": {"id", "credits", "meeting_amount"},
    "guideline_times": {"id", "guideline_id", "start_time", "end_time"},
}


def find_schema_gaps(connection) -> tuple[list[str], dict[str, list[str]]]:
    inspector = inspect(connection)
    table_names = set(inspector.get_table_names())
    missing_tables: list[str] = []
    missing_columns: dict[str, list[str]] = {}
    for table_name, required in REQUIRED_COLUMNS.items():
        if table_name not in table_names:
            missing_tables.append(table_name)
            continue
        existing = {item["name"] for item in inspector.get_columns(table_name)}
        missing = sorted(required - existing)
        if missing:
            missing_columns[table_name] = missing
    return sorted(missing_tables), missing_columns


def _assert_required_columns() -> None:
    with engine.begin() as connection:
        missing_tables, missing_columns = find_schema_gaps(connection)
    if missing_tables:
        raise RuntimeError(f"Missing required tables: {', '.join(missing_tables)}")
    if missing_columns:
        flattened = [f"{table}.{column}" for table, columns in missing_columns.items() for column in columns]
        raise RuntimeError(f"Missing required columns: {', '.join(flattened)}")


def ensure_runtime_schema_compatibility() -> None:
    try:
        Base.metadata.create_all(bind=engine)
        _assert_required_columns()
    except Exception as exc:  # pragma: no cover - runtime environment dependent
        logger.exception("Runtime schema compatibility bootstrap failed")
        raise RuntimeError("Runtime schema compatibility bootstrap failed") from exc

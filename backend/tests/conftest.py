import os
import tempfile
from io import BytesIO
from pathlib import Path

# The app bootstraps its own engine on startup; keep it off the real database.
os.environ.setdefault(
    "DATABASE_URL",
    f"sqlite+pysqlite:///{Path(tempfile.mkdtemp(prefix='courseguide-')) / 'app.db'}",
)

import pytest
from fastapi.testclient import TestClient
from openpyxl import Workbook
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from courseguide.api.deps import get_db
from courseguide.db.base import Base
from courseguide.main import app
from courseguide.models.building import Building, Campus
from courseguide.models.faculty import Faculty
from courseguide.services.column_mapper import COURSE_FIELDS
from courseguide.services.term_codec import current_two_digit_year

COLUMN_MAPPING = {name: index for index, name in enumerate(COURSE_FIELDS)}


def course_cells(**overrides) -> list:
    values = {
        "section_id": "1001",
        "term": f"{current_two_digit_year():02d}/FA",
        "div": "AS",
        "department": "CSC",
        "subject": "CSC",
        "course_number": "101",
        "section": "1",
        "title": "Intro to Computing",
        "instruction_method": "LEC",
        "faculty": "Ada Lovelace",
        "campus": "Main",
        "credits": "3",
        "capacity": "30",
        "start_date": "2025-08-25",
        "end_date": "2025-12-12",
        "building": "SCI",
        "room": "101",
        "start_time": "9:00 AM",
        "end_time": "10:15 AM",
        "days": "MW",
        "noteAcademicAffairs": "Approved",
        "notePrintedComments": "Bring a laptop",
        "noteWhatHasChanged": "New room",
    }
    values.update(overrides)
    return [values[name] for name in COURSE_FIELDS]


def workbook_bytes(rows: list[list]) -> bytes:
    workbook = Workbook()
    sheet = workbook.active
    sheet.append(list(COURSE_FIELDS))
    for row in rows:
        sheet.append(row)
    buffer = BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


@pytest.fixture()
def engine(tmp_path):
    # File-backed so resolver worker threads see the same data.
    engine = create_engine(
        f"sqlite+pysqlite:///{tmp_path / 'test.db'}",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db_session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def reference_data(db_session):
    campus = Campus(name="Main")
    science = Building(name="Science Center", prefix="SCI", classrooms="101,102", campus=campus)
    library = Building(name="Library", prefix="LIB", classrooms="1", campus=campus)
    ada = Faculty(name="Ada Lovelace", email="ada@example.com", department="CSC")
    grace = Faculty(name="Grace Hopper", email="grace@example.com", department="CSC")
    db_session.add_all([campus, science, library, ada, grace])
    db_session.commit()
    return {
        "buildings": {"SCI": science.id, "LIB": library.id},
        "faculty": {"Ada Lovelace": ada.id, "Grace Hopper": grace.id},
    }


@pytest.fixture()
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()

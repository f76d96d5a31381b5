"""Seed campuses, buildings, faculty and baseline scheduling guidelines.

Run:
  PYTHONPATH=backend python scripts/seed_reference_data.py
"""

from __future__ import annotations

import os

from sqlalchemy import func, select

from courseguide.db.bootstrap import ensure_runtime_schema_compatibility
from courseguide.db.session import SessionLocal
from courseguide.models.building import Building, Campus
from courseguide.models.faculty import Faculty
from courseguide.models.guideline import Guideline, GuidelineDay, GuidelineTime

MOCK_EMAIL_DOMAIN = os.getenv("SEED_MOCK_EMAIL_DOMAIN", "university.edu").strip().lower() or "university.edu"

CAMPUSES = {
    "Main": [
        ("SCI", "Science Center", "101,102,110,204"),
        ("LIB", "Library", "1,2"),
        ("HUM", "Humanities Hall", "100,120,210"),
    ],
    "North": [
        ("ENG", "Engineering Annex", "A1,A2,B1"),
    ],
}

FACULTY = [
    ("Ada Lovelace", "CSC"),
    ("Grace Hopper", "CSC"),
    ("Katherine Johnson", "MAT"),
    ("Rosalind Franklin", "BIO"),
    ("Toni Morrison", "ENG"),
]

# (semesters, credits, meetings, day patterns, (start, end) windows)
FALL_SPRING = ("semester_fall", "semester_spring")
GUIDELINES = [
    (FALL_SPRING, 3, 2, [("day_monday", "day_wednesday")], [(800, 915), (930, 1045), (1100, 1215)]),
    (FALL_SPRING, 3, 2, [("day_tuesday", "day_thursday")], [(800, 915), (930, 1045), (1230, 1345)]),
    (FALL_SPRING, 3, 3, [("day_monday", "day_wednesday", "day_friday")], [(800, 850), (900, 950)]),
    (FALL_SPRING, 4, 4, [("day_monday", "day_tuesday", "day_wednesday", "day_thursday")], [(800, 850)]),
    (("semester_summer",), 3, 4, [("day_monday", "day_tuesday", "day_wednesday", "day_thursday")], [(900, 1040)]),
    (("semester_winter",), 1, 1, [("day_friday",)], [(1300, 1550)]),
]


def upsert_campus(session, name: str) -> Campus:
    campus = session.execute(select(Campus).where(Campus.name == name)).scalar_one_or_none()
    if campus is None:
        campus = Campus(name=name)
        session.add(campus)
        session.flush()
    return campus


def upsert_building(session, campus: Campus, *, prefix: str, name: str, classrooms: str) -> Building:
    building = session.execute(select(Building).where(Building.prefix == prefix)).scalar_one_or_none()
    if building is None:
        building = Building(prefix=prefix, name=name, classrooms=classrooms, campus=campus)
        session.add(building)
    else:
        building.name = name
        building.classrooms = classrooms
        building.campus = campus
    session.flush()
    return building


def upsert_faculty(session, *, name: str, department: str) -> Faculty:
    existing = session.execute(
        select(Faculty).where(func.lower(Faculty.name) == name.lower())
    ).scalar_one_or_none()
    email = f"{name.lower().replace(' ', '.')}@{MOCK_EMAIL_DOMAIN}"
    if existing is None:
        existing = Faculty(name=name, email=email, department=department)
        session.add(existing)
    else:
        existing.department = department
    session.flush()
    return existing


def seed_guidelines(session) -> None:
    if session.execute(select(func.count(Guideline.id))).scalar_one():
        return
    for semesters, credits, meetings, day_patterns, windows in GUIDELINES:
        session.add(
            Guideline(
                credits=credits,
                meeting_amount=meetings,
                **{column: True for column in semesters},
                days=[GuidelineDay(**{column: True for column in pattern}) for pattern in day_patterns],
                times=[GuidelineTime(start_time=start, end_time=end) for start, end in windows],
            )
        )
    session.flush()


def main() -> None:
    ensure_runtime_schema_compatibility()
    with SessionLocal() as session:
        for campus_name, buildings in CAMPUSES.items():
            campus = upsert_campus(session, campus_name)
            for prefix, name, classrooms in buildings:
                upsert_building(session, campus, prefix=prefix, name=name, classrooms=classrooms)

        for name, department in FACULTY:
            upsert_faculty(session, name=name, department=department)

        seed_guidelines(session)
        session.commit()

        building_count = session.execute(select(func.count(Building.id))).scalar_one()
        faculty_count = session.execute(select(func.count(Faculty.id))).scalar_one()
        guideline_count = session.execute(select(func.count(Guideline.id))).scalar_one()

    print("Reference data seeded successfully.")
    print("")
    print(f"Buildings: {building_count}")
    print(f"Faculty records: {faculty_count}")
    print(f"Guidelines: {guideline_count}")


if __name__ == "__main__":
    main()

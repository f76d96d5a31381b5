"""Project raw spreadsheet rows onto the semantic course fields.

The client tells us which column holds which field. The mapping is inverted
once per batch so every cell is placed with a single dictionary lookup.
Columns nobody mapped are discarded.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time

from courseguide.services.spreadsheet import RawSheet

DISCARD = "_"

COURSE_FIELDS = (
    "section_id",
    "term",
    "div",
    "department",
    "subject",
    "course_number",
    "section",
    "title",
    "instruction_method",
    "faculty",
    "campus",
    "credits",
    "capacity",
    "start_date",
    "end_date",
    "building",
    "room",
    "start_time",
    "end_time",
    "days",
    "noteAcademicAffairs",
    "notePrintedComments",
    "noteWhatHasChanged",
)


@dataclass(frozen=True)
class MappedRow:
    # 1-based, counting the header, so it matches what a user sees in Excel.
    row_number: int
    fields: dict[str, str] = field(default_factory=dict)

    def get(self, name: str) -> str:
        return self.fields.get(name, "")


def invert_mapping(mapping: dict[str, int]) -> dict[int, str]:
    return {index: name for name, index in mapping.items()}


def coerce_cell(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return str(value).upper()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    # Time-formatted cells arrive as time objects; "HH:MM" is what parse_time reads.
    if isinstance(value, time):
        return value.strftime("%H:%M")
    return str(value)


def project_row(cells: list[object], inverted: dict[int, str], mapped_fields: list[str]) -> dict[str, str]:
    record = {name: "" for name in mapped_fields}
    for index, cell in enumerate(cells):
        name = inverted.get(index, DISCARD)
        if name == DISCARD:
            continue
        record[name] = coerce_cell(cell)
    return record


def project_rows(sheet: RawSheet, mapping: dict[str, int]) -> list[MappedRow]:
    inverted = invert_mapping(mapping)
    mapped_fields = list(mapping.keys())

    rows: list[MappedRow] = []
    for offset, cells in enumerate(sheet[1:], start=2):
        record = project_row(cells, inverted, mapped_fields)
        if not any(value.strip() for value in record.values()):
            continue
        rows.append(MappedRow(row_number=offset, fields=record))
    return rows

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

SEMESTER_CODES = {
    "SU": "semester_summer",
    "FA": "semester_fall",
    "WI": "semester_winter",
    "SP": "semester_spring",
}
SEMESTER_TITLES = {"FA": "Fall", "WI": "Winter", "SP": "Spring", "SU": "Summer"}


@dataclass(frozen=True)
class Term:
    year: int
    semester_summer: bool = False
    semester_fall: bool = False
    semester_winter: bool = False
    semester_spring: bool = False

    @property
    def semester(self) -> str | None:
        for code, column in SEMESTER_CODES.items():
            if getattr(self, column):
                return code
        return None

    def semester_flags(self) -> dict[str, bool]:
        return {column: getattr(self, column) for column in SEMESTER_CODES.values()}


def current_two_digit_year() -> int:
    return date.today().year % 100


def parse_term(value: str | None) -> Term:
    """Parse ``"23/FA"`` style terms.

    An unknown semester code leaves every flag false; callers decide whether
    that is acceptable.
    """
    segments = (value or "").split("/")
    try:
        year = int(segments[0].strip())
    except ValueError:
        year = current_two_digit_year()

    code = segments[1].strip() if len(segments) > 1 else ""
    flags = {column: False for column in SEMESTER_CODES.values()}
    if code in SEMESTER_CODES:
        flags[SEMESTER_CODES[code]] = True
    return Term(year=year, **flags)


def semester_flags_for(code: str) -> dict[str, bool]:
    column = SEMESTER_CODES.get(code.upper())
    if column is None:
        raise ValueError(f"Unknown semester code: {code}")
    return {name: name == column for name in SEMESTER_CODES.values()}

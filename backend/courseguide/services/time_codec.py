"""Clock-time text <-> military-time integers.

Spreadsheet times arrive as loose text such as ``"2:30 PM"`` or ``"11:05"``.
They are stored as ``hour * 100 + minute`` (``1430``), which is not a count
of minutes. Parsing never raises: anything malformed becomes ``0``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

LEADING_DIGITS = re.compile(r"^\s*(\d+)")
PM_CUTOFF = 1300


@dataclass(frozen=True)
class TimeSplit:
    hour: int
    minute: int
    ante_meridiem_hour: int
    ante_meridiem: str

    def as_dict(self) -> dict:
        return {
            "hour": self.hour,
            "minute": self.minute,
            "anteMeridiemHour": self.ante_meridiem_hour,
            "anteMeridiem": self.ante_meridiem,
        }


def _leading_int(token: str, max_digits: int | None = None) -> int | None:
    match = LEADING_DIGITS.match(token)
    if match is None:
        return None
    digits = match.group(1)
    if max_digits is not None:
        digits = digits[:max_digits]
    return int(digits)


def parse_time(value: str | None) -> int:
    if not value:
        return 0
    parts = value.split(":")
    if len(parts) != 2:
        return 0

    hour = _leading_int(parts[0])
    minute = _leading_int(parts[1], max_digits=2)
    if hour is None or minute is None:
        return 0

    # Only PM shifts the hour; "12 PM" stays 12 and AM is never subtracted.
    if "pm" in value.lower() and hour != 12:
        hour += 12
    if hour > 23 or minute > 59:
        return 0
    return hour * 100 + minute


def split_time(value: int) -> TimeSplit:
    hour = value // 100
    minute = value % 100
    ante_meridiem_hour = hour % 12 or 12
    return TimeSplit(
        hour=hour,
        minute=minute,
        ante_meridiem_hour=ante_meridiem_hour,
        ante_meridiem="PM" if value >= PM_CUTOFF else "AM",
    )


def format_time(value: int) -> str:
    split = split_time(value)
    return f"{split.ante_meridiem_hour}:{split.minute:02d} {split.ante_meridiem}"


def to_minutes(value: int) -> int:
    split = split_time(value)
    return split.hour * 60 + split.minute


def elapsed(start: int, end: int) -> dict[str, int]:
    total = to_minutes(end) - to_minutes(start)
    hours, minutes = divmod(total, 60)
    return {"hours": hours, "minutes": minutes}


def is_valid_military_time(value: int) -> bool:
    return 0 <= value <= 2359 and value % 100 < 60

from __future__ import annotations

from dataclasses import asdict, dataclass

DAY_LABELS = (
    ("monday", "M"),
    ("tuesday", "T"),
    ("wednesday", "W"),
    ("thursday", "R"),
    ("friday", "F"),
    ("saturday", "SA"),
    ("sunday", "SU"),
)


@dataclass(frozen=True)
class DayPattern:
    monday: bool = False
    tuesday: bool = False
    wednesday: bool = False
    thursday: bool = False
    friday: bool = False
    saturday: bool = False
    sunday: bool = False

    def any(self) -> bool:
        return any(asdict(self).values())

    def count(self) -> int:
        return sum(asdict(self).values())

    def as_columns(self) -> dict[str, bool]:
        """Keys match the ``day_*`` columns of locations and guideline days."""
        return {f"day_{day}": flag for day, flag in asdict(self).items()}


def parse_days(text: str | None) -> DayPattern:
    """Decode day letters with independent containment checks per day.

    Flags are not mutually exclusive: ``"th"`` sets both tuesday (``t``)
    and thursday (``th``). Only the whole tokens ``sat``/``sun`` are removed
    before the single-letter checks.
    """
    folded = (text or "").casefold()
    letters = folded.replace("sat", "").replace("sun", "")
    return DayPattern(
        monday="m" in letters,
        tuesday="t" in letters,
        wednesday="w" in letters,
        thursday="r" in letters or "th" in letters,
        friday="f" in letters,
        saturday="sat" in folded,
        sunday="sun" in folded,
    )


def format_days(pattern: DayPattern) -> str:
    flags = asdict(pattern)
    return "".join(label for day, label in DAY_LABELS if flags[day])


def pattern_from_columns(row) -> DayPattern:
    return DayPattern(**{day: bool(getattr(row, f"day_{day}")) for day, _ in DAY_LABELS})

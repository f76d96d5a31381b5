from sqlalchemy import Boolean
from sqlalchemy.orm import Mapped, mapped_column

DAY_COLUMNS = (
    "day_monday",
    "day_tuesday",
    "day_wednesday",
    "day_thursday",
    "day_friday",
    "day_saturday",
    "day_sunday",
)

# Order matches the semester codes SU, FA, WI, SP.
SEMESTER_COLUMNS = (
    "semester_summer",
    "semester_fall",
    "semester_winter",
    "semester_spring",
)


class DayFlagsMixin:
    day_monday: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    day_tuesday: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    day_wednesday: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    day_thursday: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    day_friday: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    day_saturday: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    day_sunday: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    def day_count(self) -> int:
        return sum(1 for column in DAY_COLUMNS if getattr(self, column))


class SemesterFlagsMixin:
    semester_summer: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    semester_fall: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    semester_winter: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    semester_spring: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

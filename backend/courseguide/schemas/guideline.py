from __future__ import annotations

from pydantic import BaseModel, Field, computed_field, field_validator, model_validator

from courseguide.schemas.course import DayFlags, SemesterFlags
from courseguide.services.time_codec import elapsed, is_valid_military_time, split_time


def validate_military_time(value: int) -> int:
    if not is_valid_military_time(value):
        raise ValueError("Time must be a military time between 0 and 2359")
    return value


class GuidelineDayIn(DayFlags):
    @model_validator(mode="after")
    def validate_days(self) -> "GuidelineDayIn":
        if not self.has_any_day():
            raise ValueError("A guideline day record needs at least one day")
        return self


class GuidelineTimeIn(BaseModel):
    start_time: int
    end_time: int

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_time(cls, value: int) -> int:
        return validate_military_time(value)

    @model_validator(mode="after")
    def validate_time_order(self) -> "GuidelineTimeIn":
        if self.end_time <= self.start_time:
            raise ValueError("End time must be after start time")
        return self


class GuidelineBase(SemesterFlags):
    credits: int = Field(ge=1, le=4)
    meeting_amount: int = Field(ge=1, le=4)
    days: list[GuidelineDayIn] = Field(default_factory=list)
    times: list[GuidelineTimeIn] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_semester(self) -> "GuidelineBase":
        if not self.has_any_semester():
            raise ValueError("A guideline must apply to at least one semester")
        return self


class GuidelineCreate(GuidelineBase):
    pass


class GuidelineUpdate(GuidelineBase):
    pass


class GuidelineQuery(SemesterFlags, DayFlags):
    credits_min: int = Field(default=1, ge=1)
    credits_max: int = Field(default=4, le=12)
    meeting_min: int = Field(default=1, ge=1)
    meeting_max: int = Field(default=4, le=7)
    start_time: int = Field(default=0, ge=0, le=2359)
    end_time: int = Field(default=2359, ge=0, le=2359)
    page: int = Field(default=1, ge=1)


class GuidelineDayOut(DayFlags):
    id: str

    model_config = {"from_attributes": True}


class GuidelineTimeOut(BaseModel):
    id: str
    start_time: int
    end_time: int

    model_config = {"from_attributes": True}

    @computed_field
    @property
    def start(self) -> dict:
        return split_time(self.start_time).as_dict()

    @computed_field
    @property
    def end(self) -> dict:
        return split_time(self.end_time).as_dict()

    @computed_field
    @property
    def difference(self) -> dict:
        return elapsed(self.start_time, self.end_time)


class GuidelineOut(SemesterFlags):
    id: str
    credits: int
    meeting_amount: int
    days: list[GuidelineDayOut]
    times: list[GuidelineTimeOut]

    model_config = {"from_attributes": True}


class GuidelinePage(BaseModel):
    result: list[GuidelineOut]
    page: int
    total_pages: int

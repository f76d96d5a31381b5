from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from courseguide.core.exceptions import IngestionError, RowValidationError


class ColumnMapping(BaseModel):
    """Zero-based spreadsheet column index for each course field.

    Fields left out are not read from the sheet.
    """

    model_config = ConfigDict(extra="forbid")

    section_id: int | None = Field(default=None, ge=0)
    term: int | None = Field(default=None, ge=0)
    div: int | None = Field(default=None, ge=0)
    department: int | None = Field(default=None, ge=0)
    subject: int | None = Field(default=None, ge=0)
    course_number: int | None = Field(default=None, ge=0)
    section: int | None = Field(default=None, ge=0)
    title: int | None = Field(default=None, ge=0)
    instruction_method: int | None = Field(default=None, ge=0)
    faculty: int | None = Field(default=None, ge=0)
    campus: int | None = Field(default=None, ge=0)
    credits: int | None = Field(default=None, ge=0)
    capacity: int | None = Field(default=None, ge=0)
    start_date: int | None = Field(default=None, ge=0)
    end_date: int | None = Field(default=None, ge=0)
    building: int | None = Field(default=None, ge=0)
    room: int | None = Field(default=None, ge=0)
    start_time: int | None = Field(default=None, ge=0)
    end_time: int | None = Field(default=None, ge=0)
    days: int | None = Field(default=None, ge=0)
    noteAcademicAffairs: int | None = Field(default=None, ge=0)
    notePrintedComments: int | None = Field(default=None, ge=0)
    noteWhatHasChanged: int | None = Field(default=None, ge=0)

    @model_validator(mode="after")
    def validate_unique_columns(self) -> "ColumnMapping":
        seen: dict[int, str] = {}
        for name, index in self.as_index_map().items():
            if index in seen:
                raise ValueError(f"Column {index} is mapped to both {seen[index]} and {name}")
            seen[index] = name
        return self

    def as_index_map(self) -> dict[str, int]:
        return {name: index for name, index in self.model_dump().items() if index is not None}


class VerifyColumnsRequest(BaseModel):
    columns: ColumnMapping


class CommitRevisionRequest(BaseModel):
    columns: ColumnMapping
    name: str = Field(min_length=1, max_length=200)


class IngestionResult(BaseModel):
    success: bool
    message: str | None = None
    row: int | None = None
    errors: list[dict] = Field(default_factory=list)
    schedule_id: str | None = None
    course_count: int = 0

    @classmethod
    def from_error(cls, exc: IngestionError) -> "IngestionResult":
        if isinstance(exc, RowValidationError):
            return cls(success=False, message=exc.message, row=exc.row_number, errors=exc.errors)
        return cls(success=False, message=exc.message, errors=[{"loc": [], "message": exc.message}])


class RevisionOut(BaseModel):
    id: str
    schedule_id: str | None
    name: str
    file_name: str | None
    onboarding: bool
    created_at: datetime
    updated_at: datetime | None

    model_config = {"from_attributes": True}


class ScheduleOut(BaseModel):
    id: str
    created_at: datetime
    # Newest revision first; the rest are kept as history.
    main: RevisionOut | None
    revisions: list[RevisionOut]


class SchedulePage(BaseModel):
    result: list[ScheduleOut]
    page: int
    total_pages: int


class SemesterOut(BaseModel):
    code: str
    title: str

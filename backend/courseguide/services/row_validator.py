from __future__ import annotations

import logging

from pydantic import ValidationError

from courseguide.core.exceptions import RowValidationError
from courseguide.schemas.course import CourseRow

logger = logging.getLogger(__name__)


def format_errors(exc: ValidationError) -> list[dict]:
    return [
        {"loc": [str(part) for part in error["loc"]], "message": error["msg"]}
        for error in exc.errors(include_url=False)
    ]


def validate_row(row_number: int, draft: dict) -> CourseRow:
    try:
        return CourseRow.model_validate(draft)
    except ValidationError as exc:
        errors = format_errors(exc)
        logger.warning("Row %s rejected with %s field error(s)", row_number, len(errors))
        raise RowValidationError(row_number, errors) from exc


def validate_rows(numbered_drafts: list[tuple[int, dict]]) -> list[CourseRow]:
    """Validate top to bottom and stop at the first invalid row."""
    return [validate_row(row_number, draft) for row_number, draft in numbered_drafts]

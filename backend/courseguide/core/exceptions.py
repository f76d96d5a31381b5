class AppError(Exception):
    """Base class for all application exceptions."""
    def __init__(self, message: str, status_code: int = 500, details: dict = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

class ResourceNotFoundError(AppError):
    """Raised when a requested resource is not found."""
    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(f"{resource_type} with id {resource_id} not found", status_code=404)


class IngestionError(AppError):
    """Raised when a spreadsheet batch cannot be verified or committed.

    The ingestion entry points catch these and report ``success: false``
    instead of letting them reach the exception handler.
    """
    def __init__(self, message: str, status_code: int = 400, details: dict = None):
        super().__init__(message, status_code=status_code, details=details)

class RevisionNotOnboardingError(IngestionError):
    """No revision with the id exists, or it has already been committed."""
    def __init__(self, revision_id: str):
        super().__init__(
            f"Revision {revision_id} does not exist or is no longer onboarding",
            status_code=404,
            details={"revision_id": revision_id},
        )

class SheetEmptyError(IngestionError):
    """The stored upload has no readable first sheet."""
    def __init__(self, message: str = "Spreadsheet has no sheets"):
        super().__init__(message, status_code=400)

class RowValidationError(IngestionError):
    """The first structurally invalid row of a batch."""
    def __init__(self, row_number: int, errors: list[dict]):
        self.row_number = row_number
        self.errors = errors
        super().__init__(
            f"Row {row_number} failed validation",
            status_code=422,
            details={"row": row_number, "errors": errors},
        )

class TransactionFailureError(IngestionError):
    """The atomic commit failed and was rolled back."""
    def __init__(self, message: str = "Schedule revision could not be committed"):
        super().__init__(message, status_code=409)

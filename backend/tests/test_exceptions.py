from courseguide.core.exceptions import (
    AppError,
    IngestionError,
    ResourceNotFoundError,
    RevisionNotOnboardingError,
    RowValidationError,
    SheetEmptyError,
    TransactionFailureError,
)
from courseguide.schemas.revision import IngestionResult


def test_app_error_defaults():
    err = AppError("Generic error")
    assert err.status_code == 500
    assert err.details == {}


def test_ingestion_errors_are_app_errors():
    for err in (
        RevisionNotOnboardingError("r1"),
        SheetEmptyError(),
        RowValidationError(4, [{"loc": ["title"], "message": "too short"}]),
        TransactionFailureError(),
    ):
        assert isinstance(err, IngestionError)
        assert isinstance(err, AppError)


def test_row_validation_error_structure():
    err = RowValidationError(4, [{"loc": ["title"], "message": "too short"}])
    assert err.status_code == 422
    assert err.details == {"row": 4, "errors": [{"loc": ["title"], "message": "too short"}]}

    result = IngestionResult.from_error(err)
    assert result.success is False
    assert result.row == 4
    assert result.errors == err.errors


def test_not_found_message():
    err = ResourceNotFoundError("Guideline", "g1")
    assert err.status_code == 404
    assert err.message == "Guideline with id g1 not found"


def test_request_size_limit(client):
    response = client.post(
        "/api/guidelines/",
        content=b"x" * 32,
        headers={"content-type": "application/json", "content-length": str(13_000_000)},
    )
    assert response.status_code == 413
    assert response.json()["details"] == {"limit": 12_000_000}


def test_upload_size_limit_applies_to_multipart(client):
    response = client.post(
        "/api/revisions/upload",
        content=b"x" * 32,
        headers={"content-type": "multipart/form-data; boundary=limit", "content-length": str(11_000_000)},
    )
    assert response.status_code == 413
    assert response.json()["details"] == {"limit": 10_000_000}

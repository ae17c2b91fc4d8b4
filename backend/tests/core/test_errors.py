"""Error hierarchy — status codes, categories and the response envelope."""

import pytest

from microblog.core.errors import (
    AlreadyFollowingError,
    BioTooLongError,
    CantFollowSelfError,
    DatabaseError,
    ErrorCategory,
    ErrorContext,
    InvalidCredentialsError,
    MicroblogError,
    NotFoundError,
    ValidationError,
)


@pytest.mark.parametrize(
    ("error", "status", "category"),
    [
        (BioTooLongError(140), 422, ErrorCategory.VALIDATION),
        (NotFoundError("post"), 404, ErrorCategory.RESOURCE_NOT_FOUND),
        (AlreadyFollowingError(), 409, ErrorCategory.CONFLICT),
        (CantFollowSelfError(), 403, ErrorCategory.SELF_REFERENCE),
        (InvalidCredentialsError(), 401, ErrorCategory.AUTHENTICATION),
        (DatabaseError("refused", "update"), 503, ErrorCategory.DATABASE),
    ],
)
def test_status_and_category(error, status, category):
    assert isinstance(error, MicroblogError)
    assert error.http_status == status
    assert error.category is category


def test_bio_error_is_validation_error():
    assert isinstance(BioTooLongError(140), ValidationError)
    assert "140" in BioTooLongError(140).message


def test_to_response_envelope():
    ctx = ErrorContext(user_id="u1")
    body = AlreadyFollowingError(ctx).to_response()["error"]
    assert body["code"] == "ALREADY_FOLLOWING"
    assert body["category"] == "conflict"
    assert body["timestamp"] == ctx.timestamp.isoformat()

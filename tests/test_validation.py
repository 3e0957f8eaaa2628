from __future__ import annotations

from taskfeed.core.validation import Accepted, Rejected, is_object_id, validate_payload
from taskfeed.schemas.forms import CHANGE_PASSWORD_FORM, REGISTER_FORM, SUBTASK_PROGRESS_FORM


def test_valid_payload_is_accepted() -> None:
    result = validate_payload(
        REGISTER_FORM,
        {
            "firstName": "Ada",
            "lastName": "Lovelace",
            "email": "ADA@Example.com",
            "username": "ada",
            "password": "engine-123",
            "securityQuestion": "First machine?",
            "securityAnswer": "Analytical",
        },
    )

    assert isinstance(result, Accepted)
    assert result.ok
    assert result.value.email == "ada@example.com"


def test_rejection_carries_schema_message() -> None:
    result = validate_payload(REGISTER_FORM, {"username": "ada"})

    assert isinstance(result, Rejected)
    assert not result.ok
    assert result.reason == "Invalid register form data!"
    assert any(error["loc"] == "email" for error in result.errors)


def test_non_object_payload_is_rejected() -> None:
    result = validate_payload(SUBTASK_PROGRESS_FORM, ["Done"])

    assert isinstance(result, Rejected)
    assert result.reason == "Invalid subtask progress data!"


def test_password_confirmation_must_match() -> None:
    result = validate_payload(
        CHANGE_PASSWORD_FORM,
        {
            "userId": "x",
            "oldPassword": "old-password",
            "newPassword": "new-password-1",
            "newConfirmPassword": "new-password-2",
        },
    )

    assert isinstance(result, Rejected)


def test_is_object_id() -> None:
    assert is_object_id("5f2b1c3d4e5f6a7b8c9d0e1f")
    assert not is_object_id("5f2b1c3d4e5f6a7b8c9d0e1")
    assert not is_object_id("zzzzzzzzzzzzzzzzzzzzzzzz")
    assert not is_object_id(None)

from __future__ import annotations

import pytest
from bson import ObjectId

from taskfeed.core.guard import ensure_owner, ensure_permitted, ensure_same_identity, permit, require_identity
from taskfeed.core.security import CallerIdentity
from taskfeed.errors import InvalidCredentialsError, UnauthorizedError


def test_permit_owner_and_collaborators() -> None:
    owner, collaborator, stranger = ObjectId(), ObjectId(), ObjectId()

    assert permit(str(owner), owner)
    assert permit(str(collaborator), owner, [collaborator])
    assert not permit(str(stranger), owner, [collaborator])


def test_ensure_permitted_rejects_strangers() -> None:
    owner = ObjectId()
    caller = CallerIdentity(user_id=str(ObjectId()))

    with pytest.raises(UnauthorizedError) as excinfo:
        ensure_permitted(caller, owner, [])

    assert excinfo.value.status_code == 400
    assert excinfo.value.message == "Unauthorized request!"


def test_ensure_owner_ignores_collaborators() -> None:
    owner = ObjectId()
    caller = CallerIdentity(user_id=str(owner))

    assert ensure_owner(caller, owner) == str(owner)
    with pytest.raises(UnauthorizedError):
        ensure_owner(CallerIdentity(user_id=str(ObjectId())), owner)


def test_ensure_same_identity() -> None:
    caller = CallerIdentity(user_id="abc")

    assert ensure_same_identity(caller, "abc") == "abc"
    with pytest.raises(InvalidCredentialsError) as excinfo:
        ensure_same_identity(caller, "xyz")
    assert excinfo.value.message == "Invalid Credentials!"


def test_require_identity_without_caller() -> None:
    with pytest.raises(RuntimeError):
        require_identity(None)

"""Authorization predicates for mutations and private reads."""

from __future__ import annotations

from collections.abc import Iterable

from ..errors import InvalidCredentialsError, UnauthorizedError
from .security import CallerIdentity


def require_identity(caller: CallerIdentity | None) -> str:
    """Return the caller's user id.

    Routes that reach a service without a verified caller are wired wrong,
    so this fails as a server error rather than a client one.
    """

    if caller is None or not caller.user_id:
        raise RuntimeError("Service invoked without a verified caller identity.")
    return caller.user_id


def permit(caller_id: object, owner_id: object, collaborators: Iterable[object] = ()) -> bool:
    """Return ``True`` when the caller owns the resource or collaborates on it."""

    caller = str(caller_id)
    if caller == str(owner_id):
        return True
    return any(caller == str(member) for member in collaborators)


def ensure_same_identity(caller: CallerIdentity | None, subject_id: object) -> str:
    """Reject requests acting on behalf of someone other than the caller."""

    caller_id = require_identity(caller)
    if str(subject_id) != caller_id:
        raise InvalidCredentialsError()
    return caller_id


def ensure_permitted(
    caller: CallerIdentity | None,
    owner_id: object,
    collaborators: Iterable[object] = (),
) -> str:
    caller_id = require_identity(caller)
    if not permit(caller_id, owner_id, collaborators):
        raise UnauthorizedError()
    return caller_id


def ensure_owner(caller: CallerIdentity | None, owner_id: object) -> str:
    caller_id = require_identity(caller)
    if not permit(caller_id, owner_id):
        raise UnauthorizedError()
    return caller_id


__all__ = [
    "ensure_owner",
    "ensure_permitted",
    "ensure_same_identity",
    "permit",
    "require_identity",
]

"""Security helpers for credential hashing and bearer token management."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Any
from uuid import uuid4

from jose import JWTError, jwt
from passlib.context import CryptContext

from .config import Settings, get_settings


class TokenVerificationError(Exception):
    """Raised when a bearer token cannot be verified or decoded."""


@dataclass(slots=True, frozen=True)
class GeneratedToken:
    """Represents a signed bearer token with associated metadata."""

    token: str
    jti: str
    expires_at: datetime | None


@dataclass(slots=True, frozen=True)
class CallerIdentity:
    """Verified identity of the user issuing the current request."""

    user_id: str


@lru_cache(maxsize=8)
def _password_context(rounds: int) -> CryptContext:
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


def _current_context() -> CryptContext:
    return _password_context(get_settings().password_hash_rounds)


def hash_secret(secret: str) -> str:
    """Return a salted one-way digest of ``secret``.

    Used for both account passwords and security-question answers.
    """

    return _current_context().hash(secret)


def verify_secret(candidate: str, digest: str) -> bool:
    """Check a plaintext ``candidate`` against a stored ``digest``."""

    if not digest:
        return False
    try:
        return _current_context().verify(candidate, digest)
    except ValueError:
        # malformed or unknown digest format
        return False


def create_access_token(
    *,
    subject: str,
    settings: Settings,
    expires_delta: timedelta | None = None,
) -> GeneratedToken:
    """Sign a bearer token carrying ``subject`` as its ``sub`` claim.

    Tokens do not expire unless ``expires_delta`` is supplied or the
    settings define ``access_token_expire_minutes``.
    """

    now = datetime.now(timezone.utc)
    if expires_delta is None and settings.access_token_expire_minutes:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)
    payload: dict[str, Any] = {
        "sub": str(subject),
        "iat": now,
        "jti": uuid4().hex,
    }
    expires_at: datetime | None = None
    if expires_delta is not None:
        expires_at = now + expires_delta
        payload["exp"] = expires_at
    token = jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)
    return GeneratedToken(token=token, jti=payload["jti"], expires_at=expires_at)


def decode_token(*, token: str, secret: str, algorithm: str) -> dict[str, Any]:
    """Decode a signed token and return its claims."""

    return jwt.decode(token, secret, algorithms=[algorithm])


def verify_access_token(token: str, settings: Settings) -> CallerIdentity:
    """Verify ``token`` and recover the caller identity it carries."""

    try:
        claims = decode_token(
            token=token,
            secret=settings.jwt_secret_key,
            algorithm=settings.jwt_algorithm,
        )
    except JWTError as exc:
        raise TokenVerificationError("Token signature or claims are invalid.") from exc

    subject = claims.get("sub")
    if not isinstance(subject, str) or not subject.strip():
        raise TokenVerificationError("Token does not carry a subject.")
    return CallerIdentity(user_id=subject)


__all__ = [
    "CallerIdentity",
    "GeneratedToken",
    "TokenVerificationError",
    "create_access_token",
    "decode_token",
    "hash_secret",
    "verify_access_token",
    "verify_secret",
]

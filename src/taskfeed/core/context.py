"""Request-scoped context helpers."""

from __future__ import annotations

from contextvars import ContextVar, Token

REQUEST_ID_HEADER = "X-Request-ID"

_request_id_ctx_var: ContextVar[str] = ContextVar("request_id", default="-")
_caller_id_ctx_var: ContextVar[str | None] = ContextVar("caller_id", default=None)


def get_request_id() -> str:
    """Return the request identifier for the current execution context."""

    return _request_id_ctx_var.get()


def bind_request_id(request_id: str) -> Token[str]:
    """Bind a request identifier to the current execution context."""

    return _request_id_ctx_var.set(request_id)


def reset_request_id(token: Token[str]) -> None:
    _request_id_ctx_var.reset(token)


def get_caller_id() -> str | None:
    """Return the verified caller's user id, or ``None`` for anonymous work."""

    return _caller_id_ctx_var.get()


def bind_caller_id(user_id: str | None) -> Token[str | None]:
    return _caller_id_ctx_var.set(user_id)


def reset_caller_id(token: Token[str | None]) -> None:
    _caller_id_ctx_var.reset(token)


__all__ = [
    "REQUEST_ID_HEADER",
    "bind_caller_id",
    "bind_request_id",
    "get_caller_id",
    "get_request_id",
    "reset_caller_id",
    "reset_request_id",
]

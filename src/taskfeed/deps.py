"""Reusable FastAPI dependencies."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .core.config import Settings, get_settings
from .core.context import bind_caller_id
from .core.security import CallerIdentity, TokenVerificationError, verify_access_token
from .errors import InvalidTokenError
from .services import (
    AuthService,
    CommentService,
    NotificationService,
    PostService,
    TaskService,
    UserService,
)

logger = logging.getLogger(__name__)

SettingsDependency = Annotated[Settings, Depends(get_settings)]

_bearer_scheme = HTTPBearer(auto_error=False)


def _verify(credentials: HTTPAuthorizationCredentials, settings: Settings) -> CallerIdentity:
    try:
        identity = verify_access_token(credentials.credentials, settings)
    except TokenVerificationError as exc:
        logger.info("Bearer token rejected: %s", exc)
        raise InvalidTokenError() from exc
    # Lives for the request task only; log records pick it up as user_id.
    bind_caller_id(identity.user_id)
    return identity


async def get_caller(
    settings: SettingsDependency,
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer_scheme),
) -> CallerIdentity:
    """Resolve the verified caller from the ``Authorization: Bearer`` header."""

    if credentials is None:
        raise InvalidTokenError("Access denied!")
    return _verify(credentials, settings)


async def get_optional_caller(
    settings: SettingsDependency,
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer_scheme),
) -> CallerIdentity | None:
    """Like ``get_caller`` but anonymous requests resolve to ``None``.

    A token that is present but invalid is still rejected.
    """

    if credentials is None:
        return None
    return _verify(credentials, settings)


def get_auth_service(settings: SettingsDependency) -> AuthService:
    return AuthService(settings)


def get_notification_service() -> NotificationService:
    return NotificationService()


CallerDependency = Annotated[CallerIdentity, Depends(get_caller)]
OptionalCallerDependency = Annotated[CallerIdentity | None, Depends(get_optional_caller)]
AuthServiceDependency = Annotated[AuthService, Depends(get_auth_service)]
UserServiceDependency = Annotated[UserService, Depends(UserService)]
PostServiceDependency = Annotated[PostService, Depends(PostService)]
TaskServiceDependency = Annotated[TaskService, Depends(TaskService)]
CommentServiceDependency = Annotated[CommentService, Depends(CommentService)]
NotificationServiceDependency = Annotated[NotificationService, Depends(get_notification_service)]


__all__ = [
    "AuthServiceDependency",
    "CallerDependency",
    "CommentServiceDependency",
    "NotificationServiceDependency",
    "OptionalCallerDependency",
    "PostServiceDependency",
    "SettingsDependency",
    "TaskServiceDependency",
    "UserServiceDependency",
    "get_caller",
    "get_optional_caller",
]

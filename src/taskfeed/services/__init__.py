"""Service layer orchestrating validation, authorization and persistence."""

from __future__ import annotations

from .auth import AuthService
from .comments import CommentService
from .notifications import NotificationService
from .posts import PostService, PostTree, TaskTree
from .tasks import TaskService
from .users import UserService

__all__ = [
    "AuthService",
    "CommentService",
    "NotificationService",
    "PostService",
    "PostTree",
    "TaskService",
    "TaskTree",
    "UserService",
]

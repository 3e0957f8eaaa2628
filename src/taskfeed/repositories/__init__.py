"""Document repositories encapsulating store access."""

from __future__ import annotations

from .base import BaseRepository
from .comments import CommentRepository
from .notifications import NotificationRepository
from .posts import PostRepository
from .tasks import SubtaskRepository, TaskRepository
from .users import UserRepository

__all__ = [
    "BaseRepository",
    "CommentRepository",
    "NotificationRepository",
    "PostRepository",
    "SubtaskRepository",
    "TaskRepository",
    "UserRepository",
]

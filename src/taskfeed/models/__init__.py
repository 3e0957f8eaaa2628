"""Document models backing the taskfeed API."""

from __future__ import annotations

from .comment import Comment
from .common import utcnow
from .notification import Notification, NotificationAction
from .post import Post, PostVisibility
from .task import Subtask, SubtaskProgress, Task
from .user import User

DOCUMENT_MODELS = [User, Post, Task, Subtask, Comment, Notification]

__all__ = [
    "Comment",
    "DOCUMENT_MODELS",
    "Notification",
    "NotificationAction",
    "Post",
    "PostVisibility",
    "Subtask",
    "SubtaskProgress",
    "Task",
    "User",
    "utcnow",
]

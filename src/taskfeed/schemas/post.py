"""Post, task and subtask response schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from ..models import Post, PostVisibility, Subtask, SubtaskProgress, Task
from .common import PublicModel, stringify_ids


class SubtaskRead(PublicModel):
    id: str = Field(alias="_id")
    title: str
    task_id: str
    progress: SubtaskProgress
    priority: int | None = None
    due_date: datetime | None = None
    created_at: datetime

    @classmethod
    def from_document(cls, subtask: Subtask) -> "SubtaskRead":
        return cls(
            id=str(subtask.id),
            title=subtask.title,
            task_id=str(subtask.task_id),
            progress=subtask.progress,
            priority=subtask.priority,
            due_date=subtask.due_date,
            created_at=subtask.created_at,
        )


class TaskRead(PublicModel):
    id: str = Field(alias="_id")
    title: str
    post_id: str
    creator_id: str
    subtasks: list[SubtaskRead] = Field(default_factory=list)
    created_at: datetime

    @classmethod
    def from_document(cls, task: Task, subtasks: list[Subtask] | None = None) -> "TaskRead":
        return cls(
            id=str(task.id),
            title=task.title,
            post_id=str(task.post_id),
            creator_id=str(task.creator_id),
            subtasks=[SubtaskRead.from_document(item) for item in subtasks or []],
            created_at=task.created_at,
        )


class PostRead(PublicModel):
    id: str = Field(alias="_id")
    title: str
    creator_id: str
    creator_username: str
    due_date: datetime | None = None
    color: str
    category: str
    visibility: PostVisibility
    upvotes: int
    downvotes: int
    authorized_users: list[str] = Field(default_factory=list)
    upvoted_by: list[str] = Field(default_factory=list)
    downvoted_by: list[str] = Field(default_factory=list)
    comments: list[str] = Field(default_factory=list)
    tasks: list[TaskRead] = Field(default_factory=list)
    created_at: datetime

    @classmethod
    def from_document(cls, post: Post, tasks: list[TaskRead] | None = None) -> "PostRead":
        return cls(
            id=str(post.id),
            title=post.title,
            creator_id=str(post.creator_id),
            creator_username=post.creator_username,
            due_date=post.due_date,
            color=post.color,
            category=post.category,
            visibility=post.visibility,
            upvotes=post.upvotes,
            downvotes=post.downvotes,
            authorized_users=stringify_ids(post.authorized_users),
            upvoted_by=stringify_ids(post.upvoted_by),
            downvoted_by=stringify_ids(post.downvoted_by),
            comments=stringify_ids(post.comments),
            tasks=tasks or [],
            created_at=post.created_at,
        )


__all__ = ["PostRead", "SubtaskRead", "TaskRead"]

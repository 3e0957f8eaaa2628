"""Task and subtask document models."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Annotated

from beanie import Document, Indexed, PydanticObjectId
from pydantic import ConfigDict, Field

from .common import utcnow


class SubtaskProgress(str, Enum):
    """Progress states a subtask moves through."""

    NOT_STARTED = "Not started"
    WORKING_ON_IT = "Working on it"
    STUCK = "Stuck"
    DONE = "Done"


class Task(Document):
    """A task belonging to exactly one post."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(max_length=120)
    post_id: Annotated[PydanticObjectId, Indexed()]
    creator_id: PydanticObjectId
    subtasks: list[PydanticObjectId] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utcnow)

    class Settings:
        name = "tasks"


class Subtask(Document):
    """A unit of work belonging to exactly one task."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(max_length=120)
    task_id: Annotated[PydanticObjectId, Indexed()]
    progress: SubtaskProgress = SubtaskProgress.NOT_STARTED
    priority: int | None = Field(default=None, ge=1, le=10)
    due_date: datetime | None = None
    created_at: datetime = Field(default_factory=utcnow)

    class Settings:
        name = "subtasks"


__all__ = ["Subtask", "SubtaskProgress", "Task"]

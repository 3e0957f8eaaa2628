"""Repositories for task and subtask documents."""

from __future__ import annotations

from ..models import Subtask, Task
from .base import BaseRepository


class TaskRepository(BaseRepository[Task]):
    def __init__(self) -> None:
        super().__init__(Task)


class SubtaskRepository(BaseRepository[Subtask]):
    def __init__(self) -> None:
        super().__init__(Subtask)


__all__ = ["SubtaskRepository", "TaskRepository"]

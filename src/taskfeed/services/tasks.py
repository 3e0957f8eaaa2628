"""Tasks and subtasks attached to posts."""

from __future__ import annotations

import logging
from typing import Any

from ..core.guard import ensure_permitted, require_identity
from ..core.security import CallerIdentity
from ..errors import NotFoundError, ValidationError
from ..models import Post, Subtask, Task
from ..repositories import PostRepository, SubtaskRepository, TaskRepository
from ..schemas.forms import (
    CREATE_SUBTASK_FORM,
    CREATE_TASK_FORM,
    SUBTASK_PROGRESS_FORM,
    CreateSubtaskForm,
    CreateTaskForm,
    SubtaskProgressForm,
)
from .base import PipelineService
from .posts import POST_NOT_FOUND_MESSAGE
from .relations import add_member

logger = logging.getLogger(__name__)

TASK_NOT_FOUND_MESSAGE = "Task not found!"
SUBTASK_NOT_FOUND_MESSAGE = "Subtask not found!"


def _require_present(*values: str | None) -> None:
    if not all(values):
        raise ValidationError("Bad Request!")


class TaskService(PipelineService):
    """Business orchestration for ``Task`` and ``Subtask`` entities.

    Only the post's creator and its collaborators may change its tasks.
    Authorization runs before the request body is validated, so a stranger
    is refused whatever they send.
    """

    def __init__(self) -> None:
        self._posts = PostRepository()
        self._tasks = TaskRepository()
        self._subtasks = SubtaskRepository()

    async def _load_task_in_post(self, post_id: str, task_id: str) -> tuple[Post, Task]:
        post_oid, task_oid = self.parse_ids((post_id, task_id), "Invalid postId or taskId!")
        post = await self._posts.get_or_raise(post_oid, POST_NOT_FOUND_MESSAGE)
        task = await self._tasks.get_or_raise(task_oid, TASK_NOT_FOUND_MESSAGE)
        if task.post_id != post.id:
            raise NotFoundError(TASK_NOT_FOUND_MESSAGE)
        return post, task

    async def create_task(self, post_id: str | None, payload: Any, caller: CallerIdentity | None) -> Task:
        _require_present(post_id)
        post = await self._posts.get_or_raise(
            self.parse_id(post_id, "Invalid postId!"),
            POST_NOT_FOUND_MESSAGE,
        )
        caller_id = ensure_permitted(caller, post.creator_id, post.authorized_users)
        form: CreateTaskForm = self.validate(CREATE_TASK_FORM, payload)

        task = Task(
            title=form.title,
            post_id=post.id,
            creator_id=self.parse_id(caller_id, "Invalid userId!"),
        )
        await self._tasks.insert(task)
        add_member(post.tasks, task.id)
        await self._posts.save(post)
        logger.info("Task created", extra={"task_id": str(task.id), "post_id": str(post.id)})
        return task

    async def create_subtask(
        self,
        post_id: str | None,
        task_id: str | None,
        payload: Any,
        caller: CallerIdentity | None,
    ) -> Subtask:
        _require_present(post_id, task_id)
        post, task = await self._load_task_in_post(post_id, task_id)
        ensure_permitted(caller, post.creator_id, post.authorized_users)
        form: CreateSubtaskForm = self.validate(CREATE_SUBTASK_FORM, payload)

        subtask = Subtask(
            title=form.title,
            task_id=task.id,
            progress=form.progress,
            priority=form.priority,
            due_date=form.due_date,
        )
        await self._subtasks.insert(subtask)
        add_member(task.subtasks, subtask.id)
        await self._tasks.save(task)
        return subtask

    async def change_subtask_progress(
        self,
        subtask_id: str,
        post_id: str | None,
        task_id: str | None,
        payload: Any,
        caller: CallerIdentity | None,
    ) -> Subtask:
        """Move a subtask to a new progress state.

        Nothing is written unless the caller owns or collaborates on the post.
        """

        require_identity(caller)
        _require_present(post_id, task_id)
        subtask_oid = self.parse_id(subtask_id, "Invalid subtaskId!")
        post, task = await self._load_task_in_post(post_id, task_id)
        subtask = await self._subtasks.get_or_raise(subtask_oid, SUBTASK_NOT_FOUND_MESSAGE)
        if subtask.task_id != task.id:
            raise NotFoundError(SUBTASK_NOT_FOUND_MESSAGE)
        ensure_permitted(caller, post.creator_id, post.authorized_users)
        form: SubtaskProgressForm = self.validate(SUBTASK_PROGRESS_FORM, payload)

        subtask.progress = form.progress
        await self._subtasks.save(subtask)
        logger.info(
            "Subtask progress changed",
            extra={"subtask_id": subtask_id, "progress": form.progress.value},
        )
        return subtask


__all__ = ["SUBTASK_NOT_FOUND_MESSAGE", "TASK_NOT_FOUND_MESSAGE", "TaskService"]

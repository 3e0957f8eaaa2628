"""Routes handling subtasks and their progress."""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Body, Query, status

from ...deps import CallerDependency, TaskServiceDependency
from ...schemas import Envelope, SubtaskRead, success

router = APIRouter(prefix="/subtasks", tags=["subtasks"])

JsonBody = Annotated[Any, Body()]
PostIdQuery = Annotated[str | None, Query(alias="postId")]
TaskIdQuery = Annotated[str | None, Query(alias="taskId")]


@router.post(
    "",
    response_model=Envelope[SubtaskRead],
    status_code=status.HTTP_201_CREATED,
    summary="Add a subtask to a task",
)
async def create_subtask(
    caller: CallerDependency,
    service: TaskServiceDependency,
    post_id: PostIdQuery = None,
    task_id: TaskIdQuery = None,
    payload: JsonBody = None,
) -> Envelope[SubtaskRead]:
    subtask = await service.create_subtask(post_id, task_id, payload, caller)
    return success("Subtask created successfully!", SubtaskRead.from_document(subtask))


@router.patch(
    "/{subtask_id}/progress",
    response_model=Envelope[SubtaskRead],
    summary="Move a subtask to a new progress state",
)
async def change_subtask_progress(
    subtask_id: str,
    caller: CallerDependency,
    service: TaskServiceDependency,
    post_id: PostIdQuery = None,
    task_id: TaskIdQuery = None,
    payload: JsonBody = None,
) -> Envelope[SubtaskRead]:
    subtask = await service.change_subtask_progress(subtask_id, post_id, task_id, payload, caller)
    return success("Task progress updated successfully!", SubtaskRead.from_document(subtask))

"""Routes handling task creation."""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Body, Query, status

from ...deps import CallerDependency, TaskServiceDependency
from ...schemas import Envelope, TaskRead, success

router = APIRouter(prefix="/tasks", tags=["tasks"])

JsonBody = Annotated[Any, Body()]
PostIdQuery = Annotated[str | None, Query(alias="postId", description="Post the task belongs to.")]


@router.post(
    "",
    response_model=Envelope[TaskRead],
    status_code=status.HTTP_201_CREATED,
    summary="Add a task to a post",
)
async def create_task(
    caller: CallerDependency,
    service: TaskServiceDependency,
    post_id: PostIdQuery = None,
    payload: JsonBody = None,
) -> Envelope[TaskRead]:
    task = await service.create_task(post_id, payload, caller)
    return success("Task created successfully!", TaskRead.from_document(task))

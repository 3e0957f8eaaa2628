"""Router registrations for the API."""

from __future__ import annotations

from fastapi import APIRouter

from .auth import router as auth_router
from .comments import router as comments_router
from .health import router as health_router
from .posts import router as posts_router
from .subtasks import router as subtasks_router
from .tasks import router as tasks_router
from .users import router as users_router

api_router = APIRouter()
api_router.include_router(auth_router)
api_router.include_router(users_router)
api_router.include_router(posts_router)
api_router.include_router(tasks_router)
api_router.include_router(subtasks_router)
api_router.include_router(comments_router)

__all__ = [
    "api_router",
    "auth_router",
    "comments_router",
    "health_router",
    "posts_router",
    "subtasks_router",
    "tasks_router",
    "users_router",
]

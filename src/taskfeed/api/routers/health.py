"""Service health endpoint."""

from __future__ import annotations

from fastapi import APIRouter

from ...deps import SettingsDependency
from ...schemas import HealthCheckResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthCheckResponse, summary="Service health check")
async def health_check(settings: SettingsDependency) -> HealthCheckResponse:
    return HealthCheckResponse(version=settings.version)

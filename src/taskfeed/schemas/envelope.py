"""The uniform response envelope and system-level payloads."""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

DataT = TypeVar("DataT")


class Envelope(BaseModel, Generic[DataT]):
    """Response shape shared by every API route."""

    message: str = Field(description="Human-readable outcome of the request")
    data: DataT | None = Field(default=None, description="Route-specific payload")
    ok: bool = Field(default=True, description="Whether the request succeeded")


class HealthCheckResponse(BaseModel):
    """Payload returned by the health check endpoint."""

    status: str = Field(default="ok", description="Service health indicator")
    version: str = Field(description="Semantic version of the service")


def success(message: str, data: DataT | None = None) -> Envelope[DataT]:
    return Envelope(message=message, data=data, ok=True)


def failure(message: str) -> Envelope[None]:
    return Envelope(message=message, data=None, ok=False)


__all__ = ["Envelope", "HealthCheckResponse", "failure", "success"]

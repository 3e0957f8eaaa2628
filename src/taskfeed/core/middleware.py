"""Application middleware implementations."""

from __future__ import annotations

import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from .context import REQUEST_ID_HEADER, bind_request_id, reset_request_id

_MAX_REQUEST_ID_LENGTH = 128


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Attach a correlation identifier to each request/response cycle."""

    def __init__(self, app: ASGIApp, header_name: str = REQUEST_ID_HEADER) -> None:
        super().__init__(app)
        self._header_name = header_name

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = self._incoming_request_id(request) or self._generate_request_id()
        token = bind_request_id(request_id)
        request.state.request_id = request_id
        try:
            response = await call_next(request)
        finally:
            reset_request_id(token)
        response.headers.setdefault(self._header_name, request_id)
        return response

    def _incoming_request_id(self, request: Request) -> str | None:
        raw = (request.headers.get(self._header_name) or "").strip()
        if not raw or len(raw) > _MAX_REQUEST_ID_LENGTH:
            return None
        return raw

    @staticmethod
    def _generate_request_id() -> str:
        return uuid.uuid4().hex


__all__ = ["CorrelationIdMiddleware"]

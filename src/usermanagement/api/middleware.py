"""Per-request trace id and the outer exception boundary.

- Assigns a fresh trace id to every request and binds it to the log context
- Adds the X-Trace-Id response header
- Turns any exception escaping the route into an error response
"""

from __future__ import annotations

from typing import Awaitable, Callable
from uuid import uuid4

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from usermanagement.api.errors import TRACE_HEADER, build_error_response
from usermanagement.core.logging import bind_request_context, clear_request_context


class ExceptionBoundaryMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        trace_id = uuid4().hex
        request.state.trace_id = trace_id
        bind_request_context(trace_id=trace_id)
        try:
            response = await call_next(request)
        except Exception as exc:
            response = build_error_response(request, exc)
        finally:
            clear_request_context()

        response.headers[TRACE_HEADER] = trace_id
        return response

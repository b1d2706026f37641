"""Exception boundary: classify any failure into one error response.

``classify_exception`` is a pure function from an exception to an
``ErrorRecord``. ``build_error_response`` is the single place that turns a
failure into HTTP: it classifies, logs exactly once with the request's
trace id, and renders the camelCase body.
"""

from __future__ import annotations

import traceback
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from usermanagement.core.exceptions import FieldViolation, UserManagementError, ValidationError
from usermanagement.core.logging import get_logger
from usermanagement.core.types import ErrorKind
from usermanagement.core.validation import aggregate_schema_errors

log = get_logger(__name__)

TRACE_HEADER = "X-Trace-Id"

GENERIC_INTERNAL_MESSAGE = "An unexpected error occurred."
ACCESS_DENIED_MESSAGE = "Access denied."
TIMEOUT_MESSAGE = "The request timed out."


@dataclass(frozen=True, slots=True)
class ErrorRecord:
    kind: ErrorKind
    message: str
    trace_id: str
    violations: tuple[FieldViolation, ...] = ()
    details: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=lambda: datetime.now(tz=timezone.utc))
    # Framework HTTP errors keep their own status, e.g. 405 tagged as validation
    status: int | None = None

    @property
    def status_code(self) -> int:
        return self.status if self.status is not None else self.kind.status_code

    @property
    def type_tag(self) -> str:
        return self.kind.type_tag

    @property
    def log_level(self) -> str:
        return "warning" if self.status_code < 500 else "error"

    def to_body(self) -> dict[str, Any]:
        body: dict[str, Any] = {
            "type": self.type_tag,
            "message": self.message,
            "statusCode": self.status_code,
            "traceId": self.trace_id,
            "timestamp": self.timestamp,
        }
        if self.details:
            body["details"] = self.details
        if self.violations:
            body["validationErrors"] = [
                {"field": v.field, "message": v.message, "attemptedValue": v.attempted_value}
                for v in self.violations
            ]
        return jsonable_encoder(body)


def _diagnostics(exc: BaseException) -> dict[str, Any]:
    return {
        "exceptionType": type(exc).__name__,
        "stackTrace": "".join(traceback.format_exception(exc)),
    }


def _internal(exc: BaseException, trace_id: str, *, debug: bool, message: str | None = None) -> ErrorRecord:
    if not debug:
        return ErrorRecord(ErrorKind.INTERNAL, GENERIC_INTERNAL_MESSAGE, trace_id)
    return ErrorRecord(
        ErrorKind.INTERNAL,
        message or str(exc) or GENERIC_INTERNAL_MESSAGE,
        trace_id,
        details=_diagnostics(exc),
    )


def classify_exception(exc: BaseException, trace_id: str, *, debug: bool = False) -> ErrorRecord:
    """Map any exception onto the error taxonomy.

    ``debug`` enables diagnostic mode: internal failures show their real
    message plus exception type and stack trace in ``details``.
    """
    match exc:
        case UserManagementError(kind=ErrorKind.INTERNAL):
            return _internal(exc, trace_id, debug=debug, message=exc.message)
        case UserManagementError():
            violations = exc.violations if isinstance(exc, ValidationError) else ()
            details = dict(exc.details) if debug else {}
            return ErrorRecord(exc.kind, exc.message, trace_id, violations, details)
        case RequestValidationError() | PydanticValidationError():
            aggregated = aggregate_schema_errors(exc.errors())
            return ErrorRecord(ErrorKind.VALIDATION, aggregated.message, trace_id, aggregated.violations)
        case ValueError():
            return ErrorRecord(ErrorKind.VALIDATION, str(exc) or "Invalid argument.", trace_id)
        case PermissionError():
            return ErrorRecord(ErrorKind.UNAUTHORIZED, ACCESS_DENIED_MESSAGE, trace_id)
        case TimeoutError():
            return ErrorRecord(ErrorKind.TIMEOUT, TIMEOUT_MESSAGE, trace_id)
        case StarletteHTTPException():
            kind = ErrorKind.from_status(exc.status_code)
            if kind is ErrorKind.INTERNAL:
                return _internal(exc, trace_id, debug=debug, message=str(exc.detail))
            return ErrorRecord(kind, str(exc.detail), trace_id, status=exc.status_code)
        case _:
            return _internal(exc, trace_id, debug=debug)


def get_trace_id(request: Request) -> str:
    """Trace id assigned by the boundary middleware, or a fresh one."""
    trace_id = getattr(request.state, "trace_id", None)
    if not trace_id:
        trace_id = uuid4().hex
        request.state.trace_id = trace_id
    return trace_id


def build_error_response(request: Request, exc: BaseException) -> JSONResponse:
    trace_id = get_trace_id(request)
    debug = bool(getattr(request.app.state, "error_diagnostics", False))
    record = classify_exception(exc, trace_id, debug=debug)

    fields = {
        "trace_id": trace_id,
        "path": request.url.path,
        "method": request.method,
        "status_code": record.status_code,
        "error_type": record.type_tag,
    }
    if record.log_level == "warning":
        log.warning("request_failed", error=record.message, **fields)
    else:
        log.error("request_failed", exc_info=exc, **fields)

    return JSONResponse(
        status_code=record.status_code,
        content=record.to_body(),
        headers={TRACE_HEADER: trace_id},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Route the failures FastAPI handles itself through the same boundary."""

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return build_error_response(request, exc)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return build_error_response(request, exc)

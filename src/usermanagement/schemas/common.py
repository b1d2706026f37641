from __future__ import annotations

from datetime import datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from usermanagement.query.pagination import PagedResult

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base for API bodies: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class PagedResponse(CamelModel, Generic[T]):
    items: list[T]
    total_count: int
    page: int
    page_size: int

    @classmethod
    def from_result(cls, result: PagedResult[Any]) -> PagedResponse[Any]:
        return cls(
            items=list(result.items),
            total_count=result.total_count,
            page=result.page,
            page_size=result.page_size,
        )


class MessageResponse(CamelModel):
    message: str


class ValidationErrorItem(CamelModel):
    field: str
    message: str
    attempted_value: Any = None


class ErrorResponse(CamelModel):
    """Documented shape of every error body.

    ``details`` and ``validationErrors`` are left out of the JSON when empty.
    """

    type: str
    message: str
    status_code: int
    trace_id: str
    timestamp: datetime
    details: dict[str, Any] | None = None
    validation_errors: list[ValidationErrorItem] | None = None

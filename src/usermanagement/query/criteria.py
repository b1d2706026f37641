"""Typed representation of a user listing request."""

from __future__ import annotations

from datetime import date, datetime, timezone

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100
DEFAULT_SORT_BY = "createdAt"
DEFAULT_SORT_DIRECTION = "desc"


class UserQueryCriteria(BaseModel):
    """Filter, sort and page parameters for the user listing.

    Page and page size are clamped into range on construction. A
    ``max_page_size`` entry in the validation context overrides the
    default ceiling. Blank text filters are treated as absent, and the
    sort key is kept as given; the sort resolver corrects bad keys.
    """

    model_config = ConfigDict(frozen=True)

    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    search_term: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone_number: str | None = None
    gender: str | None = None
    role_name: str | None = None

    date_of_birth_from: date | None = None
    date_of_birth_to: date | None = None
    created_from: datetime | None = None
    created_to: datetime | None = None

    sort_by: str | None = DEFAULT_SORT_BY
    sort_direction: str | None = DEFAULT_SORT_DIRECTION

    @field_validator("page")
    @classmethod
    def clamp_page(cls, value: int) -> int:
        return max(value, 1)

    @field_validator("page_size")
    @classmethod
    def clamp_page_size(cls, value: int, info: ValidationInfo) -> int:
        ceiling = MAX_PAGE_SIZE
        if info.context and info.context.get("max_page_size"):
            ceiling = int(info.context["max_page_size"])
        return min(max(value, 1), ceiling)

    @field_validator(
        "search_term",
        "first_name",
        "last_name",
        "email",
        "phone_number",
        "gender",
        "role_name",
    )
    @classmethod
    def blank_as_absent(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip()
        return value or None

    @field_validator("created_from", "created_to")
    @classmethod
    def naive_utc(cls, value: datetime | None) -> datetime | None:
        # Stored timestamps are naive UTC.
        if value is not None and value.tzinfo is not None:
            return value.astimezone(timezone.utc).replace(tzinfo=None)
        return value

"""Sort resolver for the user listing."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from usermanagement.core.types import SortDirection, SortField

DEFAULT_SORT_FIELD = SortField.CREATED_AT

_ALLOWED: dict[str, SortField] = {f.value.lower(): f for f in SortField}

_TEXT_ATTRS: dict[SortField, str] = {
    SortField.FIRST_NAME: "first_name",
    SortField.LAST_NAME: "last_name",
    SortField.EMAIL: "email_address",
    SortField.GENDER: "gender",
    SortField.ROLE_NAME: "role_name",
}


@dataclass(frozen=True, slots=True)
class SortSpec:
    field: SortField
    descending: bool

    @property
    def direction(self) -> SortDirection:
        return SortDirection.DESC if self.descending else SortDirection.ASC


DEFAULT_SORT = SortSpec(DEFAULT_SORT_FIELD, descending=True)


def resolve_sort(sort_by: object = None, sort_direction: object = None) -> SortSpec:
    """Map caller input onto the allow-list. Never raises.

    Unknown, empty or non-string keys fall back to createdAt; any direction
    other than "asc" means descending.
    """
    field = DEFAULT_SORT_FIELD
    if isinstance(sort_by, str):
        field = _ALLOWED.get(sort_by.strip().lower(), DEFAULT_SORT_FIELD)

    ascending = (
        isinstance(sort_direction, str)
        and sort_direction.strip().lower() == SortDirection.ASC.value
    )
    return SortSpec(field=field, descending=not ascending)


def sort_value(record: object, field: SortField) -> Any:
    """Comparable key for ``field``; text compares case-insensitively."""
    attr = _TEXT_ATTRS.get(field)
    if attr is not None:
        return (getattr(record, attr, None) or "").lower()
    if field is SortField.DATE_OF_BIRTH:
        return getattr(record, "date_of_birth")
    return getattr(record, "created_at")


def sort_records(records: Iterable[Any], spec: SortSpec) -> list[Any]:
    # sorted() is stable in both directions, so ties keep their input order.
    return sorted(records, key=lambda r: sort_value(r, spec.field), reverse=spec.descending)

"""Record sources the listing engine runs against.

A source only has to count and fetch records for a list of predicates;
the SQL implementation lives with the user repository.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date, datetime
from typing import Any, Generic, Protocol, TypeVar

from usermanagement.query.criteria import UserQueryCriteria
from usermanagement.query.filters import Predicate, apply_filters, compile_filters
from usermanagement.query.pagination import PagedResult, PageWindow
from usermanagement.query.sorting import SortSpec, resolve_sort, sort_records

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)


class UserRecord(Protocol):
    """Attributes the filter compiler and sort resolver read."""

    first_name: str
    last_name: str
    email_address: str
    phone_number: str
    gender: str
    date_of_birth: date
    created_at: datetime

    @property
    def role_names(self) -> tuple[str, ...]: ...

    @property
    def role_name(self) -> str: ...


class RecordSource(Protocol[T_co]):
    async def count(self, predicates: Sequence[Predicate]) -> int: ...

    async def fetch(
        self, predicates: Sequence[Predicate], sort: SortSpec, window: PageWindow
    ) -> list[T_co]: ...


class InMemoryRecordSource(Generic[T]):
    """Record source over a list already held in memory."""

    def __init__(self, records: Iterable[T]) -> None:
        self._records: list[T] = list(records)

    async def count(self, predicates: Sequence[Predicate]) -> int:
        return len(apply_filters(predicates, self._records))

    async def fetch(
        self, predicates: Sequence[Predicate], sort: SortSpec, window: PageWindow
    ) -> list[T]:
        matched = apply_filters(predicates, self._records)
        return window.slice(sort_records(matched, sort))


async def run_query(source: RecordSource[Any], criteria: UserQueryCriteria) -> PagedResult[Any]:
    """Filter, count, sort and page ``source`` according to ``criteria``.

    The total is counted before the page is fetched; the two calls are not
    atomic, so a concurrent write may shift the total slightly. A window
    that starts at or past the total is never fetched.
    """
    predicates = compile_filters(criteria)
    total = await source.count(predicates)
    sort = resolve_sort(criteria.sort_by, criteria.sort_direction)
    window = PageWindow(criteria.page, criteria.page_size)
    items = await source.fetch(predicates, sort, window) if window.offset < total else []
    return PagedResult(
        items=list(items),
        total_count=total,
        page=window.page,
        page_size=window.page_size,
    )

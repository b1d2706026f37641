from usermanagement.query.criteria import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, UserQueryCriteria
from usermanagement.query.filters import AnyOf, FieldPredicate, Predicate, compile_filters, matches_all
from usermanagement.query.pagination import PagedResult, PageWindow, paginate
from usermanagement.query.sorting import DEFAULT_SORT, SortSpec, resolve_sort, sort_records
from usermanagement.query.source import InMemoryRecordSource, RecordSource, run_query

__all__ = [
    "AnyOf",
    "DEFAULT_PAGE_SIZE",
    "DEFAULT_SORT",
    "FieldPredicate",
    "InMemoryRecordSource",
    "MAX_PAGE_SIZE",
    "PagedResult",
    "PageWindow",
    "Predicate",
    "RecordSource",
    "SortSpec",
    "UserQueryCriteria",
    "compile_filters",
    "matches_all",
    "paginate",
    "resolve_sort",
    "run_query",
    "sort_records",
]

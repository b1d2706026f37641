"""Filter compiler: turns listing criteria into predicates over user records.

Predicates are plain values. They can be evaluated in memory with
``matches`` and the SQL record source translates the same values into
WHERE clauses, so this module has no dependency on any store.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import Any, Union

from usermanagement.core.types import FilterField, MatchOp
from usermanagement.query.criteria import UserQueryCriteria

SEARCH_FIELDS: tuple[FilterField, ...] = (
    FilterField.FIRST_NAME,
    FilterField.LAST_NAME,
    FilterField.EMAIL,
    FilterField.PHONE,
    FilterField.ROLE_NAME,
)


@dataclass(frozen=True, slots=True)
class FieldPredicate:
    field: FilterField
    op: MatchOp
    value: Any

    def matches(self, record: object) -> bool:
        return any(
            _compare(self.op, candidate, self.value)
            for candidate in record_values(record, self.field)
        )


@dataclass(frozen=True, slots=True)
class AnyOf:
    """Matches when at least one of its field predicates does."""

    predicates: tuple[FieldPredicate, ...]

    def matches(self, record: object) -> bool:
        return any(p.matches(record) for p in self.predicates)


Predicate = Union[FieldPredicate, AnyOf]
FilterStep = Callable[[UserQueryCriteria], Predicate | None]


def record_values(record: object, field: FilterField) -> tuple[Any, ...]:
    """Values of ``field`` on a record; a user may carry several role names."""
    if field is FilterField.ROLE_NAME:
        return tuple(getattr(record, "role_names", ()) or ())
    value = getattr(record, field.value, None)
    return () if value is None else (value,)


def _compare(op: MatchOp, candidate: Any, value: Any) -> bool:
    match op:
        case MatchOp.CONTAINS:
            return str(value).lower() in str(candidate).lower()
        case MatchOp.EQUALS:
            return str(candidate).lower() == str(value).lower()
        case MatchOp.AT_LEAST:
            return candidate >= value
        case MatchOp.AT_MOST:
            return candidate <= value


# ── Builder steps ───────────────────────────────────────────────────


def _search_term(criteria: UserQueryCriteria) -> Predicate | None:
    if criteria.search_term is None:
        return None
    return AnyOf(
        tuple(FieldPredicate(f, MatchOp.CONTAINS, criteria.search_term) for f in SEARCH_FIELDS)
    )


def _field_step(attr: str, field: FilterField, op: MatchOp) -> FilterStep:
    def step(criteria: UserQueryCriteria) -> Predicate | None:
        value = getattr(criteria, attr)
        if value is None:
            return None
        return FieldPredicate(field, op, value)

    step.__name__ = f"_{attr}"
    return step


FILTER_STEPS: tuple[FilterStep, ...] = (
    _search_term,
    _field_step("first_name", FilterField.FIRST_NAME, MatchOp.CONTAINS),
    _field_step("last_name", FilterField.LAST_NAME, MatchOp.CONTAINS),
    _field_step("email", FilterField.EMAIL, MatchOp.CONTAINS),
    _field_step("phone_number", FilterField.PHONE, MatchOp.CONTAINS),
    _field_step("gender", FilterField.GENDER, MatchOp.EQUALS),
    _field_step("role_name", FilterField.ROLE_NAME, MatchOp.CONTAINS),
    _field_step("date_of_birth_from", FilterField.DATE_OF_BIRTH, MatchOp.AT_LEAST),
    _field_step("date_of_birth_to", FilterField.DATE_OF_BIRTH, MatchOp.AT_MOST),
    _field_step("created_from", FilterField.CREATED_AT, MatchOp.AT_LEAST),
    _field_step("created_to", FilterField.CREATED_AT, MatchOp.AT_MOST),
)


def compile_filters(criteria: UserQueryCriteria) -> list[Predicate]:
    """Run every builder step in order and keep the predicates that apply."""
    predicates: list[Predicate] = []
    for step in FILTER_STEPS:
        predicate = step(criteria)
        if predicate is not None:
            predicates.append(predicate)
    return predicates


def matches_all(predicates: Sequence[Predicate], record: object) -> bool:
    return all(p.matches(record) for p in predicates)


def apply_filters(predicates: Sequence[Predicate], records: Iterable[Any]) -> list[Any]:
    return [r for r in records if matches_all(predicates, r)]

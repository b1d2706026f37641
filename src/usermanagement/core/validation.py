"""Validation error aggregator.

Collects every field-level violation found while checking one request so
they are reported together in a single Validation failure instead of
one at a time.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from usermanagement.core.exceptions import FieldViolation, ValidationError

DEFAULT_MESSAGE = "One or more validation errors occurred."

# Leading loc segments FastAPI adds to say where a value came from.
_LOCATION_PREFIXES = frozenset({"body", "query", "path", "header", "cookie"})


class ValidationErrorAggregator:
    """Accumulate field violations, then raise them as one ValidationError."""

    def __init__(self) -> None:
        self._violations: list[FieldViolation] = []

    def __len__(self) -> int:
        return len(self._violations)

    def __bool__(self) -> bool:
        return bool(self._violations)

    @property
    def violations(self) -> tuple[FieldViolation, ...]:
        return tuple(self._violations)

    def add(self, field: str, message: str, attempted_value: Any = None) -> None:
        self._violations.append(FieldViolation(field, message, attempted_value))

    def check(
        self, condition: bool, field: str, message: str, attempted_value: Any = None
    ) -> bool:
        """Record a violation unless ``condition`` holds. Returns ``condition``."""
        if not condition:
            self.add(field, message, attempted_value)
        return condition

    def extend(self, violations: Iterable[FieldViolation]) -> None:
        self._violations.extend(violations)

    def add_schema_errors(self, errors: Sequence[Mapping[str, Any]]) -> None:
        """Add violations from pydantic / FastAPI ``errors()`` output."""
        for error in errors:
            self._violations.append(violation_from_schema_error(error))

    def to_error(self, message: str = DEFAULT_MESSAGE) -> ValidationError:
        return ValidationError(message, self._violations)

    def raise_if_any(self, message: str = DEFAULT_MESSAGE) -> None:
        if self._violations:
            raise self.to_error(message)


def violation_from_schema_error(error: Mapping[str, Any]) -> FieldViolation:
    loc = [str(part) for part in error.get("loc", ())]
    if loc and loc[0] in _LOCATION_PREFIXES:
        loc = loc[1:]
    field = ".".join(loc) if loc else "request"

    # For a missing field pydantic reports the enclosing object as the input.
    attempted = None if error.get("type") == "missing" else error.get("input")
    return FieldViolation(field, str(error.get("msg", "Invalid value")), attempted)


def aggregate_schema_errors(
    errors: Sequence[Mapping[str, Any]], message: str = DEFAULT_MESSAGE
) -> ValidationError:
    """Build one ValidationError carrying every entry of an ``errors()`` list."""
    aggregator = ValidationErrorAggregator()
    aggregator.add_schema_errors(errors)
    return aggregator.to_error(message)

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, ClassVar

from usermanagement.core.types import ErrorKind


@dataclass(frozen=True, slots=True)
class FieldViolation:
    """One failed field constraint, reported back as a validationErrors entry."""

    field: str
    message: str
    attempted_value: Any = None


class UserManagementError(Exception):
    """Base exception for all UserManagement errors.

    Subclasses only pin ``kind``; status code and type tag are looked up
    from the kind when the error is classified.
    """

    kind: ClassVar[ErrorKind] = ErrorKind.INTERNAL

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    @property
    def status_code(self) -> int:
        return self.kind.status_code


class ConfigurationError(UserManagementError):
    """Invalid or missing configuration."""


class RepositoryError(UserManagementError):
    """Database query or persistence failure."""


class ValidationError(UserManagementError):
    """Input validation failure (one or more field violations)."""

    kind = ErrorKind.VALIDATION

    def __init__(
        self,
        message: str = "One or more validation errors occurred.",
        violations: Iterable[FieldViolation] = (),
        *,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details=details)
        self.violations: tuple[FieldViolation, ...] = tuple(violations)


class NotFoundError(UserManagementError):
    kind = ErrorKind.NOT_FOUND

    def __init__(self, entity: str, identifier: object | None = None) -> None:
        if identifier is None:
            message = entity
        else:
            message = f"{entity} with ID '{identifier}' was not found."
        super().__init__(message)


class ConflictError(UserManagementError):
    kind = ErrorKind.CONFLICT


class ForbiddenError(UserManagementError):
    kind = ErrorKind.FORBIDDEN


class UnauthorizedError(UserManagementError):
    kind = ErrorKind.UNAUTHORIZED


class BusinessRuleError(UserManagementError):
    """Semantically invalid operation on otherwise valid data."""

    kind = ErrorKind.BUSINESS_RULE


class OperationTimeoutError(UserManagementError):
    kind = ErrorKind.TIMEOUT

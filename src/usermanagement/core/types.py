from enum import StrEnum


class ErrorKind(StrEnum):
    VALIDATION = "Validation"
    NOT_FOUND = "NotFound"
    CONFLICT = "Conflict"
    FORBIDDEN = "Forbidden"
    UNAUTHORIZED = "Unauthorized"
    BUSINESS_RULE = "BusinessRule"
    TIMEOUT = "Timeout"
    INTERNAL = "Internal"

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[self]

    @property
    def type_tag(self) -> str:
        return _TYPE_TAGS[self]

    @classmethod
    def from_status(cls, status_code: int) -> "ErrorKind":
        """Kind whose status matches exactly, else Validation (4xx) or Internal."""
        for kind, status in _STATUS_CODES.items():
            if status == status_code:
                return kind
        if 400 <= status_code < 500:
            return cls.VALIDATION
        return cls.INTERNAL


_STATUS_CODES: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.TIMEOUT: 408,
    ErrorKind.CONFLICT: 409,
    ErrorKind.BUSINESS_RULE: 422,
    ErrorKind.INTERNAL: 500,
}

_TYPE_TAGS: dict[ErrorKind, str] = {
    ErrorKind.VALIDATION: "ValidationError",
    ErrorKind.UNAUTHORIZED: "Unauthorized",
    ErrorKind.FORBIDDEN: "Forbidden",
    ErrorKind.NOT_FOUND: "NotFound",
    ErrorKind.TIMEOUT: "Timeout",
    ErrorKind.CONFLICT: "Conflict",
    ErrorKind.BUSINESS_RULE: "BusinessLogicError",
    ErrorKind.INTERNAL: "InternalServerError",
}


class SortDirection(StrEnum):
    ASC = "asc"
    DESC = "desc"


class SortField(StrEnum):
    FIRST_NAME = "firstName"
    LAST_NAME = "lastName"
    EMAIL = "email"
    DATE_OF_BIRTH = "dateOfBirth"
    GENDER = "gender"
    CREATED_AT = "createdAt"
    ROLE_NAME = "roleName"


class FilterField(StrEnum):
    """Record attributes the filter compiler can constrain."""

    FIRST_NAME = "first_name"
    LAST_NAME = "last_name"
    EMAIL = "email_address"
    PHONE = "phone_number"
    GENDER = "gender"
    ROLE_NAME = "role_name"
    DATE_OF_BIRTH = "date_of_birth"
    CREATED_AT = "created_at"


class MatchOp(StrEnum):
    CONTAINS = "contains"
    EQUALS = "equals"
    AT_LEAST = "gte"
    AT_MOST = "lte"


DEFAULT_ROLES: tuple[str, ...] = ("Admin", "Manager", "User")

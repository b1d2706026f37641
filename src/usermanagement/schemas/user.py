from __future__ import annotations

from datetime import date, datetime
from uuid import UUID

from pydantic import EmailStr, Field, field_validator

from usermanagement.schemas.common import CamelModel, MessageResponse


def _not_in_future(value: date) -> date:
    if value > date.today():
        raise ValueError("Date of birth cannot be in the future")
    return value


class UserProfileFields(CamelModel):
    first_name: str = Field(min_length=1, max_length=100)
    middle_name: str = Field("", max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    date_of_birth: date
    gender: str = Field(min_length=1, max_length=20)
    email_address: EmailStr
    phone_number: str = Field("", max_length=20)

    @field_validator("date_of_birth")
    @classmethod
    def check_date_of_birth(cls, value: date) -> date:
        return _not_in_future(value)

    @field_validator("email_address")
    @classmethod
    def check_email_length(cls, value: str) -> str:
        if len(value) > 255:
            raise ValueError("Email address must be at most 255 characters")
        return value


class CreateUserRequest(UserProfileFields):
    # bcrypt only hashes the first 72 bytes
    password: str = Field(min_length=8, max_length=72)
    role_id: UUID

    @field_validator("password")
    @classmethod
    def check_password_bytes(cls, value: str) -> str:
        if len(value.encode("utf-8")) > 72:
            raise ValueError("Password must be at most 72 bytes when UTF-8 encoded")
        return value


class UpdateUserRequest(UserProfileFields):
    pass


class LoginRequest(CamelModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class UserResponse(CamelModel):
    id: UUID
    first_name: str
    middle_name: str
    last_name: str
    date_of_birth: date
    gender: str
    email_address: str
    phone_number: str
    role_name: str
    created_at: datetime


class UserSummary(UserResponse):
    """List item for the paged user listing."""

    full_name: str
    age: int

    @classmethod
    def from_user(cls, user: object, *, today: date | None = None) -> UserSummary:
        today = today or date.today()
        dob: date = getattr(user, "date_of_birth")
        first = getattr(user, "first_name")
        middle = getattr(user, "middle_name", "") or ""
        last = getattr(user, "last_name")
        return cls(
            id=getattr(user, "id"),
            first_name=first,
            middle_name=middle,
            last_name=last,
            full_name=" ".join(part for part in (first, middle, last) if part).strip(),
            date_of_birth=dob,
            age=age_on(dob, today),
            gender=getattr(user, "gender"),
            email_address=getattr(user, "email_address"),
            phone_number=getattr(user, "phone_number", "") or "",
            role_name=getattr(user, "role_name", "") or "",
            created_at=getattr(user, "created_at"),
        )


def age_on(date_of_birth: date, today: date) -> int:
    """Whole years between ``date_of_birth`` and ``today``."""
    before_birthday = (today.month, today.day) < (date_of_birth.month, date_of_birth.day)
    return today.year - date_of_birth.year - int(before_birthday)


class UserCreatedResponse(MessageResponse):
    user_id: UUID


class CredentialsValidResponse(MessageResponse):
    user_id: UUID

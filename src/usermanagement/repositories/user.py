from __future__ import annotations

from collections.abc import Sequence
from datetime import date
from typing import Any
from uuid import UUID

from sqlalchemy import ColumnElement, func, or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from usermanagement.core.exceptions import ConflictError, RepositoryError
from usermanagement.core.types import FilterField, MatchOp, SortField
from usermanagement.models.role import Role
from usermanagement.models.user import User, UserRole
from usermanagement.query.filters import AnyOf, FieldPredicate, Predicate
from usermanagement.query.pagination import PageWindow
from usermanagement.query.sorting import SortSpec


def _email_conflict(email: str) -> ConflictError:
    return ConflictError(f"A user with email '{email}' already exists.")


class UserRepository:
    """Data access layer for User and its role links."""

    @staticmethod
    async def create(
        session: AsyncSession,
        *,
        first_name: str,
        last_name: str,
        date_of_birth: date,
        gender: str,
        email_address: str,
        password_hash: str,
        role: Role,
        middle_name: str = "",
        phone_number: str = "",
    ) -> User:
        """Insert the user and its role link in one flush.

        A unique violation on the email column is reported as a conflict;
        the caller's transaction is left for the session scope to roll back.
        """
        try:
            user = User(
                first_name=first_name,
                middle_name=middle_name,
                last_name=last_name,
                date_of_birth=date_of_birth,
                gender=gender,
                email_address=email_address,
                password_hash=password_hash,
                phone_number=phone_number,
                role_links=[UserRole(role=role)],
            )
            session.add(user)
            await session.flush()
            return user
        except IntegrityError as exc:
            raise _email_conflict(email_address) from exc
        except SQLAlchemyError as exc:
            raise RepositoryError("Failed to create user") from exc

    @staticmethod
    async def get_by_id(session: AsyncSession, user_id: UUID) -> User | None:
        try:
            return await session.get(User, user_id)
        except SQLAlchemyError as exc:
            raise RepositoryError(f"Failed to get user {user_id}") from exc

    @staticmethod
    async def get_by_email(session: AsyncSession, email: str) -> User | None:
        try:
            result = await session.execute(
                select(User).where(func.lower(User.email_address) == email.lower())
            )
            return result.scalar_one_or_none()
        except SQLAlchemyError as exc:
            raise RepositoryError("Failed to get user by email") from exc

    @staticmethod
    async def email_in_use(
        session: AsyncSession, email: str, *, exclude_id: UUID | None = None
    ) -> bool:
        try:
            q = select(User.id).where(func.lower(User.email_address) == email.lower())
            if exclude_id is not None:
                q = q.where(User.id != exclude_id)
            result = await session.execute(q.limit(1))
            return result.scalar_one_or_none() is not None
        except SQLAlchemyError as exc:
            raise RepositoryError("Failed to check email availability") from exc

    @staticmethod
    async def get_all(session: AsyncSession) -> list[User]:
        try:
            result = await session.execute(select(User).order_by(User.created_at.desc(), User.id))
            return list(result.scalars().all())
        except SQLAlchemyError as exc:
            raise RepositoryError("Failed to list users") from exc

    @staticmethod
    async def update(session: AsyncSession, user: User, **fields: Any) -> User:
        try:
            for name, value in fields.items():
                setattr(user, name, value)
            await session.flush()
            return user
        except IntegrityError as exc:
            raise _email_conflict(fields.get("email_address", user.email_address)) from exc
        except SQLAlchemyError as exc:
            raise RepositoryError(f"Failed to update user {user.id}") from exc

    @staticmethod
    async def delete(session: AsyncSession, user: User) -> None:
        try:
            await session.delete(user)
            await session.flush()
        except SQLAlchemyError as exc:
            raise RepositoryError(f"Failed to delete user {user.id}") from exc


# ── SQL record source ───────────────────────────────────────────────

_FILTER_COLUMNS: dict[FilterField, Any] = {
    FilterField.FIRST_NAME: User.first_name,
    FilterField.LAST_NAME: User.last_name,
    FilterField.EMAIL: User.email_address,
    FilterField.PHONE: User.phone_number,
    FilterField.GENDER: User.gender,
    FilterField.DATE_OF_BIRTH: User.date_of_birth,
    FilterField.CREATED_AT: User.created_at,
}

_first_role_name = (
    select(Role.role_name)
    .join(UserRole, UserRole.role_id == Role.id)
    .where(UserRole.user_id == User.id)
    .order_by(UserRole.assigned_at)
    .limit(1)
    .correlate(User)
    .scalar_subquery()
)

_SORT_COLUMNS: dict[SortField, Any] = {
    SortField.FIRST_NAME: func.lower(User.first_name),
    SortField.LAST_NAME: func.lower(User.last_name),
    SortField.EMAIL: func.lower(User.email_address),
    SortField.GENDER: func.lower(User.gender),
    SortField.DATE_OF_BIRTH: User.date_of_birth,
    SortField.CREATED_AT: User.created_at,
    SortField.ROLE_NAME: func.lower(func.coalesce(_first_role_name, "")),
}


def _like_pattern(value: Any) -> str:
    escaped = str(value).replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def _compare_clause(column: Any, op: MatchOp, value: Any) -> ColumnElement[bool]:
    match op:
        case MatchOp.CONTAINS:
            return column.ilike(_like_pattern(value), escape="\\")
        case MatchOp.EQUALS:
            return func.lower(column) == str(value).lower()
        case MatchOp.AT_LEAST:
            return column >= value
        case MatchOp.AT_MOST:
            return column <= value
    raise ValueError(f"Unsupported match operator: {op}")


def _field_clause(predicate: FieldPredicate) -> ColumnElement[bool]:
    if predicate.field is FilterField.ROLE_NAME:
        return User.role_links.any(
            UserRole.role.has(_compare_clause(Role.role_name, predicate.op, predicate.value))
        )
    return _compare_clause(_FILTER_COLUMNS[predicate.field], predicate.op, predicate.value)


def to_clause(predicate: Predicate) -> ColumnElement[bool]:
    """Translate a compiled predicate into a SQLAlchemy WHERE clause."""
    if isinstance(predicate, AnyOf):
        return or_(*(_field_clause(p) for p in predicate.predicates))
    return _field_clause(predicate)


class SqlUserRecordSource:
    """Record source backed by the user_account table of one session."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def count(self, predicates: Sequence[Predicate]) -> int:
        try:
            q = select(func.count(User.id))
            for p in predicates:
                q = q.where(to_clause(p))
            return (await self._session.execute(q)).scalar_one()
        except SQLAlchemyError as exc:
            raise RepositoryError("Failed to count users") from exc

    async def fetch(
        self, predicates: Sequence[Predicate], sort: SortSpec, window: PageWindow
    ) -> list[User]:
        try:
            column = _SORT_COLUMNS[sort.field]
            ordering = column.desc() if sort.descending else column.asc()

            q = select(User)
            for p in predicates:
                q = q.where(to_clause(p))
            q = q.order_by(ordering, User.id).offset(window.offset).limit(window.limit)

            rows = (await self._session.execute(q)).scalars().all()
            return list(rows)
        except SQLAlchemyError as exc:
            raise RepositoryError("Failed to list users") from exc

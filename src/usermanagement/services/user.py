"""User service: CRUD, listing and credential checks for user records."""

from __future__ import annotations

import asyncio
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from usermanagement.core.exceptions import ConflictError, NotFoundError, UnauthorizedError
from usermanagement.core.logging import get_logger
from usermanagement.core.security import PasswordHasher
from usermanagement.models.user import User
from usermanagement.query.criteria import UserQueryCriteria
from usermanagement.query.pagination import PagedResult
from usermanagement.query.source import RecordSource, run_query
from usermanagement.repositories.role import RoleRepository
from usermanagement.repositories.user import SqlUserRecordSource, UserRepository
from usermanagement.schemas.user import CreateUserRequest, UpdateUserRequest, UserSummary

log = get_logger(__name__)

# Same text for unknown email and wrong password so accounts cannot be enumerated.
INVALID_CREDENTIALS = "Invalid email or password."


class UserService:
    """User operations. Every method runs inside the caller's session."""

    def __init__(self, password_hasher: PasswordHasher) -> None:
        self._hasher = password_hasher

    async def create_user(self, session: AsyncSession, request: CreateUserRequest) -> User:
        """Create a user and assign its role.

        The email pre-check gives a friendly conflict for the common case;
        a concurrent insert of the same email still fails on the unique
        constraint and is reported as the same conflict.
        """
        if await UserRepository.email_in_use(session, request.email_address):
            raise ConflictError(f"A user with email '{request.email_address}' already exists.")

        role = await RoleRepository.get_by_id(session, request.role_id)
        if role is None:
            raise NotFoundError("Role", request.role_id)

        password_hash = await asyncio.to_thread(self._hasher.hash, request.password)
        user = await UserRepository.create(
            session,
            first_name=request.first_name,
            middle_name=request.middle_name,
            last_name=request.last_name,
            date_of_birth=request.date_of_birth,
            gender=request.gender,
            email_address=request.email_address,
            phone_number=request.phone_number,
            password_hash=password_hash,
            role=role,
        )
        await session.commit()

        log.info("user_created", user_id=str(user.id), role_id=str(role.id))
        return user

    async def get_user(self, session: AsyncSession, user_id: UUID) -> User:
        user = await UserRepository.get_by_id(session, user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return user

    async def get_user_by_email(self, session: AsyncSession, email: str) -> User:
        user = await UserRepository.get_by_email(session, email)
        if user is None:
            raise NotFoundError(f"User with email '{email}' was not found.")
        return user

    async def list_users(
        self,
        session: AsyncSession,
        criteria: UserQueryCriteria,
        *,
        source: RecordSource[User] | None = None,
    ) -> PagedResult[UserSummary]:
        """Return one page of user summaries matching ``criteria``."""
        if source is None:
            source = SqlUserRecordSource(session)
        result = await run_query(source, criteria)
        return result.map(UserSummary.from_user)

    async def list_all_users(self, session: AsyncSession) -> list[User]:
        return await UserRepository.get_all(session)

    async def update_user(
        self, session: AsyncSession, user_id: UUID, request: UpdateUserRequest
    ) -> User:
        user = await self.get_user(session, user_id)

        email_changed = request.email_address.lower() != user.email_address.lower()
        if email_changed and await UserRepository.email_in_use(
            session, request.email_address, exclude_id=user_id
        ):
            raise ConflictError(f"A user with email '{request.email_address}' already exists.")

        user = await UserRepository.update(session, user, **request.model_dump())
        await session.commit()

        log.info("user_updated", user_id=str(user_id))
        return user

    async def delete_user(self, session: AsyncSession, user_id: UUID) -> None:
        user = await self.get_user(session, user_id)
        await UserRepository.delete(session, user)
        await session.commit()

        log.info("user_deleted", user_id=str(user_id))

    async def validate_credentials(
        self, session: AsyncSession, email: str, password: str
    ) -> User:
        """Return the user when ``password`` matches, else raise Unauthorized."""
        user = await UserRepository.get_by_email(session, email)
        if user is None:
            raise UnauthorizedError(INVALID_CREDENTIALS)

        valid = await asyncio.to_thread(self._hasher.verify, password, user.password_hash)
        if not valid:
            raise UnauthorizedError(INVALID_CREDENTIALS)
        return user

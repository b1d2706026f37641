from __future__ import annotations

from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from usermanagement.core.exceptions import ConflictError, RepositoryError
from usermanagement.models.role import Role
from usermanagement.models.user import UserRole


class RoleRepository:
    """Data access layer for Role."""

    @staticmethod
    async def create(session: AsyncSession, *, role_name: str) -> Role:
        try:
            role = Role(role_name=role_name)
            session.add(role)
            await session.flush()
            return role
        except IntegrityError as exc:
            raise ConflictError(f"A role named '{role_name}' already exists.") from exc
        except SQLAlchemyError as exc:
            raise RepositoryError("Failed to create role") from exc

    @staticmethod
    async def get_by_id(session: AsyncSession, role_id: UUID) -> Role | None:
        try:
            return await session.get(Role, role_id)
        except SQLAlchemyError as exc:
            raise RepositoryError(f"Failed to get role {role_id}") from exc

    @staticmethod
    async def get_by_name(session: AsyncSession, role_name: str) -> Role | None:
        try:
            result = await session.execute(
                select(Role).where(func.lower(Role.role_name) == role_name.lower())
            )
            return result.scalar_one_or_none()
        except SQLAlchemyError as exc:
            raise RepositoryError(f"Failed to get role {role_name!r}") from exc

    @staticmethod
    async def get_all(session: AsyncSession) -> list[Role]:
        try:
            result = await session.execute(select(Role).order_by(Role.role_name))
            return list(result.scalars().all())
        except SQLAlchemyError as exc:
            raise RepositoryError("Failed to list roles") from exc

    @staticmethod
    async def rename(session: AsyncSession, role: Role, role_name: str) -> Role:
        try:
            role.role_name = role_name
            await session.flush()
            return role
        except IntegrityError as exc:
            raise ConflictError(f"A role named '{role_name}' already exists.") from exc
        except SQLAlchemyError as exc:
            raise RepositoryError(f"Failed to update role {role.id}") from exc

    @staticmethod
    async def count_assigned_users(session: AsyncSession, role_id: UUID) -> int:
        try:
            result = await session.execute(
                select(func.count()).select_from(UserRole).where(UserRole.role_id == role_id)
            )
            return result.scalar_one()
        except SQLAlchemyError as exc:
            raise RepositoryError(f"Failed to count users of role {role_id}") from exc

    @staticmethod
    async def delete(session: AsyncSession, role: Role) -> None:
        try:
            await session.delete(role)
            await session.flush()
        except SQLAlchemyError as exc:
            raise RepositoryError(f"Failed to delete role {role.id}") from exc

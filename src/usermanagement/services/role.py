from __future__ import annotations

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from usermanagement.core.exceptions import BusinessRuleError, ConflictError, NotFoundError
from usermanagement.core.logging import get_logger
from usermanagement.core.validation import ValidationErrorAggregator
from usermanagement.models.role import Role
from usermanagement.repositories.role import RoleRepository

log = get_logger(__name__)


def _clean_role_name(role_name: str) -> str:
    errors = ValidationErrorAggregator()
    cleaned = role_name.strip()
    errors.check(bool(cleaned), "roleName", "Role name must not be blank.", role_name)
    errors.raise_if_any()
    return cleaned


class RoleService:
    """Role CRUD."""

    @staticmethod
    async def create_role(session: AsyncSession, role_name: str) -> Role:
        role_name = _clean_role_name(role_name)
        if await RoleRepository.get_by_name(session, role_name) is not None:
            raise ConflictError(f"A role named '{role_name}' already exists.")

        role = await RoleRepository.create(session, role_name=role_name)
        await session.commit()

        log.info("role_created", role_id=str(role.id), role_name=role_name)
        return role

    @staticmethod
    async def get_role(session: AsyncSession, role_id: UUID) -> Role:
        role = await RoleRepository.get_by_id(session, role_id)
        if role is None:
            raise NotFoundError("Role", role_id)
        return role

    @staticmethod
    async def list_roles(session: AsyncSession) -> list[Role]:
        return await RoleRepository.get_all(session)

    @staticmethod
    async def update_role(session: AsyncSession, role_id: UUID, role_name: str) -> Role:
        role_name = _clean_role_name(role_name)
        role = await RoleService.get_role(session, role_id)

        existing = await RoleRepository.get_by_name(session, role_name)
        if existing is not None and existing.id != role.id:
            raise ConflictError(f"A role named '{role_name}' already exists.")

        role = await RoleRepository.rename(session, role, role_name)
        await session.commit()

        log.info("role_updated", role_id=str(role_id))
        return role

    @staticmethod
    async def delete_role(session: AsyncSession, role_id: UUID) -> None:
        role = await RoleService.get_role(session, role_id)

        assigned = await RoleRepository.count_assigned_users(session, role_id)
        if assigned:
            raise BusinessRuleError(
                f"Role '{role.role_name}' is still assigned to {assigned} user(s)."
            )

        await RoleRepository.delete(session, role)
        await session.commit()

        log.info("role_deleted", role_id=str(role_id))

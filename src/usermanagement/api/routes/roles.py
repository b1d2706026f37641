"""Role API routes."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from usermanagement.api.dependencies import get_db_session
from usermanagement.schemas.common import ErrorResponse, MessageResponse
from usermanagement.schemas.role import RoleCreatedResponse, RoleRequest, RoleResponse
from usermanagement.services.role import RoleService

router = APIRouter(tags=["roles"])


@router.post(
    "/roles",
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def create_role(
    body: RoleRequest,
    session: AsyncSession = Depends(get_db_session),
) -> RoleCreatedResponse:
    role = await RoleService.create_role(session, body.role_name)
    return RoleCreatedResponse(message="Role created successfully", role_id=role.id)


@router.get("/roles")
async def list_roles(session: AsyncSession = Depends(get_db_session)) -> list[RoleResponse]:
    roles = await RoleService.list_roles(session)
    return [RoleResponse.model_validate(r) for r in roles]


@router.get("/roles/{role_id}", responses={404: {"model": ErrorResponse}})
async def get_role(
    role_id: UUID,
    session: AsyncSession = Depends(get_db_session),
) -> RoleResponse:
    role = await RoleService.get_role(session, role_id)
    return RoleResponse.model_validate(role)


@router.put(
    "/roles/{role_id}",
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def update_role(
    role_id: UUID,
    body: RoleRequest,
    session: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await RoleService.update_role(session, role_id, body.role_name)
    return MessageResponse(message="Role updated successfully")


@router.delete(
    "/roles/{role_id}",
    responses={404: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
async def delete_role(
    role_id: UUID,
    session: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await RoleService.delete_role(session, role_id)
    return MessageResponse(message="Role deleted successfully")

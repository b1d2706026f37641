"""User API routes."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from usermanagement.api.dependencies import get_db_session, get_user_query_criteria, get_user_service
from usermanagement.query.criteria import UserQueryCriteria
from usermanagement.query.pagination import PagedResult
from usermanagement.schemas.common import ErrorResponse, MessageResponse, PagedResponse
from usermanagement.schemas.user import (
    CreateUserRequest,
    CredentialsValidResponse,
    LoginRequest,
    UpdateUserRequest,
    UserCreatedResponse,
    UserResponse,
    UserSummary,
)
from usermanagement.services.user import UserService

router = APIRouter(tags=["users"])

_ERRORS: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
}


PAGINATION_HEADERS = (
    "X-Pagination-TotalCount",
    "X-Pagination-TotalPages",
    "X-Pagination-CurrentPage",
    "X-Pagination-PageSize",
    "X-Pagination-HasPrevious",
    "X-Pagination-HasNext",
)


def pagination_headers(result: PagedResult[Any]) -> dict[str, str]:
    values = (
        result.total_count,
        result.total_pages,
        result.page,
        result.page_size,
        result.has_previous,
        result.has_next,
    )
    # Booleans render as "True"/"False"
    return {name: str(value) for name, value in zip(PAGINATION_HEADERS, values)}


@router.post("/users", status_code=status.HTTP_201_CREATED, responses=_ERRORS)
async def create_user(
    body: CreateUserRequest,
    session: AsyncSession = Depends(get_db_session),
    service: UserService = Depends(get_user_service),
) -> UserCreatedResponse:
    user = await service.create_user(session, body)
    return UserCreatedResponse(message="User created successfully", user_id=user.id)


@router.get("/users", responses=_ERRORS)
async def list_users(
    response: Response,
    criteria: UserQueryCriteria = Depends(get_user_query_criteria),
    session: AsyncSession = Depends(get_db_session),
    service: UserService = Depends(get_user_service),
) -> PagedResponse[UserSummary]:
    """Return paged, filtered, sorted user summaries.

    Pagination metadata is repeated in the X-Pagination-* headers.
    """
    result = await service.list_users(session, criteria)
    response.headers.update(pagination_headers(result))
    return PagedResponse[UserSummary].from_result(result)


@router.get("/users/all")
async def list_all_users(
    session: AsyncSession = Depends(get_db_session),
    service: UserService = Depends(get_user_service),
) -> list[UserResponse]:
    users = await service.list_all_users(session)
    return [UserResponse.model_validate(u) for u in users]


@router.post("/users/validate", responses={401: {"model": ErrorResponse}})
async def validate_credentials(
    body: LoginRequest,
    session: AsyncSession = Depends(get_db_session),
    service: UserService = Depends(get_user_service),
) -> CredentialsValidResponse:
    user = await service.validate_credentials(session, body.email, body.password)
    return CredentialsValidResponse(message="Valid credentials", user_id=user.id)


@router.get("/users/{user_id}", responses=_ERRORS)
async def get_user(
    user_id: UUID,
    session: AsyncSession = Depends(get_db_session),
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    user = await service.get_user(session, user_id)
    return UserResponse.model_validate(user)


@router.put("/users/{user_id}", responses=_ERRORS)
async def update_user(
    user_id: UUID,
    body: UpdateUserRequest,
    session: AsyncSession = Depends(get_db_session),
    service: UserService = Depends(get_user_service),
) -> MessageResponse:
    await service.update_user(session, user_id, body)
    return MessageResponse(message="User updated successfully")


@router.delete("/users/{user_id}", responses=_ERRORS)
async def delete_user(
    user_id: UUID,
    session: AsyncSession = Depends(get_db_session),
    service: UserService = Depends(get_user_service),
) -> MessageResponse:
    await service.delete_user(session, user_id)
    return MessageResponse(message="User deleted successfully")

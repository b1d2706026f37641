from __future__ import annotations

from collections.abc import AsyncGenerator
from datetime import date, datetime

from fastapi import Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from usermanagement.query.criteria import UserQueryCriteria
from usermanagement.services.user import UserService


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Yield a request-scoped session; roll back if the request fails."""
    session_factory = request.app.state.session_factory
    async with session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


def get_user_service(request: Request) -> UserService:
    return request.app.state.user_service


def get_user_query_criteria(
    request: Request,
    page: int = Query(1),
    page_size: int | None = Query(None, alias="pageSize"),
    search_term: str | None = Query(None, alias="searchTerm"),
    first_name: str | None = Query(None, alias="firstName"),
    last_name: str | None = Query(None, alias="lastName"),
    email: str | None = Query(None),
    phone_number: str | None = Query(None, alias="phoneNumber"),
    gender: str | None = Query(None),
    role_name: str | None = Query(None, alias="roleName"),
    date_of_birth_from: date | None = Query(None, alias="dateOfBirthFrom"),
    date_of_birth_to: date | None = Query(None, alias="dateOfBirthTo"),
    created_from: datetime | None = Query(None, alias="createdFrom"),
    created_to: datetime | None = Query(None, alias="createdTo"),
    sort_by: str | None = Query(None, alias="sortBy"),
    sort_direction: str | None = Query(None, alias="sortDirection"),
) -> UserQueryCriteria:
    """Build listing criteria from query parameters, clamped to configured limits."""
    pagination = request.app.state.settings.pagination
    return UserQueryCriteria.model_validate(
        {
            "page": page,
            "page_size": pagination.default_page_size if page_size is None else page_size,
            "search_term": search_term,
            "first_name": first_name,
            "last_name": last_name,
            "email": email,
            "phone_number": phone_number,
            "gender": gender,
            "role_name": role_name,
            "date_of_birth_from": date_of_birth_from,
            "date_of_birth_to": date_of_birth_to,
            "created_from": created_from,
            "created_to": created_to,
            "sort_by": sort_by,
            "sort_direction": sort_direction,
        },
        context={"max_page_size": pagination.max_page_size},
    )

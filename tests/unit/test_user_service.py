"""Unit tests for UserService with mocked repositories."""

from __future__ import annotations

from datetime import date
from unittest.mock import AsyncMock, patch
from uuid import uuid4

import pytest

from usermanagement.core.exceptions import ConflictError, NotFoundError, UnauthorizedError
from usermanagement.core.security import PasswordHasher
from usermanagement.query.criteria import UserQueryCriteria
from usermanagement.query.source import InMemoryRecordSource
from usermanagement.schemas.user import CreateUserRequest, UpdateUserRequest, UserSummary
from usermanagement.services.user import INVALID_CREDENTIALS, UserService

from tests.factories import RoleFactory, UserFactory


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=4)


@pytest.fixture
def service(hasher):
    return UserService(hasher)


@pytest.fixture
def session():
    return AsyncMock()


def _create_request(**overrides) -> CreateUserRequest:
    data = {
        "firstName": "Ada",
        "lastName": "Lovelace",
        "dateOfBirth": "1990-12-10",
        "gender": "Female",
        "emailAddress": "ada@example.com",
        "password": "analytical-engine",
        "roleId": str(uuid4()),
    }
    data.update(overrides)
    return CreateUserRequest.model_validate(data)


# ────────────────────────────────────────────────────────────────────
# create_user
# ────────────────────────────────────────────────────────────────────


@patch("usermanagement.services.user.RoleRepository")
@patch("usermanagement.services.user.UserRepository")
async def test_create_user_hashes_password_and_commits(MockUserRepo, MockRoleRepo, service, session, hasher):
    role = RoleFactory(role_name="User")
    MockUserRepo.email_in_use = AsyncMock(return_value=False)
    MockRoleRepo.get_by_id = AsyncMock(return_value=role)
    MockUserRepo.create = AsyncMock(side_effect=lambda s, **kw: UserFactory(role=kw["role"]))

    request = _create_request()
    await service.create_user(session, request)

    kwargs = MockUserRepo.create.call_args.kwargs
    assert kwargs["role"] is role
    assert kwargs["email_address"] == "ada@example.com"
    assert kwargs["password_hash"] != request.password
    assert hasher.verify(request.password, kwargs["password_hash"])
    session.commit.assert_awaited_once()


@patch("usermanagement.services.user.RoleRepository")
@patch("usermanagement.services.user.UserRepository")
async def test_create_user_duplicate_email_is_conflict(MockUserRepo, MockRoleRepo, service, session):
    MockUserRepo.email_in_use = AsyncMock(return_value=True)
    MockUserRepo.create = AsyncMock()
    MockRoleRepo.get_by_id = AsyncMock()

    with pytest.raises(ConflictError) as info:
        await service.create_user(session, _create_request())

    assert info.value.status_code == 409
    MockUserRepo.create.assert_not_awaited()
    session.commit.assert_not_awaited()


@patch("usermanagement.services.user.RoleRepository")
@patch("usermanagement.services.user.UserRepository")
async def test_create_user_unknown_role_is_not_found(MockUserRepo, MockRoleRepo, service, session):
    MockUserRepo.email_in_use = AsyncMock(return_value=False)
    MockUserRepo.create = AsyncMock()
    MockRoleRepo.get_by_id = AsyncMock(return_value=None)

    request = _create_request()
    with pytest.raises(NotFoundError) as info:
        await service.create_user(session, request)

    assert info.value.message == f"Role with ID '{request.role_id}' was not found."
    MockUserRepo.create.assert_not_awaited()


# ────────────────────────────────────────────────────────────────────
# reads, update, delete
# ────────────────────────────────────────────────────────────────────


@patch("usermanagement.services.user.UserRepository")
async def test_get_user_not_found(MockUserRepo, service, session):
    MockUserRepo.get_by_id = AsyncMock(return_value=None)
    user_id = uuid4()

    with pytest.raises(NotFoundError) as info:
        await service.get_user(session, user_id)

    assert info.value.message == f"User with ID '{user_id}' was not found."


@patch("usermanagement.services.user.UserRepository")
async def test_get_user_by_email_not_found(MockUserRepo, service, session):
    MockUserRepo.get_by_email = AsyncMock(return_value=None)

    with pytest.raises(NotFoundError) as info:
        await service.get_user_by_email(session, "ghost@example.com")

    assert info.value.message == "User with email 'ghost@example.com' was not found."


@patch("usermanagement.services.user.UserRepository")
async def test_update_user_email_taken_is_conflict(MockUserRepo, service, session):
    user = UserFactory(email_address="old@example.com")
    MockUserRepo.get_by_id = AsyncMock(return_value=user)
    MockUserRepo.email_in_use = AsyncMock(return_value=True)
    MockUserRepo.update = AsyncMock()

    request = UpdateUserRequest.model_validate(
        {
            "firstName": "A",
            "lastName": "B",
            "dateOfBirth": "1990-01-01",
            "gender": "Male",
            "emailAddress": "taken@example.com",
        }
    )
    with pytest.raises(ConflictError):
        await service.update_user(session, user.id, request)

    MockUserRepo.email_in_use.assert_awaited_once_with(session, "taken@example.com", exclude_id=user.id)
    MockUserRepo.update.assert_not_awaited()


@patch("usermanagement.services.user.UserRepository")
async def test_update_user_same_email_skips_check(MockUserRepo, service, session):
    user = UserFactory(email_address="same@example.com")
    MockUserRepo.get_by_id = AsyncMock(return_value=user)
    MockUserRepo.email_in_use = AsyncMock()
    MockUserRepo.update = AsyncMock(return_value=user)

    request = UpdateUserRequest.model_validate(
        {
            "firstName": "New",
            "lastName": "Name",
            "dateOfBirth": "1990-01-01",
            "gender": "Male",
            "emailAddress": "same@example.com",
        }
    )
    await service.update_user(session, user.id, request)

    MockUserRepo.email_in_use.assert_not_awaited()
    fields = MockUserRepo.update.call_args.kwargs
    assert fields["first_name"] == "New"
    assert fields["date_of_birth"] == date(1990, 1, 1)
    session.commit.assert_awaited_once()


@patch("usermanagement.services.user.UserRepository")
async def test_update_user_recased_email_skips_check(MockUserRepo, service, session):
    user = UserFactory(email_address="same@example.com")
    MockUserRepo.get_by_id = AsyncMock(return_value=user)
    MockUserRepo.email_in_use = AsyncMock(return_value=True)
    MockUserRepo.update = AsyncMock(return_value=user)

    request = UpdateUserRequest.model_validate(
        {
            "firstName": "Same",
            "lastName": "Person",
            "dateOfBirth": "1990-01-01",
            "gender": "Female",
            "emailAddress": "Same@Example.com",
        }
    )
    await service.update_user(session, user.id, request)

    MockUserRepo.email_in_use.assert_not_awaited()
    MockUserRepo.update.assert_awaited_once()


@patch("usermanagement.services.user.UserRepository")
async def test_delete_user(MockUserRepo, service, session):
    user = UserFactory()
    MockUserRepo.get_by_id = AsyncMock(return_value=user)
    MockUserRepo.delete = AsyncMock()

    await service.delete_user(session, user.id)

    MockUserRepo.delete.assert_awaited_once_with(session, user)
    session.commit.assert_awaited_once()


async def test_list_users_maps_to_summaries(service, session):
    users = [UserFactory(first_name="Zed", middle_name="Q", last_name="Ray", role_name="Admin")]

    result = await service.list_users(
        session, UserQueryCriteria(), source=InMemoryRecordSource(users)
    )

    [summary] = result.items
    assert isinstance(summary, UserSummary)
    assert summary.full_name == "Zed Q Ray"
    assert summary.role_name == "Admin"
    assert result.total_count == 1


# ────────────────────────────────────────────────────────────────────
# validate_credentials
# ────────────────────────────────────────────────────────────────────


@patch("usermanagement.services.user.UserRepository")
async def test_valid_credentials_return_user(MockUserRepo, service, session, hasher):
    user = UserFactory(password_hash=hasher.hash("right-password"))
    MockUserRepo.get_by_email = AsyncMock(return_value=user)

    assert await service.validate_credentials(session, user.email_address, "right-password") is user


@patch("usermanagement.services.user.UserRepository")
async def test_wrong_password_and_unknown_email_look_identical(MockUserRepo, service, session, hasher):
    user = UserFactory(password_hash=hasher.hash("right-password"))

    MockUserRepo.get_by_email = AsyncMock(return_value=user)
    with pytest.raises(UnauthorizedError) as wrong_password:
        await service.validate_credentials(session, user.email_address, "wrong-password")

    MockUserRepo.get_by_email = AsyncMock(return_value=None)
    with pytest.raises(UnauthorizedError) as unknown_email:
        await service.validate_credentials(session, "nobody@example.com", "whatever")

    assert wrong_password.value.message == unknown_email.value.message == INVALID_CREDENTIALS
    assert wrong_password.value.status_code == unknown_email.value.status_code == 401

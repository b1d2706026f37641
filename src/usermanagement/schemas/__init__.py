from usermanagement.schemas.common import (
    CamelModel,
    ErrorResponse,
    MessageResponse,
    PagedResponse,
    ValidationErrorItem,
)
from usermanagement.schemas.role import RoleCreatedResponse, RoleRequest, RoleResponse
from usermanagement.schemas.user import (
    CreateUserRequest,
    CredentialsValidResponse,
    LoginRequest,
    UpdateUserRequest,
    UserCreatedResponse,
    UserResponse,
    UserSummary,
)

__all__ = [
    "CamelModel",
    "CreateUserRequest",
    "CredentialsValidResponse",
    "ErrorResponse",
    "LoginRequest",
    "MessageResponse",
    "PagedResponse",
    "RoleCreatedResponse",
    "RoleRequest",
    "RoleResponse",
    "UpdateUserRequest",
    "UserCreatedResponse",
    "UserResponse",
    "UserSummary",
    "ValidationErrorItem",
]

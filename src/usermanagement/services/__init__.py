from usermanagement.services.role import RoleService
from usermanagement.services.user import INVALID_CREDENTIALS, UserService

__all__ = [
    "INVALID_CREDENTIALS",
    "RoleService",
    "UserService",
]

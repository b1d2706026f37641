from usermanagement.repositories.role import RoleRepository
from usermanagement.repositories.user import SqlUserRecordSource, UserRepository

__all__ = [
    "RoleRepository",
    "SqlUserRecordSource",
    "UserRepository",
]

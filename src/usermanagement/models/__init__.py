from usermanagement.models.base import Base, TimestampMixin, UpdatedAtMixin
from usermanagement.models.role import Role
from usermanagement.models.user import User, UserRole

__all__ = [
    "Base",
    "TimestampMixin",
    "UpdatedAtMixin",
    "Role",
    "User",
    "UserRole",
]

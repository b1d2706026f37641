from __future__ import annotations

from datetime import date, datetime
from uuid import UUID, uuid4

from sqlalchemy import Date, ForeignKey, Index, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from usermanagement.models.base import Base, TimestampMixin, UpdatedAtMixin, utcnow
from usermanagement.models.role import Role


class User(TimestampMixin, UpdatedAtMixin, Base):
    __tablename__ = "user_account"

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    middle_name: Mapped[str] = mapped_column(String(100), default="", server_default="", nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    date_of_birth: Mapped[date] = mapped_column(Date, nullable=False)
    gender: Mapped[str] = mapped_column(String(20), nullable=False)
    email_address: Mapped[str] = mapped_column(String(255), nullable=False)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    phone_number: Mapped[str] = mapped_column(String(20), default="", server_default="", nullable=False)

    # Relationships
    role_links: Mapped[list[UserRole]] = relationship(
        back_populates="user",
        lazy="selectin",
        cascade="all, delete-orphan",
        order_by="UserRole.assigned_at",
    )

    @property
    def role_names(self) -> tuple[str, ...]:
        """Names of the assigned roles, earliest assignment first."""
        return tuple(link.role.role_name for link in self.role_links if link.role is not None)

    @property
    def role_name(self) -> str:
        names = self.role_names
        return names[0] if names else ""


# Email identity is case-insensitive; the stored value keeps its casing.
Index("uq_user_account_email_address_lower", func.lower(User.email_address), unique=True)


class UserRole(Base):
    __tablename__ = "user_role"

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("user_account.id", ondelete="CASCADE"), primary_key=True
    )
    role_id: Mapped[UUID] = mapped_column(ForeignKey("role.id"), primary_key=True)
    assigned_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)

    # Relationships
    user: Mapped[User] = relationship(back_populates="role_links")
    role: Mapped[Role] = relationship(lazy="selectin")

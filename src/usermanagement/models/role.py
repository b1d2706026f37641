from __future__ import annotations

from uuid import UUID, uuid4

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from usermanagement.models.base import Base, TimestampMixin, UpdatedAtMixin


class Role(TimestampMixin, UpdatedAtMixin, Base):
    __tablename__ = "role"

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    role_name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)


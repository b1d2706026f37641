from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import Field

from usermanagement.schemas.common import CamelModel, MessageResponse


class RoleRequest(CamelModel):
    role_name: str = Field(min_length=1, max_length=100)


class RoleResponse(CamelModel):
    id: UUID
    role_name: str
    created_at: datetime
    updated_at: datetime


class RoleCreatedResponse(MessageResponse):
    role_id: UUID

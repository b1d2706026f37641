from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from usermanagement.api.dependencies import get_db_session
from usermanagement.core.logging import get_logger

router = APIRouter(tags=["health"])

log = get_logger(__name__)


@router.get("/health")
async def health_check(
    session: AsyncSession = Depends(get_db_session),
) -> dict[str, Any]:
    """Return application health status including database connectivity."""
    try:
        await session.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError):
        log.warning("health_database_unreachable", exc_info=True)
        return {"status": "degraded", "database": "disconnected"}

    return {"status": "ok", "database": "connected"}

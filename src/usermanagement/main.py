from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from usermanagement.api.errors import TRACE_HEADER, register_exception_handlers
from usermanagement.api.middleware import ExceptionBoundaryMiddleware
from usermanagement.api.routes.health import router as health_router
from usermanagement.api.routes.roles import router as roles_router
from usermanagement.api.routes.users import PAGINATION_HEADERS
from usermanagement.api.routes.users import router as users_router
from usermanagement.config import Settings
from usermanagement.core.logging import get_logger, setup_logging
from usermanagement.core.security import PasswordHasher
from usermanagement.database import create_session_factory, get_async_engine
from usermanagement.services.user import UserService

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage application startup and shutdown."""
    settings: Settings = app.state.settings

    engine = get_async_engine(settings)
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)

    logger.info("application_started", environment=settings.environment)
    yield

    await engine.dispose()
    logger.info("application_stopped")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    if settings is None:
        settings = Settings.from_yaml()
    setup_logging(settings.log_level, json_output=True if settings.is_production else None)

    app = FastAPI(title="User Management", version="0.1.0", lifespan=lifespan)

    app.state.settings = settings
    app.state.error_diagnostics = not settings.is_production
    app.state.user_service = UserService(PasswordHasher(settings.security.bcrypt_rounds))

    # Registered first so it sits inside CORS and error responses still get CORS headers
    app.add_middleware(ExceptionBoundaryMiddleware)

    # CORS
    origins = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]
    if settings.frontend_url not in origins:
        origins.append(settings.frontend_url)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[TRACE_HEADER, *PAGINATION_HEADERS],
    )

    register_exception_handlers(app)

    # Routes
    app.include_router(health_router, prefix="/api")
    app.include_router(users_router, prefix="/api")
    app.include_router(roles_router, prefix="/api")

    return app


app = create_app()

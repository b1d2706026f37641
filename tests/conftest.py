import pytest

from usermanagement.config import Settings

# Re-export factories for easy access in all tests
from tests.factories import RoleFactory, UserFactory  # noqa: F401


@pytest.fixture
def settings() -> Settings:
    """Provide default Settings instance for tests."""
    return Settings()


@pytest.fixture
def async_engine(settings):
    """Create an async SQLAlchemy engine. Skip if PostgreSQL is unavailable."""
    pytest.importorskip("asyncpg")

    from sqlalchemy.ext.asyncio import create_async_engine

    engine = create_async_engine(settings.database_url_async, echo=False)

    yield engine


@pytest.fixture
async def db_tables(async_engine):
    """Create all tables before tests, drop them after.

    Uses Base.metadata directly, no Alembic needed in tests.
    """
    from sqlalchemy import text
    from usermanagement.models import Base

    try:
        async with async_engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception:
        await async_engine.dispose()
        pytest.skip("PostgreSQL not available")

    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield

    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await async_engine.dispose()


@pytest.fixture
async def async_session(async_engine, db_tables):
    """Create an async session for DB tests. Skip if PostgreSQL is unavailable."""
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    session_factory = async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def sample_role(async_session):
    """Insert and return the "User" role."""
    from usermanagement.repositories import RoleRepository

    return await RoleRepository.create(async_session, role_name="User")


@pytest.fixture
async def admin_role(async_session):
    from usermanagement.repositories import RoleRepository

    return await RoleRepository.create(async_session, role_name="Admin")

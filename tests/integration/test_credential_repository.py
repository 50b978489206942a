"""Integration tests for CredentialRepositorySQLAlchemy with SQLite."""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy import inspect
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from sentinel_auth.domain import EmailAlreadyExistsError
from sentinel_auth.infrastructure.persistence.sqlalchemy import (
    CredentialRepositorySQLAlchemy,
    create_engine,
    create_session_maker,
    create_tables,
    drop_tables,
)
from sentinel_config import Settings
from tests.shared.repository_contract import (
    CredentialRepositoryContract,
    make_record,
)


@pytest.fixture
async def engine():
    """Create an in-memory SQLite engine with the auth schema."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
    )
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
async def session(engine):
    """Create an in-memory SQLite session for testing."""
    session_maker = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with session_maker() as session:
        yield session


@pytest.fixture
def repo(session):
    """Create CredentialRepository instance."""
    return CredentialRepositorySQLAlchemy(session)


class TestCredentialRepositorySQLAlchemy(CredentialRepositoryContract):
    """Runs the shared repository behaviour against SQLite."""

    @pytest.mark.asyncio
    async def test_datetimes_come_back_timezone_aware(self, repo):
        """SQLite drops tzinfo; the repository restores UTC."""
        record = make_record()
        await repo.add(record)

        found = await repo.find_by_id(record.id)

        assert found.created_at.tzinfo is not None
        assert found.updated_at.tzinfo is not None

    @pytest.mark.asyncio
    async def test_committed_changes_visible_to_new_session(
        self,
        engine,
        repo,
        session,
    ):
        """Flushed and committed writes are seen by another session."""
        record = make_record()
        await repo.add(record)
        await session.commit()

        session_maker = async_sessionmaker(engine, expire_on_commit=False)
        async with session_maker() as other_session:
            other_repo = CredentialRepositorySQLAlchemy(other_session)
            found = await other_repo.find_by_email(record.email)

        assert found is not None
        assert found.id == record.id

    @pytest.mark.asyncio
    async def test_lost_email_race_keeps_pending_work(self, repo, session):
        """A duplicate insert only undoes itself; uncommitted adds survive."""
        await repo.add(make_record(email="alice@example.com"))
        await session.commit()
        bob = make_record(email="bob@example.com")
        await repo.add(bob)

        # Another writer registered alice between the check and the insert
        repo.find_by_email = AsyncMock(return_value=None)
        with pytest.raises(EmailAlreadyExistsError):
            await repo.add(make_record(email="alice@example.com"))

        del repo.find_by_email
        found = await repo.find_by_id(bob.id)
        assert found is not None
        assert found.email == "bob@example.com"
        assert await repo.find_by_email("alice@example.com") is not None


class TestSchema:
    """Tests for table creation helpers."""

    @pytest.mark.asyncio
    async def test_create_tables_is_idempotent(self, engine):
        """Running create_tables twice is harmless."""
        await create_tables(engine)

        async with engine.connect() as conn:
            tables = await conn.run_sync(
                lambda sync_conn: inspect(sync_conn).get_table_names(),
            )

        assert "auth_users" in tables

    @pytest.mark.asyncio
    async def test_drop_tables(self, engine):
        """drop_tables removes the auth schema."""
        await drop_tables(engine)

        async with engine.connect() as conn:
            tables = await conn.run_sync(
                lambda sync_conn: inspect(sync_conn).get_table_names(),
            )

        assert "auth_users" not in tables


class TestDatabaseFromSettings:
    """Tests for building the engine and sessions from Settings."""

    @pytest.mark.asyncio
    async def test_engine_follows_settings(self):
        """database_url picks the backend and debug turns on SQL echo."""
        settings = Settings(
            jwt_secret_key="test-secret-key-that-is-long-enough-0123",
            database_url="sqlite+aiosqlite:///:memory:",
            debug=True,
        )
        engine = create_engine(settings)
        try:
            assert engine.echo is True
            assert engine.url.drivername == "sqlite+aiosqlite"

            await create_tables(engine)
            async with create_session_maker(engine)() as session:
                repo = CredentialRepositorySQLAlchemy(session)
                record = make_record()
                await repo.add(record)
                await session.commit()

                found = await repo.find_by_id(record.id)
        finally:
            await engine.dispose()

        assert found is not None
        assert found.id == record.id

    def test_debug_off_by_default(self):
        """SQL echo stays off unless debug is set."""
        settings = Settings(
            jwt_secret_key="test-secret-key-that-is-long-enough-0123",
            database_url="sqlite+aiosqlite:///:memory:",
        )
        engine = create_engine(settings)

        assert engine.echo is False

"""Schema management for the auth tables.

Production deployments are expected to use migrations against
``AuthBase.metadata``; these helpers cover tests and local setups.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncEngine

# Registers CredentialRecordModel on AuthBase.metadata
import sentinel_auth.infrastructure.persistence.sqlalchemy.models  # noqa: F401
from sentinel_auth.infrastructure.persistence.sqlalchemy.base import AuthBase

logger = logging.getLogger(__name__)


async def create_tables(engine: AsyncEngine) -> None:
    """Create missing auth tables and indexes. Existing tables are left alone."""
    async with engine.begin() as conn:
        await conn.run_sync(AuthBase.metadata.create_all)
    logger.info("Auth tables ready: %s", ", ".join(AuthBase.metadata.tables))


async def drop_tables(engine: AsyncEngine) -> None:
    """Drop every auth table, data included."""
    logger.warning("Dropping auth tables: %s", ", ".join(AuthBase.metadata.tables))
    async with engine.begin() as conn:
        await conn.run_sync(AuthBase.metadata.drop_all)

"""SQLAlchemy implementation for sentinel_auth persistence.

Provides:
- AuthBase: Declarative base for auth models
- CredentialRecordModel: SQLAlchemy model for the auth_users table
- CredentialRepositorySQLAlchemy: Repository implementation
- create_tables / drop_tables: schema helpers
- create_engine / create_session_maker: engine and sessions from Settings

Examples
--------
# In your Alembic env.py or migration setup:
from sentinel_auth.infrastructure.persistence.sqlalchemy import AuthBase
target_metadata = AuthBase.metadata
"""

from sentinel_auth.infrastructure.persistence.sqlalchemy.base import AuthBase
from sentinel_auth.infrastructure.persistence.sqlalchemy.database import (
    create_engine,
    create_session_maker,
)
from sentinel_auth.infrastructure.persistence.sqlalchemy.init_db import (
    create_tables,
    drop_tables,
)
from sentinel_auth.infrastructure.persistence.sqlalchemy.models import (
    CredentialRecordModel,
)
from sentinel_auth.infrastructure.persistence.sqlalchemy.repositories import (
    CredentialRepositorySQLAlchemy,
)

__all__ = [
    "AuthBase",
    "CredentialRecordModel",
    "CredentialRepositorySQLAlchemy",
    "create_engine",
    "create_session_maker",
    "create_tables",
    "drop_tables",
]

"""Repository interfaces for sentinel_auth.

The actual implementations live in sentinel_auth.infrastructure.persistence.
"""

from sentinel_auth.repositories.credential_repository import (
    CredentialRepository,
    RepositoryError,
    StaleRecordError,
)

__all__ = ["CredentialRepository", "RepositoryError", "StaleRecordError"]

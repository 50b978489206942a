from sentinel_auth.infrastructure.persistence.sqlalchemy.repositories.credential_repository import (
    CredentialRepositorySQLAlchemy,
)

__all__ = ["CredentialRepositorySQLAlchemy"]

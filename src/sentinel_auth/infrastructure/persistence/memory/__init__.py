from sentinel_auth.infrastructure.persistence.memory.credential_repository import (
    InMemoryCredentialRepository,
)

__all__ = ["InMemoryCredentialRepository"]

"""Abstract repository interface for credential records.

This interface defines the contract for credential persistence.
Implementations can use SQLAlchemy, an in-memory dict, or any other
storage, as long as ``update`` is an atomic compare-and-update on the
record's version.
"""

from abc import ABC, abstractmethod
from uuid import UUID

from sentinel_auth.domain.credential import CredentialRecord


class RepositoryError(Exception):
    """Raised by implementations when the underlying storage fails."""


class StaleRecordError(RepositoryError):
    """Raised when a conditional update loses against a concurrent writer."""

    def __init__(self, record_id: UUID, expected_version: int) -> None:
        self.record_id = record_id
        self.expected_version = expected_version
        super().__init__(
            f"Credential record {record_id} changed since version {expected_version}",
        )


class CredentialRepository(ABC):
    """
    Abstract repository interface for credential records.

    Lookups return detached copies; mutations only become visible through
    ``update``. Emails are compared in their normalized form.
    """

    @abstractmethod
    async def add(self, record: CredentialRecord) -> CredentialRecord:
        """
        Insert a new record.

        Raises
        ------
        EmailAlreadyExistsError
            If a record with the same email exists
        """

    @abstractmethod
    async def find_by_id(self, record_id: UUID) -> CredentialRecord | None:
        """Find a record by its identifier."""

    @abstractmethod
    async def find_by_email(self, email: str) -> CredentialRecord | None:
        """Find a record by its (normalized) email."""

    @abstractmethod
    async def find_by_verification_token_hash(
        self,
        token_hash: str,
    ) -> CredentialRecord | None:
        """Find the record holding the given verification token digest."""

    @abstractmethod
    async def find_by_reset_token_hash(self, token_hash: str) -> CredentialRecord | None:
        """Find the record holding the given reset token digest."""

    @abstractmethod
    async def update(self, record: CredentialRecord) -> CredentialRecord:
        """
        Persist all mutable fields if the stored version equals ``record.version``.

        Returns
        -------
        The stored record carrying the incremented version

        Raises
        ------
        StaleRecordError
            If the stored version differs (or the record vanished)
        """

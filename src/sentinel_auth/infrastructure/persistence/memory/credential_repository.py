"""In-memory implementation of CredentialRepository.

Every method body runs without awaiting, so each call is atomic with
respect to other coroutines on the same event loop. Records are copied on
the way in and out; callers never share state with the store.
"""

import copy
import logging
from uuid import UUID

from sentinel_auth.domain.credential import (
    CredentialRecord,
    EmailAlreadyExistsError,
    normalize_email,
)
from sentinel_auth.repositories import CredentialRepository, StaleRecordError

logger = logging.getLogger(__name__)


class InMemoryCredentialRepository(CredentialRepository):
    def __init__(self) -> None:
        self._records: dict[UUID, CredentialRecord] = {}
        self._ids_by_email: dict[str, UUID] = {}

    async def add(self, record: CredentialRecord) -> CredentialRecord:
        if record.email in self._ids_by_email:
            raise EmailAlreadyExistsError(record.email)

        stored = record.with_version(0)
        self._records[record.id] = stored
        self._ids_by_email[record.email] = record.id
        logger.debug("Created credential record: %s", record.id)
        return copy.copy(stored)

    async def find_by_id(self, record_id: UUID) -> CredentialRecord | None:
        return self._copy_or_none(self._records.get(record_id))

    async def find_by_email(self, email: str) -> CredentialRecord | None:
        record_id = self._ids_by_email.get(normalize_email(email))
        if record_id is None:
            return None
        return self._copy_or_none(self._records.get(record_id))

    async def find_by_verification_token_hash(
        self,
        token_hash: str,
    ) -> CredentialRecord | None:
        for record in self._records.values():
            if record.verification_token_hash == token_hash:
                return copy.copy(record)
        return None

    async def find_by_reset_token_hash(self, token_hash: str) -> CredentialRecord | None:
        for record in self._records.values():
            if record.reset_token_hash == token_hash:
                return copy.copy(record)
        return None

    async def update(self, record: CredentialRecord) -> CredentialRecord:
        current = self._records.get(record.id)
        if current is None or current.version != record.version:
            raise StaleRecordError(record.id, record.version)

        stored = record.with_version(record.version + 1)
        self._records[record.id] = stored
        return copy.copy(stored)

    def __len__(self) -> int:
        return len(self._records)

    @staticmethod
    def _copy_or_none(record: CredentialRecord | None) -> CredentialRecord | None:
        return copy.copy(record) if record is not None else None

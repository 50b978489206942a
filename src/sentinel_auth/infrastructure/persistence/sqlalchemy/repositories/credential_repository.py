"""SQLAlchemy implementation of CredentialRepository.

Mutations are issued as ``UPDATE ... WHERE id = :id AND version = :version``
so that two sessions racing on the same account cannot both win.
"""

import logging
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from sentinel_auth.domain.credential import (
    CredentialRecord,
    EmailAlreadyExistsError,
    normalize_email,
)
from sentinel_auth.domain.shared.clock import as_utc
from sentinel_auth.infrastructure.persistence.sqlalchemy.models import (
    CredentialRecordModel,
)
from sentinel_auth.repositories import (
    CredentialRepository,
    RepositoryError,
    StaleRecordError,
)

logger = logging.getLogger(__name__)


class CredentialRepositorySQLAlchemy(CredentialRepository):
    """SQLAlchemy implementation of CredentialRepository.

    The session's transaction is owned by the caller; this repository
    only flushes.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_record(self, model: CredentialRecordModel) -> CredentialRecord:
        return CredentialRecord(
            id=model.id,
            email=model.email,
            password_hash=model.password_hash,
            is_active=model.is_active,
            is_verified=model.is_verified,
            created_at=as_utc(model.created_at),
            updated_at=as_utc(model.updated_at),
            last_login=as_utc(model.last_login),
            failed_login_attempts=model.failed_login_attempts,
            locked_until=as_utc(model.locked_until),
            verification_token_hash=model.verification_token_hash,
            reset_token_hash=model.reset_token_hash,
            reset_token_expires=as_utc(model.reset_token_expires),
            version=model.version,
        )

    async def _find_one(self, *criteria) -> CredentialRecord | None:
        # populate_existing: always read the committed row, not a stale identity-map copy
        stmt = (
            select(CredentialRecordModel)
            .where(*criteria)
            .execution_options(populate_existing=True)
        )
        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as e:
            raise RepositoryError(str(e)) from e
        model = result.scalar_one_or_none()
        return self._to_record(model) if model else None

    async def add(self, record: CredentialRecord) -> CredentialRecord:
        if await self.find_by_email(record.email) is not None:
            raise EmailAlreadyExistsError(record.email)

        model = CredentialRecordModel(
            id=record.id,
            email=record.email,
            password_hash=record.password_hash,
            is_active=record.is_active,
            is_verified=record.is_verified,
            created_at=record.created_at,
            updated_at=record.updated_at,
            last_login=record.last_login,
            failed_login_attempts=record.failed_login_attempts,
            locked_until=record.locked_until,
            verification_token_hash=record.verification_token_hash,
            reset_token_hash=record.reset_token_hash,
            reset_token_expires=record.reset_token_expires,
            version=0,
        )
        try:
            # Savepoint: a lost race undoes this insert only, not the caller's work
            async with self._session.begin_nested():
                self._session.add(model)
                await self._session.flush()
        except IntegrityError as e:
            # Lost a registration race on the unique email index
            raise EmailAlreadyExistsError(record.email) from e
        except SQLAlchemyError as e:
            raise RepositoryError(str(e)) from e

        logger.info("Created credential record: %s", record.id)
        return record.with_version(0)

    async def find_by_id(self, record_id: UUID) -> CredentialRecord | None:
        return await self._find_one(CredentialRecordModel.id == record_id)

    async def find_by_email(self, email: str) -> CredentialRecord | None:
        return await self._find_one(
            CredentialRecordModel.email == normalize_email(email),
        )

    async def find_by_verification_token_hash(
        self,
        token_hash: str,
    ) -> CredentialRecord | None:
        return await self._find_one(
            CredentialRecordModel.verification_token_hash == token_hash,
        )

    async def find_by_reset_token_hash(self, token_hash: str) -> CredentialRecord | None:
        return await self._find_one(CredentialRecordModel.reset_token_hash == token_hash)

    async def update(self, record: CredentialRecord) -> CredentialRecord:
        new_version = record.version + 1
        stmt = (
            update(CredentialRecordModel)
            .where(
                CredentialRecordModel.id == record.id,
                CredentialRecordModel.version == record.version,
            )
            .values(
                password_hash=record.password_hash,
                is_active=record.is_active,
                is_verified=record.is_verified,
                updated_at=record.updated_at,
                last_login=record.last_login,
                failed_login_attempts=record.failed_login_attempts,
                locked_until=record.locked_until,
                verification_token_hash=record.verification_token_hash,
                reset_token_hash=record.reset_token_hash,
                reset_token_expires=record.reset_token_expires,
                version=new_version,
            )
            .execution_options(synchronize_session=False)
        )
        try:
            result = await self._session.execute(stmt)
            await self._session.flush()
        except SQLAlchemyError as e:
            raise RepositoryError(str(e)) from e

        if result.rowcount != 1:
            raise StaleRecordError(record.id, record.version)

        logger.debug("Updated credential record %s to version %d", record.id, new_version)
        return record.with_version(new_version)

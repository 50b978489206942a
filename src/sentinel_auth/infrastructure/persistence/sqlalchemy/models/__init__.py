from sentinel_auth.infrastructure.persistence.sqlalchemy.models.credential_record_model import (
    CredentialRecordModel,
)

__all__ = ["CredentialRecordModel"]

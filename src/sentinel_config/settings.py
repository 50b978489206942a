"""Process-wide settings.

Values come from OS environment variables first, then from the first
existing env file among:

- ``$SENTINEL_ENV_FILE`` (absolute, or relative to the project root)
- ``config/.env.dev``
- ``config/.env``

A missing or short ``JWT_SECRET_KEY`` makes ``Settings()`` raise, which is
meant to stop the process before it serves anything.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from functools import lru_cache
from pathlib import Path

from pydantic import Field, SecretStr, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

MIN_JWT_SECRET_BYTES = 32
ENV_FILE_VARIABLE = "SENTINEL_ENV_FILE"
_ROOT_MARKERS = ("pyproject.toml", ".git")


def get_project_root() -> Path:
    here = Path(__file__).resolve()
    for candidate in here.parents:
        if any((candidate / marker).exists() for marker in _ROOT_MARKERS):
            return candidate
    return Path.cwd()


def get_config_dir() -> Path:
    return get_project_root() / "config"


def _candidate_env_files() -> Iterator[Path]:
    explicit = os.environ.get(ENV_FILE_VARIABLE)
    if explicit:
        path = Path(explicit)
        yield path if path.is_absolute() else get_project_root() / path
    yield get_config_dir() / ".env.dev"
    yield get_config_dir() / ".env"


def find_env_file() -> Path | None:
    """Return the first env file that exists, or None."""
    return next((path for path in _candidate_env_files() if path.is_file()), None)


class Settings(BaseSettings):
    """Sentinel Auth configuration.

    Field names map to upper-case environment variables
    (``jwt_secret_key`` -> ``JWT_SECRET_KEY``).
    """

    model_config = SettingsConfigDict(
        env_file=find_env_file(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Required; no default on purpose
    jwt_secret_key: SecretStr

    app_name: str = "Sentinel Auth"
    debug: bool = False
    log_level: str = "INFO"

    database_url: str = "sqlite+aiosqlite:///./sentinel_auth.db"

    # Bearer tokens
    jwt_expiration_seconds: int = Field(default=3600, gt=0)

    # bcrypt work factor
    bcrypt_cost: int = Field(default=12, ge=4, le=31)

    # Brute-force lockout
    lockout_threshold: int = Field(default=5, ge=1)
    lockout_duration_minutes: int = Field(default=15, ge=1)

    reset_token_expiry_hours: int = Field(default=1, ge=1)

    # Outbound email
    smtp_enabled: bool = False
    smtp_host: str = ""
    smtp_port: int = 587
    smtp_user: str = ""
    smtp_password: SecretStr | None = None
    smtp_from_email: str = ""
    smtp_from_name: str = "Sentinel Auth"
    smtp_use_tls: bool = True
    smtp_starttls: bool = True

    # Base URL for links in verification and reset emails
    frontend_base_url: str = "http://localhost:5173"

    @field_validator("jwt_secret_key")
    @classmethod
    def _require_long_secret(cls, value: SecretStr) -> SecretStr:
        if len(value.get_secret_value().encode("utf-8")) < MIN_JWT_SECRET_BYTES:
            msg = f"JWT_SECRET_KEY must be at least {MIN_JWT_SECRET_BYTES} bytes long"
            raise ValueError(msg)
        return value

    @computed_field  # type: ignore[prop-decorator]
    @property
    def lockout_duration_seconds(self) -> int:
        return self.lockout_duration_minutes * 60


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings once per process."""
    return Settings()  # type: ignore[call-arg]


def clear_settings_cache() -> None:
    get_settings.cache_clear()

"""Root pytest configuration.

Test Structure:
    tests/
    ├── unit/              # Fast, isolated tests
    │   ├── domain/
    │   ├── services/
    │   ├── application/
    │   ├── infrastructure/
    │   └── config/
    ├── integration/       # SQLite (aiosqlite) backed store tests
    └── shared/            # Shared fakes
"""

import os
from pathlib import Path

import pytest
from dotenv import load_dotenv

from sentinel_config import clear_settings_cache

PROJECT_ROOT = Path(__file__).resolve().parents[1]

CONFIG_DIR = PROJECT_ROOT / "config"
if (CONFIG_DIR / ".env.dev").exists():
    load_dotenv(CONFIG_DIR / ".env.dev")

# Settings refuse to load without a signing secret
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-that-is-long-enough-0123")


@pytest.fixture(scope="session", autouse=True)
def configure_app_settings():
    """Ensure every test session starts from freshly loaded settings."""
    clear_settings_cache()
    yield
    clear_settings_cache()

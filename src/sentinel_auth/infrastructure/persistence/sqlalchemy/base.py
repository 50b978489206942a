"""SQLAlchemy declarative base for sentinel_auth models.

The consuming application should include AuthBase.metadata in its
migration configuration (or call ``create_tables``).
"""

from sqlalchemy.orm import DeclarativeBase


class AuthBase(DeclarativeBase):
    """Declarative base for sentinel_auth models."""

"""Persistence implementations for sentinel_auth.

Structure:
    persistence/
    ├── memory/         # Process-local store (tests, local development)
    └── sqlalchemy/     # SQLAlchemy/SQL database implementation
"""

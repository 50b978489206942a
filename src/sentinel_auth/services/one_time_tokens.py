"""Single-use tokens for email verification and password reset.

Raw tokens are handed to the notification sink only; records store the
SHA-256 digest, and presented tokens are hashed before lookup.
"""

import hashlib
import secrets

TOKEN_BYTES = 32


def generate_token() -> str:
    return secrets.token_urlsafe(TOKEN_BYTES)


def hash_token(raw_token: str) -> str:
    # surrogatepass: any presented string hashes, it just never matches
    return hashlib.sha256(raw_token.encode("utf-8", "surrogatepass")).hexdigest()

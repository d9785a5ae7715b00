"""Security utilities for password and refresh token handling."""

import hashlib
import secrets

from passlib.context import CryptContext

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

REFRESH_TOKEN_BYTES = 48


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against a hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def generate_refresh_token() -> str:
    """Create a new opaque refresh token secret."""
    return secrets.token_urlsafe(REFRESH_TOKEN_BYTES)


def hash_refresh_token(token: str) -> str:
    """
    Hash a refresh token for storage and lookup.

    A fast deterministic digest is enough here: the input is a random
    secret, not a user-chosen password.
    """
    return hashlib.sha256(token.encode("utf-8")).hexdigest()

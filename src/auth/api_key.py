"""API key generation, hashing and Authorization header parsing."""

import secrets

import bcrypt

from src.exceptions import AccessDeniedError


def generate_api_key() -> str:
    """Generate a random 64-character URL-safe API key."""
    return secrets.token_urlsafe(48)[:64]


def hash_api_key(api_key: str) -> str:
    """
    Hash an API key using bcrypt.

    Args:
        api_key: Plain text API key to hash

    Returns:
        Bcrypt hash of the API key
    """
    hashed = bcrypt.hashpw(api_key.encode("utf-8"), bcrypt.gensalt())
    return hashed.decode("utf-8")


def verify_api_key(api_key: str, key_hash: str) -> bool:
    """
    Verify an API key against its bcrypt hash.

    A stored hash that is not a valid bcrypt string never matches.
    """
    try:
        return bcrypt.checkpw(api_key.encode("utf-8"), key_hash.encode("utf-8"))
    except ValueError:
        return False


def extract_bearer_token(authorization: str | None) -> str:
    """
    Extract the API key from an ``Authorization: Bearer <key>`` value.

    Args:
        authorization: Authorization header value, None when absent

    Returns:
        The bearer token

    Raises:
        AccessDeniedError: If the header is missing or malformed
    """
    if not authorization:
        raise AccessDeniedError(
            details={"reason": "Missing Authorization header"}
        )

    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise AccessDeniedError(
            details={"reason": "Invalid Authorization header format"}
        )

    return parts[1]

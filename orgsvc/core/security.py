"""Principal tokens.

Authentication itself belongs to the platform's auth collaborator. This
service only verifies the bearer JWT it is handed and reads two claims from
it: ``sub`` (the principal name) and ``superuser``.
"""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import jwt
from jwt import exceptions as jwt_exceptions

from orgsvc.core.config import get_settings

settings = get_settings()


@dataclass(frozen=True)
class Principal:
    """An already-authenticated caller."""

    name: str
    is_superuser: bool = False


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    """Create a JWT access token.

    Args:
        data: Dictionary of claims to encode in the token
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT token string
    """
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(UTC) + expires_delta
    else:
        expire = datetime.now(UTC) + timedelta(minutes=settings.jwt_access_token_expire_minutes)
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def create_principal_token(name: str, *, superuser: bool = False) -> str:
    return create_access_token({"sub": name, "superuser": superuser})


def decode_token(token: str) -> dict | None:
    """Decode and validate a JWT token.

    Returns:
        Decoded claims, or None if the token is invalid or expired
    """
    try:
        return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except jwt_exceptions.PyJWTError:
        return None


def principal_from_claims(claims: dict) -> Principal | None:
    name = claims.get("sub")
    if not name or not isinstance(name, str):
        return None
    return Principal(name=name, is_superuser=claims.get("superuser") is True)

"""
Security utilities for the Crowdfund API.
Tokens are issued by the external identity provider; this service only verifies them.
"""
from datetime import datetime, timedelta
from typing import Optional

import jwt

from crowdfund.config import settings


def decode_token(token: str) -> Optional[dict]:
    """
    Decode and validate a JWT token.

    Returns:
        Decoded payload dict or None if invalid
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        return payload
    except jwt.ExpiredSignatureError:
        return None
    except jwt.InvalidTokenError:
        return None


def get_caller_id(token: str) -> Optional[int]:
    """Extract the verified caller id from an access token."""
    payload = decode_token(token)
    if not payload or payload.get("type", "access") != "access":
        return None
    user_id = payload.get("user_id")
    try:
        return int(user_id)
    except (TypeError, ValueError):
        return None


def create_access_token(user_id: int, expires_delta: Optional[timedelta] = None) -> str:
    """Create an access token. Used by local tooling and tests."""
    expire = datetime.utcnow() + (expires_delta or timedelta(minutes=30))
    to_encode = {
        "user_id": str(user_id),
        "type": "access",
        "exp": expire,
        "iat": datetime.utcnow(),
    }
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

from datetime import UTC, datetime, timedelta
from typing import Any, Dict, Iterable, Optional
from uuid import UUID

from jose import JWTError, jwt

from config import ApplicationConfig


def generate_jwt(
    user_id: UUID,
    username: Optional[str],
    roles: Iterable[str],
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Generate JWT access token

    Args:
        user_id: User UUID
        username: Login name (email by convention)
        roles: User roles
        expires_delta: Token lifetime, defaults to JWT_EXPIRES_DAYS

    Returns:
        JWT token string (HS256)
    """
    now = datetime.now(UTC)
    lifetime = expires_delta or timedelta(days=ApplicationConfig.JWT_EXPIRES_DAYS)
    payload = {
        "sub": str(user_id),
        "username": username,
        "roles": [str(r) for r in roles],
        "exp": now + lifetime,
        "iat": now,
    }
    return jwt.encode(payload, ApplicationConfig.JWT_SECRET, algorithm="HS256")


def verify_jwt(token: str) -> Optional[dict]:
    """
    Verify and decode JWT token

    Args:
        token: JWT token string

    Returns:
        Decoded payload dict or None if invalid
    """
    try:
        payload = jwt.decode(
            token, ApplicationConfig.JWT_SECRET, algorithms=["HS256"]
        )
        return payload
    except JWTError:
        return None


def normalize_token_payload(decoded: Any) -> Optional[Dict[str, Any]]:
    """
    Map both historical token shapes onto one identity structure.

    Old tokens nest identity under ``payload`` ({payload: {_id, username, roles}});
    current tokens are flat ({sub | uid | _id, username | email, roles}).

    Returns:
        {"user_id": str, "username": str | None, "roles": [lowercase str]},
        or None when no identity is present
    """
    if not isinstance(decoded, dict):
        return None

    nested = decoded.get("payload")
    source = nested if isinstance(nested, dict) else decoded

    user_id = source.get("sub") or source.get("uid") or source.get("_id")
    if not user_id:
        return None

    roles = source.get("roles")
    if not isinstance(roles, list):
        roles = []

    return {
        "user_id": str(user_id),
        "username": source.get("username") or source.get("email"),
        "roles": [str(r).lower() for r in roles],
    }

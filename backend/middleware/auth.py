"""
Bearer-token authentication helpers.

  - POST /auth/login verifies email + password and issues a short-lived
    HS256 JWT carrying the user's id and role (see routes/auth.py).
  - Protected endpoints read `Authorization: Bearer <jwt>` and turn it into
    a Principal. Absent header → anonymous; anything present but unusable
    (wrong scheme, bad signature, expired, unknown role) → 401.
"""
import logging
from datetime import datetime, timezone, timedelta
from fastapi import Header
from typing import Optional

import jwt

from config import settings
from domain.enums import Role
from domain.errors import UnauthenticatedError
from domain.policy import Principal

logger = logging.getLogger(__name__)

def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


def _parse_bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    parts = authorization.split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise UnauthenticatedError("Malformed Authorization header. Expected 'Bearer <token>'.")
    token = parts[1].strip()
    if not token:
        raise UnauthenticatedError("Empty bearer token.")
    return token


def _require_secret() -> str:
    if not settings.jwt_secret:
        # Misconfiguration, not a client error: surfaces as a generic 500.
        raise RuntimeError("Server auth misconfigured (JWT secret missing).")
    return settings.jwt_secret


def decode_access_token(token: str) -> dict:
    secret = _require_secret()
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=["HS256"],
            issuer=settings.jwt_issuer,
            options={"require": ["exp", "iat", "iss", "sub"]},
        )
        return payload
    except jwt.ExpiredSignatureError:
        raise UnauthenticatedError("Access token expired.")
    except jwt.InvalidTokenError:
        raise UnauthenticatedError("Invalid access token.")


def issue_access_token(*, user_id: int, username: str, role: str, ttl: Optional[timedelta] = None) -> str:
    secret = _require_secret()
    now = _now_utc()
    exp = now.replace(microsecond=0) + (ttl if ttl is not None else timedelta(minutes=settings.jwt_access_ttl_minutes))
    payload = {
        "iss": settings.jwt_issuer,
        "sub": username,
        "uid": user_id,
        "role": role,
        "iat": int(now.timestamp()),
        "exp": int(exp.timestamp()),
    }
    return jwt.encode(payload, secret, algorithm="HS256")


def principal_from_token(token: str) -> Principal:
    payload = decode_access_token(token)
    try:
        role = Role(payload.get("role"))
        user_id = int(payload["uid"])
    except (KeyError, TypeError, ValueError):
        logger.warning(f"Token for {payload.get('sub')} carries unusable claims")
        raise UnauthenticatedError("Invalid access token.")
    return Principal(user_id=user_id, username=payload["sub"], role=role)


async def get_optional_principal(
    authorization: Optional[str] = Header(None, alias="Authorization"),
) -> Optional[Principal]:
    """
    Resolve the caller:
      - no Authorization header → None (anonymous)
      - valid bearer token → Principal
      - anything else → UnauthenticatedError
    """
    token = _parse_bearer_token(authorization)
    if token is None:
        return None
    return principal_from_token(token)

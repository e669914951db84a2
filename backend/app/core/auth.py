"""Session tokens: HS256 JWTs carrying the signed-in user's claims."""

from __future__ import annotations

import logging
import time
from typing import Any

from fastapi import HTTPException, status
from jose import jwt
from jose.exceptions import ExpiredSignatureError, JWTError
from pydantic import ValidationError

from app.models.auth import SessionUser

logger = logging.getLogger("session_auth")

# Claim name → SessionUser attribute
_CLAIM_MAP: list[tuple[str, str]] = [
    ("sub", "id"),
    ("username", "username"),
    ("given_name", "first_name"),
    ("family_name", "last_name"),
    ("email", "email"),
    ("adm", "is_admin"),
    ("eid", "employee_id"),
    ("prv", "auth_provider"),
    ("position", "position"),
    ("department", "department"),
]


def _user_to_claims(user: SessionUser) -> dict[str, Any]:
    claims: dict[str, Any] = {}
    for claim, attr in _CLAIM_MAP:
        value = getattr(user, attr)
        if value is not None:
            claims[claim] = value.value if attr == "auth_provider" else value
    return claims


def _claims_to_user(claims: dict[str, Any]) -> SessionUser:
    data = {attr: claims[claim] for claim, attr in _CLAIM_MAP if claim in claims}
    impersonator = claims.get("imp")
    if isinstance(impersonator, dict):
        data["impersonator"] = _claims_to_user(impersonator)
    return SessionUser(**data)


def issue_session_token(
    user: SessionUser,
    secret_key: str,
    algorithm: str = "HS256",
    ttl_minutes: int = 480,
) -> str:
    if not secret_key:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Missing session secret configuration",
        )

    now = int(time.time())
    claims = _user_to_claims(user)
    if user.impersonator is not None:
        claims["imp"] = _user_to_claims(user.impersonator)
    claims["iat"] = now
    claims["exp"] = now + ttl_minutes * 60
    return jwt.encode(claims, secret_key, algorithm=algorithm)


def decode_session_token(token: str, secret_key: str, algorithm: str = "HS256") -> SessionUser:
    if not secret_key:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Missing session secret configuration",
        )

    try:
        claims = jwt.decode(
            token,
            secret_key,
            algorithms=[algorithm],
            options={"require_exp": True, "require_sub": True},
        )
    except ExpiredSignatureError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Session has expired",
        ) from e
    except JWTError as e:
        logger.info("Rejected session token: %s", e)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
        ) from e

    try:
        return _claims_to_user(claims)
    except ValidationError as e:
        logger.warning("Session token carried malformed claims: %s", e)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
        ) from e

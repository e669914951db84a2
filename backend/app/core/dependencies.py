from __future__ import annotations

import logging

from fastapi import Depends, Header, HTTPException, status

from app.core.auth import decode_session_token
from app.core.config import settings
from app.models.auth import SessionUser

logger = logging.getLogger(__name__)


async def get_current_user(authorization: str | None = Header(None)) -> SessionUser:
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token = authorization.split(" ", 1)[1]

    try:
        return decode_session_token(
            token,
            settings.SESSION_SECRET_KEY,
            settings.SESSION_ALGORITHM,
        )
    except HTTPException as e:
        if e.status_code == status.HTTP_401_UNAUTHORIZED:
            e.headers = {"WWW-Authenticate": "Bearer"}
        raise


async def require_admin(user: SessionUser = Depends(get_current_user)) -> SessionUser:
    if not user.is_admin:
        logger.info("Admin access denied for user=%s", user.id)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return user

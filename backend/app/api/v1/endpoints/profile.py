from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from app.core.dependencies import get_current_user
from app.models.auth import SessionUser
from app.models.profile import ProfileData
from app.services.employee_service import employee_service
from app.services.profile import NOT_FOUND, ProfileUnavailableError, load_profile

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("", response_model=ProfileData)
async def get_profile(
    employee_id: int | None = None,
    user: SessionUser = Depends(get_current_user),  # noqa: B008
):
    async def session_user() -> SessionUser:
        return user

    try:
        profile = await load_profile(session_user, employee_service.get_employee_by_id, employee_id)
    except ProfileUnavailableError as e:
        logger.error("Profile unavailable for user=%s: %s", user.id, e)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Profile unavailable: {e.source} lookup failed",
        ) from e

    if profile is NOT_FOUND:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Profile not found",
        )

    return profile

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from app.core.auth import issue_session_token
from app.core.config import settings
from app.core.dependencies import get_current_user, require_admin
from app.models.auth import SessionTokenResponse, SessionUser
from app.models.employee import Employee, NamedRef
from app.services.employee_service import employee_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def _session_for_employee(employee: Employee, impersonator: SessionUser) -> SessionUser:
    position = employee.position.name if isinstance(employee.position, NamedRef) else employee.position
    department = (
        employee.department.name if isinstance(employee.department, NamedRef) else employee.department
    )
    return SessionUser(
        id=f"employee:{employee.id}",
        username=employee.email or "",
        first_name=employee.first_name or "",
        last_name=employee.last_name or "",
        email=employee.email or "",
        is_admin=False,
        employee_id=employee.id,
        auth_provider=impersonator.auth_provider,
        position=position,
        department=department,
        impersonator=impersonator,
    )


def _token_response(user: SessionUser) -> SessionTokenResponse:
    token = issue_session_token(
        user,
        settings.SESSION_SECRET_KEY,
        settings.SESSION_ALGORITHM,
        settings.SESSION_TTL_MINUTES,
    )
    return SessionTokenResponse(access_token=token, user=user)


@router.get("/user", response_model=SessionUser)
async def current_user(user: SessionUser = Depends(get_current_user)):
    return user


@router.post("/impersonate/{employee_id}", response_model=SessionTokenResponse)
async def impersonate(
    employee_id: int,
    admin: SessionUser = Depends(require_admin),
):
    if admin.is_impersonating:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Already impersonating; stop impersonating first",
        )

    try:
        employee = await employee_service.get_employee_by_id(employee_id)
    except Exception as err:
        logger.exception("Failed to load employee %s for impersonation", employee_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve employee",
        ) from err

    if not employee:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Employee with id {employee_id} not found",
        )

    logger.info("Admin %s started impersonating employee %s", admin.id, employee_id)
    return _token_response(_session_for_employee(employee, admin))


@router.post("/stop-impersonating", response_model=SessionTokenResponse)
async def stop_impersonating(user: SessionUser = Depends(get_current_user)):
    if user.impersonator is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Not impersonating",
        )

    logger.info("Admin %s stopped impersonating %s", user.impersonator.id, user.id)
    return _token_response(user.impersonator)

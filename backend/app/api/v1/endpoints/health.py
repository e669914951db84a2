from __future__ import annotations

from fastapi import APIRouter, Depends

from app.core.config import settings
from app.core.dependencies import get_current_user
from app.models.auth import SessionUser
from app.services.employee_service import employee_service
from app.services.ticket_service import ticket_service

router = APIRouter(prefix="/health", tags=["health"])


async def _container_status(service) -> str:
    if not service.initialized:
        return "not_configured"
    try:
        return "ok" if await service.check_connection() else "error"
    except Exception:
        return "error"


@router.get("")
async def health_check():
    services: dict[str, str] = {
        "employees": await _container_status(employee_service),
        "tickets": await _container_status(ticket_service),
    }

    all_ok = all(v in ("ok", "not_configured") for v in services.values())

    return {
        "status": "healthy" if all_ok else "degraded",
        "version": settings.APP_VERSION,
        "services": services,
    }


@router.get("/protected")
async def health_protected(user: SessionUser = Depends(get_current_user)):
    return {"status": "ok", "user": user.model_dump(mode="json")}


@router.get("/ready")
async def readiness_probe():
    return {"ready": True}

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from app.core.dependencies import get_current_user
from app.models.auth import SessionUser
from app.models.org import OrgChartResponse
from app.services.employee_service import employee_service
from app.services.org_hierarchy import (
    build_forest,
    filter_forest_to_pending,
    pending_new_staff_requests,
)
from app.services.ticket_service import ticket_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/org-chart", tags=["org-chart"])


@router.get("", response_model=OrgChartResponse)
async def get_org_chart(
    pending_only: bool = False,
    user: SessionUser = Depends(get_current_user),  # noqa: B008
):
    try:
        employees = await employee_service.get_employees()
        tickets = await ticket_service.get_tickets()
    except Exception as err:
        logger.exception("Failed to load org chart data")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve organization data",
        ) from err

    roots = build_forest(employees, tickets)
    pending = pending_new_staff_requests(tickets)

    # Filtering with nothing pending would hide the whole chart.
    filtered = pending_only and bool(pending)
    if filtered:
        roots = filter_forest_to_pending(roots)

    return OrgChartResponse(
        roots=roots,
        employee_count=len(employees),
        pending_count=len(pending),
        filtered=filtered,
    )

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from app.core.dependencies import get_current_user
from app.models.auth import SessionUser
from app.models.employee import Employee
from app.models.org import ManagerOrgChartResponse
from app.services.employee_service import employee_service
from app.services.org_hierarchy import build_single_manager_tree, requests_for_manager
from app.services.ticket_service import ticket_service
from app.services.view_state import ExpansionState

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/employees", tags=["employees"])


@router.get("", response_model=list[Employee])
async def list_employees(user: SessionUser = Depends(get_current_user)):  # noqa: B008
    try:
        return await employee_service.get_employees()
    except Exception as err:
        logger.exception("Failed to list employees")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve employees",
        ) from err


@router.get("/{employee_id}", response_model=Employee)
async def get_employee(
    employee_id: int,
    user: SessionUser = Depends(get_current_user),  # noqa: B008
):
    try:
        employee = await employee_service.get_employee_by_id(employee_id)
    except Exception as err:
        logger.exception("Failed to get employee %s", employee_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve employee",
        ) from err

    if not employee:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Employee with id {employee_id} not found",
        )

    return employee


@router.get("/{employee_id}/org-chart", response_model=ManagerOrgChartResponse)
async def get_employee_org_chart(
    employee_id: int,
    user: SessionUser = Depends(get_current_user),  # noqa: B008
):
    try:
        employees = await employee_service.get_employees()
        tickets = await ticket_service.get_tickets()
    except Exception as err:
        logger.exception("Failed to load org chart data for manager %s", employee_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve organization data",
        ) from err

    roots = build_single_manager_tree(employees, tickets, employee_id)
    return ManagerOrgChartResponse(
        roots=roots,
        direct_reports_count=roots[0].direct_reports if roots else 0,
        pending_count=len(requests_for_manager(tickets, employee_id)),
        expanded=ExpansionState.initial(employee_id).expanded,
    )

"""Org chart response models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, computed_field

from app.models.employee import Employee
from app.models.ticket import Ticket


class ManagerNode(BaseModel):
    """An employee with their direct reports and pending new-hire requests.

    Built fresh for every request and frozen afterwards.
    """

    model_config = ConfigDict(frozen=True)

    employee: Employee
    level: int = 0
    subordinates: list[ManagerNode] = []
    pending_requests: list[Ticket] = []

    @computed_field  # type: ignore[prop-decorator]
    @property
    def direct_reports(self) -> int:
        return len(self.subordinates)

    @property
    def has_expandable_content(self) -> bool:
        return bool(self.subordinates or self.pending_requests)


class OrgChartResponse(BaseModel):
    """Whole-company forest."""

    roots: list[ManagerNode]
    employee_count: int
    pending_count: int
    filtered: bool = False


class ManagerOrgChartResponse(BaseModel):
    """One manager's subtree plus the initial view state for it."""

    roots: list[ManagerNode]
    direct_reports_count: int
    pending_count: int
    expanded: dict[int, bool]

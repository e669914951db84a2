"""Canonical profile view merged from the session user and the employee record."""

from __future__ import annotations

from pydantic import BaseModel

from app.models.auth import AuthProvider
from app.models.employee import Employee, EmployeeStatus, NamedRef


class ProfileData(BaseModel):
    id: str | None = None
    username: str = ""
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    is_admin: bool = False
    employee_id: int | None = None
    auth_provider: AuthProvider = AuthProvider.DIRECT
    position: str | NamedRef | None = ""
    department: str | None = ""
    phone: str = ""
    avatar: str = ""
    status: EmployeeStatus = EmployeeStatus.ACTIVE
    hire_date: str = ""
    department_id: int | None = None
    manager_id: int | None = None
    employee: Employee | None = None
    initials: str = "U"
    full_name: str = "User"

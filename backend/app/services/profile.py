"""Profile reconciliation: merge the session user and the employee record into one view."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Any, Literal

from app.models.auth import SessionUser
from app.models.employee import Employee, NamedRef
from app.models.profile import ProfileData

logger = logging.getLogger(__name__)

UserProvider = Callable[[], Awaitable["SessionUser | None"]]
EmployeeProvider = Callable[[int], Awaitable["Employee | None"]]


class ProfileLookup(Enum):
    NOT_FOUND = "not_found"


NOT_FOUND = ProfileLookup.NOT_FOUND


class ProfileUnavailableError(Exception):
    """A user or employee lookup failed, so no profile can be trusted."""

    def __init__(self, source: str, cause: BaseException) -> None:
        super().__init__(f"{source} lookup failed: {cause}")
        self.source = source


def get_initials(first_name: str | None, last_name: str | None) -> str:
    if not first_name and not last_name:
        return "U"
    return f"{(first_name or '')[:1]}{(last_name or '')[:1]}".upper()


def get_full_name(first_name: str | None, last_name: str | None) -> str:
    if not first_name and not last_name:
        return "User"
    return f"{first_name or ''} {last_name or ''}".strip()


def _department_name(department: NamedRef | str | None) -> str | None:
    if isinstance(department, NamedRef):
        return department.name
    return department


def _user_defaults(user: SessionUser) -> dict[str, Any]:
    return {
        "id": user.id,
        "username": user.username,
        "first_name": user.first_name,
        "last_name": user.last_name,
        "email": user.email,
        "is_admin": user.is_admin,
        "employee_id": user.employee_id,
        "auth_provider": user.auth_provider,
        "position": user.position or "",
        "department": user.department or "",
    }


def _employee_overrides(employee: Employee) -> dict[str, Any]:
    department_id = employee.department_id
    if department_id is None and isinstance(employee.department, NamedRef):
        department_id = employee.department.id

    fields: dict[str, Any] = {
        "first_name": employee.first_name,
        "last_name": employee.last_name,
        "email": employee.email,
        "position": employee.position,
        "department": _department_name(employee.department),
        "phone": employee.phone,
        "avatar": employee.avatar,
        "status": employee.status,
        "hire_date": employee.hire_date,
        "department_id": department_id,
        "manager_id": employee.manager_id,
    }
    # None means the record lacks the field; "" and other falsy values still win.
    overrides = {k: v for k, v in fields.items() if v is not None}
    overrides["employee_id"] = employee.id
    overrides["employee"] = employee
    return overrides


def reconcile(
    user: SessionUser | None,
    employee: Employee | None,
) -> ProfileData | Literal[ProfileLookup.NOT_FOUND]:
    if user is None and employee is None:
        return NOT_FOUND

    fields: dict[str, Any] = _user_defaults(user) if user is not None else {}
    if employee is not None:
        fields.update(_employee_overrides(employee))

    fields["initials"] = get_initials(fields.get("first_name"), fields.get("last_name"))
    fields["full_name"] = get_full_name(fields.get("first_name"), fields.get("last_name"))
    return ProfileData(**fields)


def resolve_target_employee_id(user: SessionUser | None, employee_id: int | None = None) -> int | None:
    if employee_id is not None:
        return employee_id
    if user is not None:
        return user.employee_id
    return None


async def load_profile(
    user_provider: UserProvider,
    employee_provider: EmployeeProvider,
    employee_id: int | None = None,
) -> ProfileData | Literal[ProfileLookup.NOT_FOUND]:
    """Fetch both sources and reconcile them.

    A failing lookup raises ProfileUnavailableError instead of producing a
    partial profile. When no employee id can be resolved the employee lookup
    is skipped and the profile is built from the user alone.
    """
    try:
        user = await user_provider()
    except Exception as err:
        logger.exception("Session user lookup failed")
        raise ProfileUnavailableError("user", err) from err

    target_id = resolve_target_employee_id(user, employee_id)
    employee: Employee | None = None
    if target_id is not None:
        try:
            employee = await employee_provider(target_id)
        except Exception as err:
            logger.exception("Employee lookup failed for id=%s", target_id)
            raise ProfileUnavailableError("employee", err) from err

    return reconcile(user, employee)

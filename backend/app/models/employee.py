"""Employee models for the staff directory."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, field_validator, model_validator


def optional_id(value: Any) -> int | None:
    # Stored and form-submitted ids may be strings, blanks or garbage.
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


class EmployeeStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    ONBOARDING = "onboarding"
    ON_LEAVE = "on_leave"


class NamedRef(BaseModel):
    """Embedded `{id, name}` reference, e.g. a department or a position."""

    id: int | None = None
    name: str

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> int | None:
        return optional_id(value)


class Employee(BaseModel):
    """A directory entry.

    Only `id` is mandatory. Every other field may be missing from the stored
    document, and `None` means the field is absent rather than blank.
    """

    id: int
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone: str | None = None
    position: str | NamedRef | None = None
    department_id: int | None = None
    department: NamedRef | str | None = None
    manager_id: int | None = None
    status: EmployeeStatus | None = None
    hire_date: str | None = None
    avatar: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _drop_unnamed_refs(cls, data: Any) -> Any:
        # A reference without a usable name is treated as absent; the department
        # id it carries still counts when `department_id` is missing.
        if not isinstance(data, dict):
            return data
        cleaned = dict(data)
        for key in ("position", "department"):
            ref = cleaned.get(key)
            if isinstance(ref, dict) and not isinstance(ref.get("name"), str):
                cleaned[key] = None
                if key == "department" and optional_id(cleaned.get("department_id")) is None:
                    cleaned["department_id"] = ref.get("id")
        return cleaned

    @field_validator("department_id", "manager_id", mode="before")
    @classmethod
    def _coerce_ids(cls, value: Any) -> int | None:
        return optional_id(value)

    @property
    def full_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip()

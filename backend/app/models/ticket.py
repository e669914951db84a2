"""Ticket models. Only the fields the org chart and dashboards read."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from pydantic.alias_generators import to_camel

from app.models.employee import optional_id


class TicketType(str, Enum):
    SYSTEM_ACCESS = "system_access"
    ONBOARDING = "onboarding"
    ISSUE = "issue"
    REQUEST = "request"
    NEW_STAFF_REQUEST = "new_staff_request"
    IT_SUPPORT = "it_support"


class TicketStatus(str, Enum):
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    CLOSED = "closed"


class TicketPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class NewStaffRequestMetadata(BaseModel):
    """Structured metadata of a `new_staff_request` ticket."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    reporting_manager_id: int | None = None
    manager_id: int | None = None
    first_name: str | None = None
    last_name: str | None = None
    position: str | None = None
    department_id: int | None = None
    start_date: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _fold_manager_key(cls, data: Any) -> Any:
        # Older requests store the hiring manager under a bare `manager` key.
        if not isinstance(data, dict) or "manager" not in data:
            return data
        if optional_id(data.get("managerId", data.get("manager_id"))) is not None:
            return data
        folded = {k: v for k, v in data.items() if k not in ("managerId", "manager_id")}
        folded["managerId"] = data["manager"]
        return folded

    @field_validator("reporting_manager_id", "manager_id", "department_id", mode="before")
    @classmethod
    def _coerce_ids(cls, value: Any) -> int | None:
        return optional_id(value)


class GenericRequestMetadata(BaseModel):
    """Metadata of every other ticket type; unknown keys are kept as-is."""

    model_config = ConfigDict(extra="allow")


class Ticket(BaseModel):
    id: int
    title: str = ""
    description: str = ""
    requestor_id: int | None = None
    assignee_id: int | None = None
    status: TicketStatus = TicketStatus.OPEN
    priority: TicketPriority = TicketPriority.MEDIUM
    type: TicketType
    created_at: str | None = None
    metadata: NewStaffRequestMetadata | GenericRequestMetadata | None = None

    @field_validator("requestor_id", "assignee_id", mode="before")
    @classmethod
    def _coerce_ids(cls, value: Any) -> int | None:
        return optional_id(value)

    @model_validator(mode="before")
    @classmethod
    def _select_metadata_kind(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        raw = data.get("metadata")
        if raw is None or isinstance(raw, BaseModel):
            return data
        if not isinstance(raw, dict):
            return {**data, "metadata": None}
        if data.get("type") in (TicketType.NEW_STAFF_REQUEST, TicketType.NEW_STAFF_REQUEST.value):
            metadata: BaseModel = NewStaffRequestMetadata.model_validate(raw)
        else:
            metadata = GenericRequestMetadata.model_validate(raw)
        return {**data, "metadata": metadata}

    @property
    def is_pending_new_staff_request(self) -> bool:
        return self.type == TicketType.NEW_STAFF_REQUEST and self.status != TicketStatus.CLOSED

"""Expand/collapse state for org chart views.

The state belongs to whoever renders the chart; the hierarchy builder never
reads it. Every operation returns a new value.
"""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict

from app.models.employee import Employee


class ExpansionState(BaseModel):
    model_config = ConfigDict(frozen=True)

    expanded: dict[int, bool] = {}

    @classmethod
    def initial(cls, root_id: int | None = None) -> ExpansionState:
        if root_id is None:
            return cls()
        return cls(expanded={root_id: True})

    def is_expanded(self, employee_id: int) -> bool:
        return self.expanded.get(employee_id, False)

    def toggle(self, employee_id: int) -> ExpansionState:
        return ExpansionState(
            expanded={**self.expanded, employee_id: not self.is_expanded(employee_id)}
        )

    def expand_all(self, employees: Iterable[Employee]) -> ExpansionState:
        return ExpansionState(expanded={e.id: True for e in employees})

    def collapse_all(self) -> ExpansionState:
        return ExpansionState()

"""Org hierarchy: build manager -> direct-report trees and overlay pending new-hire requests."""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Callable, Iterable, Iterator

from app.models.employee import Employee
from app.models.org import ManagerNode
from app.models.ticket import NewStaffRequestMetadata, Ticket

logger = logging.getLogger(__name__)

ManagerLookup = Callable[[Ticket], "int | None"]


def _reporting_manager_from_metadata(ticket: Ticket) -> int | None:
    if isinstance(ticket.metadata, NewStaffRequestMetadata):
        return ticket.metadata.reporting_manager_id
    return None


def _manager_from_metadata(ticket: Ticket) -> int | None:
    if isinstance(ticket.metadata, NewStaffRequestMetadata):
        return ticket.metadata.manager_id
    return None


def _assignee(ticket: Ticket) -> int | None:
    return ticket.assignee_id


# Tried in order. The first lookup that yields an id decides which manager a
# request belongs to; later lookups are never consulted for that ticket.
MANAGER_LOOKUP_STRATEGIES: tuple[tuple[str, ManagerLookup], ...] = (
    ("metadata.reporting_manager_id", _reporting_manager_from_metadata),
    ("metadata.manager_id", _manager_from_metadata),
    ("assignee_id", _assignee),
)


def resolve_request_manager_id(ticket: Ticket) -> int | None:
    for _, lookup in MANAGER_LOOKUP_STRATEGIES:
        manager_id = lookup(ticket)
        if manager_id is not None:
            return manager_id
    return None


def pending_new_staff_requests(tickets: Iterable[Ticket]) -> list[Ticket]:
    return [t for t in tickets if t.is_pending_new_staff_request]


def requests_for_manager(tickets: Iterable[Ticket], manager_id: int) -> list[Ticket]:
    return [
        t for t in pending_new_staff_requests(tickets)
        if resolve_request_manager_id(t) == manager_id
    ]


def _group_requests_by_manager(tickets: Iterable[Ticket]) -> dict[int, list[Ticket]]:
    grouped: dict[int, list[Ticket]] = defaultdict(list)
    for ticket in pending_new_staff_requests(tickets):
        manager_id = resolve_request_manager_id(ticket)
        if manager_id is not None:
            grouped[manager_id].append(ticket)
    return dict(grouped)


class _OrgIndex:
    """Lookup tables for a single build over one snapshot of employees and tickets."""

    def __init__(self, employees: Iterable[Employee], tickets: Iterable[Ticket]) -> None:
        self.by_id: dict[int, Employee] = {}
        self.order: list[Employee] = []
        for employee in employees:
            if employee.id in self.by_id:
                logger.warning("Duplicate employee id %s, keeping the first record", employee.id)
                continue
            self.by_id[employee.id] = employee
            self.order.append(employee)

        self.position = {e.id: i for i, e in enumerate(self.order)}
        self.children: dict[int, list[Employee]] = defaultdict(list)
        for employee in self.order:
            if employee.manager_id == employee.id:
                logger.warning("Employee %s is listed as their own manager", employee.id)
            elif self.has_manager(employee):
                self.children[employee.manager_id].append(employee)

        self.requests = _group_requests_by_manager(tickets)

    def has_manager(self, employee: Employee) -> bool:
        return (
            employee.manager_id is not None
            and employee.manager_id != employee.id
            and employee.manager_id in self.by_id
        )

    def build(self, root: Employee, placed: set[int]) -> ManagerNode:
        """Tree under `root`, skipping anyone already in `placed`.

        Uses an explicit stack so chain depth is bounded by memory, not by the
        interpreter's recursion limit. Nodes are frozen, so they are assembled
        children-first in reverse visit order.
        """
        placed.add(root.id)
        visited: list[tuple[Employee, int]] = []
        kept_children: dict[int, list[Employee]] = {}
        stack: list[tuple[Employee, int]] = [(root, 0)]
        while stack:
            employee, level = stack.pop()
            visited.append((employee, level))
            kids: list[Employee] = []
            for child in self.children.get(employee.id, []):
                if child.id in placed:
                    logger.warning(
                        "Cyclic manager reference: employee %s already placed, not re-entered under %s",
                        child.id,
                        employee.id,
                    )
                    continue
                placed.add(child.id)
                kids.append(child)
            kept_children[employee.id] = kids
            stack.extend((child, level + 1) for child in reversed(kids))

        nodes: dict[int, ManagerNode] = {}
        for employee, level in reversed(visited):
            nodes[employee.id] = ManagerNode(
                employee=employee,
                level=level,
                subordinates=[nodes[c.id] for c in kept_children[employee.id]],
                pending_requests=self.requests.get(employee.id, []),
            )
        return nodes[root.id]

    def cycle_anchor(self, employee: Employee) -> Employee:
        """Earliest (input order) member of the manager cycle above `employee`.

        Only valid for employees no root reaches: their manager chain is fully
        resolvable and therefore must loop.
        """
        seen: set[int] = set()
        current = employee
        while current.id not in seen:
            seen.add(current.id)
            current = self.by_id[current.manager_id]

        members = [current]
        member = self.by_id[current.manager_id]
        while member.id != current.id:
            members.append(member)
            member = self.by_id[member.manager_id]
        return min(members, key=lambda e: self.position[e.id])


def build_forest(employees: Iterable[Employee], tickets: Iterable[Ticket]) -> list[ManagerNode]:
    """Forest of every employee, roots in input order.

    Employees without a resolvable manager are roots. Groups caught in a manager
    cycle are appended afterwards, rooted at their earliest listed member.
    """
    index = _OrgIndex(employees, tickets)
    placed: set[int] = set()

    roots = [index.build(e, placed) for e in index.order if not index.has_manager(e)]

    for employee in index.order:
        if employee.id in placed:
            continue
        anchor = index.cycle_anchor(employee)
        logger.warning("Manager cycle detected; promoting employee %s to root", anchor.id)
        roots.append(index.build(anchor, placed))

    logger.info("Built org forest: %d employees, %d root(s)", len(placed), len(roots))
    return roots


def build_single_manager_tree(
    employees: Iterable[Employee],
    tickets: Iterable[Ticket],
    manager_id: int,
) -> list[ManagerNode]:
    index = _OrgIndex(employees, tickets)
    manager = index.by_id.get(manager_id)
    if manager is None:
        return []
    return [index.build(manager, set())]


def walk(roots: Iterable[ManagerNode]) -> Iterator[ManagerNode]:
    """Pre-order traversal of every node in `roots`."""
    stack = list(reversed(list(roots)))
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.subordinates))


def count_nodes(roots: Iterable[ManagerNode]) -> int:
    return sum(1 for _ in walk(roots))


def _has_pending(node: ManagerNode) -> bool:
    return any(n.pending_requests for n in walk([node]))


def filter_forest_to_pending(roots: Iterable[ManagerNode]) -> list[ManagerNode]:
    """Keep the trees that contain at least one manager with a pending new-hire request."""
    return [root for root in roots if _has_pending(root)]

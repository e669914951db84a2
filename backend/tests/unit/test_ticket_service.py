from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from app.models.ticket import NewStaffRequestMetadata, TicketPriority, TicketStatus, TicketType
from app.services.ticket_service import TicketService

NEW_STAFF_DOC = {
    "id": "31",
    "title": "New hire: Grace Hopper",
    "description": "Backfill for platform team",
    "requestorId": 2,
    "assigneeId": None,
    "status": "in_progress",
    "priority": "high",
    "type": "new_staff_request",
    "createdAt": "2024-03-01T09:00:00Z",
    "metadata": {"reportingManagerId": "7", "firstName": "Grace", "lastName": "Hopper"},
}


def _container_yielding(*docs):
    container = MagicMock()

    async def mock_query_items(**kwargs):
        for doc in docs:
            yield doc

    container.query_items = mock_query_items
    return container


def test_transform_ticket_maps_fields():
    service = TicketService()
    ticket = service._transform_ticket(NEW_STAFF_DOC)

    assert ticket.id == 31
    assert ticket.requestor_id == 2
    assert ticket.assignee_id is None
    assert ticket.status == TicketStatus.IN_PROGRESS
    assert ticket.priority == TicketPriority.HIGH
    assert ticket.type == TicketType.NEW_STAFF_REQUEST
    assert isinstance(ticket.metadata, NewStaffRequestMetadata)
    assert ticket.metadata.reporting_manager_id == 7


def test_transform_ticket_defaults_missing_fields():
    service = TicketService()
    ticket = service._transform_ticket({"id": "1", "type": "issue"})

    assert ticket.status == TicketStatus.OPEN
    assert ticket.priority == TicketPriority.MEDIUM
    assert ticket.title == ""


def test_transform_ticket_unknown_type_is_skipped():
    service = TicketService()
    assert service._transform_ticket({"id": "1", "type": "mystery"}) is None


@pytest.mark.anyio
async def test_get_tickets_returns_valid_documents():
    service = TicketService()
    service.initialized = True
    service.container = _container_yielding(NEW_STAFF_DOC, {"id": "2"}, {"id": "3", "type": "onboarding"})

    tickets = await service.get_tickets()

    assert [t.id for t in tickets] == [31, 3]


@pytest.mark.anyio
async def test_get_tickets_not_initialized():
    service = TicketService()
    assert await service.get_tickets() == []

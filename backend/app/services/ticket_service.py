"""Cosmos DB ticket service (read-only)."""

from __future__ import annotations

import logging
from typing import Any

from azure.cosmos.aio import CosmosClient
from pydantic import ValidationError

from app.core.config import Settings
from app.models.ticket import Ticket

logger = logging.getLogger(__name__)

_FIELD_MAP: list[tuple[str, str]] = [
    ("title", "title"),
    ("description", "description"),
    ("requestor_id", "requestorId"),
    ("assignee_id", "assigneeId"),
    ("status", "status"),
    ("priority", "priority"),
    ("type", "type"),
    ("created_at", "createdAt"),
    ("metadata", "metadata"),
]


class TicketService:
    def __init__(self) -> None:
        self.client: CosmosClient | None = None
        self.container: Any = None
        self.initialized: bool = False

    async def initialize(self, settings: Settings) -> None:
        if self.initialized:
            return

        if not settings.COSMOS_DB_ENDPOINT or not settings.COSMOS_DB_KEY:
            logger.warning("Cosmos DB credentials missing — TicketService not initialized")
            return

        container_name = settings.COSMOS_DB_TICKETS_CONTAINER
        self.client = CosmosClient(settings.COSMOS_DB_ENDPOINT, settings.COSMOS_DB_KEY)
        db = self.client.get_database_client(settings.COSMOS_DB_DATABASE)
        self.container = db.get_container_client(container_name)
        self.initialized = True
        logger.info("TicketService initialized (container=%s)", container_name)

    async def close(self) -> None:
        if self.client:
            await self.client.close()
            self.client = None
            self.container = None
            self.initialized = False

    async def get_tickets(self) -> list[Ticket]:
        if not self.container:
            return []

        results: list[Ticket] = []
        async for item in self.container.query_items(
            query="SELECT * FROM c",
            enable_cross_partition_query=True,
        ):
            ticket = self._transform_ticket(item)
            if ticket is not None:
                results.append(ticket)
        return results

    def _transform_ticket(self, raw: dict[str, Any]) -> Ticket | None:
        data: dict[str, Any] = {"id": raw.get("id")}
        for python_key, cosmos_key in _FIELD_MAP:
            value = raw.get(cosmos_key)
            if value is not None:
                data[python_key] = value

        try:
            return Ticket(**data)
        except ValidationError as e:
            logger.warning("Skipping malformed ticket document id=%r: %s", raw.get("id"), e)
            return None


ticket_service = TicketService()

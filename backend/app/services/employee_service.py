"""Cosmos DB employee service (read-only)."""

from __future__ import annotations

import logging
from typing import Any

from azure.cosmos.aio import CosmosClient
from pydantic import ValidationError

from app.core.config import Settings
from app.models.employee import Employee, EmployeeStatus

logger = logging.getLogger(__name__)

# Stored document keys (camelCase) → Employee attribute names
_FIELD_MAP: list[tuple[str, str]] = [
    ("first_name", "firstName"),
    ("last_name", "lastName"),
    ("email", "email"),
    ("phone", "phone"),
    ("position", "position"),
    ("department_id", "departmentId"),
    ("department", "department"),
    ("manager_id", "managerId"),
    ("hire_date", "hireDate"),
    ("avatar", "avatar"),
]


def _normalize_status(raw: Any) -> EmployeeStatus | None:
    if raw is None:
        return None
    key = str(raw).strip().lower().replace("-", "_").replace(" ", "_")
    try:
        return EmployeeStatus(key)
    except ValueError:
        logger.warning("Unknown employee status %r ignored", raw)
        return None


class EmployeeService:
    def __init__(self) -> None:
        self.client: CosmosClient | None = None
        self.container: Any = None
        self.initialized: bool = False

    async def initialize(self, settings: Settings) -> None:
        if self.initialized:
            return

        endpoint = settings.COSMOS_DB_ENDPOINT
        key = settings.COSMOS_DB_KEY
        container_name = settings.COSMOS_DB_EMPLOYEES_CONTAINER

        if not endpoint or not key:
            logger.warning("Cosmos DB credentials missing — EmployeeService not initialized")
            return

        self.client = CosmosClient(endpoint, key)
        db = self.client.get_database_client(settings.COSMOS_DB_DATABASE)
        self.container = db.get_container_client(container_name)
        self.initialized = True
        logger.info("EmployeeService initialized (container=%s)", container_name)

    async def close(self) -> None:
        if self.client:
            await self.client.close()
            self.client = None
            self.container = None
            self.initialized = False

    async def get_employee_by_id(self, employee_id: int) -> Employee | None:
        if not self.container:
            return None

        query = "SELECT * FROM c WHERE c.id = @id"
        params: list[dict[str, Any]] = [{"name": "@id", "value": str(employee_id)}]

        async for item in self.container.query_items(
            query=query,
            parameters=params,
            enable_cross_partition_query=True,
        ):
            return self._transform_employee(item)

        return None

    async def get_employees(self) -> list[Employee]:
        if not self.container:
            return []

        results: list[Employee] = []
        async for item in self.container.query_items(
            query="SELECT * FROM c",
            enable_cross_partition_query=True,
        ):
            employee = self._transform_employee(item)
            if employee is not None:
                results.append(employee)

        return results

    async def check_connection(self) -> bool:
        if not self.container:
            return False
        try:
            query = "SELECT VALUE COUNT(1) FROM c"
            async for _ in self.container.query_items(
                query=query,
                enable_cross_partition_query=True,
            ):
                return True
            return True
        except Exception:
            logger.exception("Cosmos DB connection check failed (employees)")
            return False

    def _transform_employee(self, raw: dict[str, Any]) -> Employee | None:
        data: dict[str, Any] = {"id": raw.get("id")}

        for python_key, cosmos_key in _FIELD_MAP:
            data[python_key] = raw.get(cosmos_key)

        data["status"] = _normalize_status(raw.get("status"))

        try:
            return Employee(**data)
        except ValidationError as e:
            logger.warning("Skipping malformed employee document id=%r: %s", raw.get("id"), e)
            return None


employee_service = EmployeeService()

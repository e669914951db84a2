from __future__ import annotations

import time

import pytest
from jose import jwt
from starlette.testclient import TestClient

from app.core.dependencies import get_current_user
from app.main import app
from app.models.auth import SessionUser
from app.models.employee import Employee
from app.models.ticket import Ticket

TEST_SECRET_KEY = "test-session-secret-0000000000000000"


@pytest.fixture(autouse=True)
def _session_settings():
    from app.core.config import settings

    original_secret = settings.SESSION_SECRET_KEY
    settings.SESSION_SECRET_KEY = TEST_SECRET_KEY
    yield
    settings.SESSION_SECRET_KEY = original_secret


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def _make_token(
    *,
    sub: str = "user-1",
    email: str = "test@staff.example",
    admin: bool = False,
    employee_id: int | None = None,
    expired: bool = False,
    secret: str = TEST_SECRET_KEY,
) -> str:
    now = int(time.time())
    claims = {
        "sub": sub,
        "username": email,
        "email": email,
        "adm": admin,
        "prv": "direct",
        "iat": now - 60,
        "exp": now - 3600 if expired else now + 3600,
    }
    if employee_id is not None:
        claims["eid"] = employee_id
    return jwt.encode(claims, secret, algorithm="HS256")


def make_employee(id: int, manager_id: int | None = None, **fields) -> Employee:
    fields.setdefault("first_name", f"First{id}")
    fields.setdefault("last_name", f"Last{id}")
    return Employee(id=id, manager_id=manager_id, **fields)


def make_new_staff_request(
    id: int,
    reporting_manager_id: int | None = None,
    status: str = "open",
    **metadata,
) -> Ticket:
    if reporting_manager_id is not None:
        metadata["reportingManagerId"] = reporting_manager_id
    return Ticket(id=id, type="new_staff_request", status=status, metadata=metadata)


@pytest.fixture
def mock_user_staff():
    return SessionUser(
        id="staff-1",
        username="jdoe",
        first_name="John",
        last_name="Doe",
        email="john.doe@staff.example",
        employee_id=2,
    )


@pytest.fixture
def mock_user_admin():
    return SessionUser(
        id="admin-1",
        username="admin",
        first_name="Ada",
        last_name="Admin",
        email="admin@staff.example",
        is_admin=True,
    )


@pytest.fixture
def authenticated_client(mock_user_staff):
    app.dependency_overrides[get_current_user] = lambda: mock_user_staff
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def admin_client(mock_user_admin):
    app.dependency_overrides[get_current_user] = lambda: mock_user_admin
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()

from __future__ import annotations

from unittest.mock import AsyncMock, patch

from app.core.dependencies import get_current_user
from app.main import app
from app.models.auth import SessionUser
from app.models.employee import Employee

EMPLOYEE_SERVICE = "app.api.v1.endpoints.profile.employee_service.get_employee_by_id"


def test_profile_merges_employee_record(authenticated_client):
    employee = Employee(id=2, first_name="Johnny", email="", phone="+1 555 0100")
    lookup = AsyncMock(return_value=employee)

    with patch(EMPLOYEE_SERVICE, lookup):
        response = authenticated_client.get("/api/v1/profile")

    assert response.status_code == 200
    lookup.assert_awaited_once_with(2)
    data = response.json()
    assert data["id"] == "staff-1"
    assert data["first_name"] == "Johnny"
    assert data["last_name"] == "Doe"
    assert data["email"] == ""
    assert data["phone"] == "+1 555 0100"
    assert data["employee"]["id"] == 2


def test_profile_explicit_employee_id(authenticated_client):
    lookup = AsyncMock(return_value=Employee(id=9, first_name="Nine"))

    with patch(EMPLOYEE_SERVICE, lookup):
        response = authenticated_client.get("/api/v1/profile", params={"employee_id": 9})

    lookup.assert_awaited_once_with(9)
    assert response.json()["employee_id"] == 9


def test_profile_missing_employee_falls_back_to_user(authenticated_client):
    with patch(EMPLOYEE_SERVICE, AsyncMock(return_value=None)):
        response = authenticated_client.get("/api/v1/profile")

    assert response.status_code == 200
    data = response.json()
    assert data["first_name"] == "John"
    assert data["employee"] is None


def test_profile_lookup_failure_returns_502(authenticated_client):
    with patch(EMPLOYEE_SERVICE, AsyncMock(side_effect=RuntimeError("cosmos down"))):
        response = authenticated_client.get("/api/v1/profile")

    assert response.status_code == 502
    assert response.json()["detail"] == "Profile unavailable: employee lookup failed"


def test_profile_requires_auth(client):
    response = client.get("/api/v1/profile")
    assert response.status_code == 401


def test_profile_user_without_employee_link(client):
    app.dependency_overrides[get_current_user] = lambda: SessionUser(id="u-9", first_name="Solo")
    lookup = AsyncMock()

    with patch(EMPLOYEE_SERVICE, lookup):
        response = client.get("/api/v1/profile")

    lookup.assert_not_awaited()
    assert response.status_code == 200
    assert response.json()["full_name"] == "Solo"

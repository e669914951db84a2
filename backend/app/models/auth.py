"""Session models for signed session tokens."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class AuthProvider(str, Enum):
    DIRECT = "direct"
    MICROSOFT = "microsoft"


class SessionUser(BaseModel):
    id: str
    username: str = ""
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    is_admin: bool = False
    employee_id: int | None = None
    auth_provider: AuthProvider = AuthProvider.DIRECT
    position: str | None = None
    department: str | None = None
    impersonator: SessionUser | None = None

    @property
    def is_impersonating(self) -> bool:
        return self.impersonator is not None


class SessionTokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: SessionUser

# rentwise/adapters/clients/session.py
from __future__ import annotations

from dataclasses import dataclass

from ...config import settings
from ...domain.roles import parse_role
from ...domain.types import UserRole


@dataclass
class Session:
    """
    Who is calling. Injected into ApiClient; the client only reads it.
    Sign-in/sign-out flows replace the token here, never inside a request.
    """

    token: str | None = None
    role: UserRole | None = None

    @classmethod
    def from_settings(cls) -> "Session":
        role = parse_role(settings.RENTWISE_USER_ROLE) if settings.RENTWISE_USER_ROLE else None
        return cls(token=settings.RENTWISE_API_TOKEN or None, role=role)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    def auth_headers(self) -> dict[str, str]:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}

    def sign_in(self, token: str, role: UserRole | str | None = None) -> None:
        self.token = token
        if role is not None:
            self.role = parse_role(role)

    def sign_out(self) -> None:
        self.token = None
        self.role = None

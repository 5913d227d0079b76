# rentwise/adapters/clients/appointments.py
from __future__ import annotations

from typing import Any

from ...schemas import Appointment, ViewingRequest
from .api_client import ApiClient


def _appointments(data: Any) -> list[Appointment]:
    rows: list[Any] = []
    if isinstance(data, dict) and isinstance(data.get("appointments"), list):
        rows = data["appointments"]
    elif isinstance(data, list):
        rows = data
    return [Appointment.model_validate(x) for x in rows if isinstance(x, dict)]


class AppointmentsApi:
    """Viewing scheduling (/appointments)."""

    def __init__(self, client: ApiClient) -> None:
        self.client = client

    async def request_viewing(self, viewing: ViewingRequest) -> Appointment:
        data = await self.client.post("/appointments/viewing", json=viewing.to_payload())
        if isinstance(data, dict) and isinstance(data.get("appointment"), dict):
            data = data["appointment"]
        return Appointment.model_validate(data)

    async def list(
        self,
        *,
        status: str | None = None,
        type: str | None = None,
        property_id: str | None = None,
    ) -> list[Appointment]:
        params = {"status": status, "type": type, "propertyId": property_id}
        return _appointments(await self.client.get("/appointments", params=params))

    async def upcoming(self, property_id: str | None = None) -> list[Appointment]:
        return _appointments(await self.client.get("/appointments/upcoming", params={"propertyId": property_id}))

# rentwise/adapters/clients/rental_applications.py
from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from ...config import settings
from ...domain.types import DECISION_STATUSES, ApplicationStatus
from ...schemas import ApplicationDraft, ApplicationPage, RentalApplication
from .api_client import ApiClient
from .errors import ApiMalformedResponse


def _unwrap(data: Any, key: str) -> Any:
    """Routes answer either {"success": ..., key: {...}} or the bare record."""
    if isinstance(data, dict) and isinstance(data.get(key), (dict, list)):
        return data[key]
    return data


def _record(data: Any, key: str = "application") -> RentalApplication:
    try:
        return RentalApplication.model_validate(_unwrap(data, key))
    except ValidationError as e:
        raise ApiMalformedResponse(detail=f"response carries no valid {key} record") from e


def _page(data: Any) -> ApplicationPage:
    try:
        return ApplicationPage.model_validate(data or {})
    except ValidationError as e:
        raise ApiMalformedResponse(detail="response carries no valid application list") from e


def _list_params(page: int, limit: int | None, status: ApplicationStatus | str | None) -> dict[str, Any]:
    return {
        "page": int(page),
        "limit": int(limit if limit is not None else settings.APPLICATIONS_PAGE_LIMIT),
        "status": ApplicationStatus(status).value if status else None,
    }


class RentalApplicationsApi:
    """Client for /rental-applications. Returns parsed records, never mutates them."""

    def __init__(self, client: ApiClient) -> None:
        self.client = client

    async def create(self, property_id: str, draft: ApplicationDraft) -> RentalApplication:
        data = await self.client.post(f"/rental-applications/{property_id}", json=draft.to_payload())
        return _record(data)

    async def list_for_applicant(
        self,
        *,
        page: int = 1,
        limit: int | None = None,
        status: ApplicationStatus | str | None = None,
    ) -> ApplicationPage:
        data = await self.client.get("/rental-applications/applicant", params=_list_params(page, limit, status))
        return _page(data)

    async def list_for_landlord(
        self,
        *,
        page: int = 1,
        limit: int | None = None,
        status: ApplicationStatus | str | None = None,
    ) -> ApplicationPage:
        data = await self.client.get("/rental-applications/landlord", params=_list_params(page, limit, status))
        return _page(data)

    async def get(self, application_id: str) -> RentalApplication:
        data = await self.client.get(f"/rental-applications/{application_id}")
        return _record(data)

    async def withdraw(self, application_id: str) -> RentalApplication:
        data = await self.client.patch(f"/rental-applications/{application_id}/withdraw")
        record = _unwrap(data, "application")
        if isinstance(record, dict) and ("_id" in record or "id" in record):
            return _record(record)
        # Some deployments answer only {"success": true, "message": ...}
        return await self.get(application_id)

    async def add_message(self, application_id: str, message: str) -> RentalApplication:
        data = await self.client.post(f"/rental-applications/{application_id}/messages", json={"message": message})
        return _record(data)

    async def update_status(
        self,
        application_id: str,
        status: ApplicationStatus | str,
        *,
        reason: str | None = None,
        notes: str | None = None,
    ) -> RentalApplication:
        """Landlord decision. The server owns the transition; we only ask for it."""
        decided = ApplicationStatus(status)
        if decided not in DECISION_STATUSES:
            raise ValueError(f"Invalid status {decided.value!r}. Must be approved or rejected")

        body = {"status": decided.value, "reason": reason, "notes": notes}
        data = await self.client.patch(
            f"/rental-applications/{application_id}/status",
            json={k: v for k, v in body.items() if v is not None},
        )
        return _record(data)

# rentwise/service_layer/applications.py
from __future__ import annotations

import logging
from typing import Any, Awaitable

from ..adapters.clients.errors import ApiError
from ..adapters.clients.rental_applications import RentalApplicationsApi
from ..domain.types import ApplicationStatus, Notice, NoticeLevel
from ..schemas import ApplicationPage, Pagination, RentalApplication

log = logging.getLogger(__name__)


class _ApplicationList:
    """
    Paginated, status-filtered list. Records are replaced wholesale on every
    fetch; status/decision are never edited locally.
    """

    fetch_failed = "Failed to fetch applications"

    def __init__(self, api: RentalApplicationsApi, *, limit: int | None = None) -> None:
        self.api = api
        self.limit = limit
        self.status_filter: ApplicationStatus | None = None
        self.applications: list[RentalApplication] = []
        self.pagination = Pagination()
        self.loading = False
        self.notice: Notice | None = None

    async def _fetch_page(self, page: int) -> ApplicationPage:
        raise NotImplementedError

    async def fetch(self, page: int = 1) -> list[RentalApplication]:
        self.loading = True
        try:
            result = await self._fetch_page(max(1, page))
        except ApiError as e:
            log.warning("%s page=%s: %s", type(self).__name__, page, e.message)
            self.notice = Notice(NoticeLevel.error, e.server_message or self.fetch_failed)
            return self.applications
        finally:
            self.loading = False

        self.applications = result.applications
        self.pagination = result.pagination
        return self.applications

    async def filter_status(self, status: ApplicationStatus | str | None) -> list[RentalApplication]:
        self.status_filter = ApplicationStatus(status) if status else None
        return await self.fetch(1)

    async def next_page(self) -> list[RentalApplication]:
        if not self.pagination.has_next:
            return self.applications
        return await self.fetch(self.pagination.current + 1)

    async def previous_page(self) -> list[RentalApplication]:
        if not self.pagination.has_previous:
            return self.applications
        return await self.fetch(self.pagination.current - 1)

    async def _run(self, action: str, coro: Awaitable[Any], success_text: str) -> bool:
        try:
            await coro
        except ApiError as e:
            log.warning("%s failed: %s", action, e.message)
            self.notice = Notice(NoticeLevel.error, e.server_message or f"Failed to {action}")
            return False
        self.notice = Notice(NoticeLevel.success, success_text)
        # server state wins: re-read the page instead of patching rows
        await self.fetch(self.pagination.current)
        return True


class ApplicantApplicationsView(_ApplicationList):
    async def _fetch_page(self, page: int) -> ApplicationPage:
        return await self.api.list_for_applicant(page=page, limit=self.limit, status=self.status_filter)

    async def withdraw(self, application_id: str) -> bool:
        return await self._run(
            "withdraw application",
            self.api.withdraw(application_id),
            "Application withdrawn successfully",
        )

    async def send_message(self, application_id: str, text: str) -> bool:
        body = (text or "").strip()
        if not body:
            self.notice = Notice(NoticeLevel.error, "Please enter a message")
            return False
        return await self._run("send message", self.api.add_message(application_id, body), "Message sent successfully!")


class LandlordApplicationsView(_ApplicationList):
    async def _fetch_page(self, page: int) -> ApplicationPage:
        return await self.api.list_for_landlord(page=page, limit=self.limit, status=self.status_filter)

    async def decide(
        self,
        application_id: str,
        status: ApplicationStatus | str,
        *,
        reason: str | None = None,
        notes: str | None = None,
    ) -> bool:
        decided = ApplicationStatus(status)
        return await self._run(
            "update application status",
            self.api.update_status(application_id, decided, reason=reason, notes=notes),
            f"Application {decided.value} successfully",
        )

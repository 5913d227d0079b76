# rentwise/service_layer/submission.py
from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable

from apscheduler.job import Job
from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from pydantic import ValidationError

from ..adapters.clients.errors import ApiError
from ..adapters.clients.rental_applications import RentalApplicationsApi
from ..config import settings
from ..domain.types import Notice, NoticeLevel, SubmitStatus
from ..schemas import RentalApplication
from .form_state import FormStateController

log = logging.getLogger(__name__)

SUBMITTING_MESSAGE = "Submitting your rental application..."
SUCCESS_MESSAGE = "Application submitted successfully! You can now message the landlord directly."
DEFAULT_SUBMIT_ERROR = "Failed to submit application. Please try again."
INVALID_FORM_MESSAGE = "Please fix the highlighted fields before submitting."

EMPTY_MESSAGE = "Please enter a message"
MESSAGE_SENT = "Message sent successfully!"
MESSAGE_FAILED = "Failed to send message. Please try again."

_TERMINAL = {SubmitStatus.success, SubmitStatus.error}

Listener = Callable[[SubmitStatus], None]


class SubmissionWorkflow:
    """
    idle -> submitting -> success | error, with success/error reverting to idle
    after `feedback_s` via a one-shot scheduler job owned by this instance.

    The lockout (can_submit) is the only concurrency guard: the status flips to
    `submitting` before the first await, so a second submit() while a request is
    in flight is ignored. Once an application was created the instance refuses
    further submits (one application per applicant/property).
    """

    def __init__(
        self,
        form: FormStateController,
        applications: RentalApplicationsApi,
        property_id: str,
        *,
        feedback_s: float | None = None,
        scheduler: AsyncIOScheduler | None = None,
    ) -> None:
        self.form = form
        self.applications = applications
        self.property_id = property_id
        self.feedback_s = float(feedback_s if feedback_s is not None else settings.SUBMIT_FEEDBACK_S)

        self.status = SubmitStatus.idle
        self.message = ""
        self.created: RentalApplication | None = None
        self.login_required = False
        self.notice: Notice | None = None
        self.sending_message = False

        self._scheduler = scheduler
        self._owns_scheduler = scheduler is None
        self._revert_job: Job | None = None
        self._listeners: list[Listener] = []
        self._disposed = False

    # --- state ---

    @property
    def is_submitting(self) -> bool:
        return self.status == SubmitStatus.submitting

    @property
    def can_submit(self) -> bool:
        if self._disposed or self.created is not None:
            return False
        return self.status not in (SubmitStatus.submitting, SubmitStatus.success)

    @property
    def messaging_enabled(self) -> bool:
        return self.created is not None

    @property
    def disposed(self) -> bool:
        return self._disposed

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def _transition(self, status: SubmitStatus, message: str = "") -> None:
        self.status = status
        self.message = message
        for listener in list(self._listeners):
            listener(status)

    # --- feedback window ---

    def _ensure_scheduler(self) -> AsyncIOScheduler:
        if self._scheduler is None:
            self._scheduler = AsyncIOScheduler()
        if not self._scheduler.running:
            self._scheduler.start()
        return self._scheduler

    def _schedule_revert(self) -> None:
        self._cancel_revert()
        run_at = datetime.now(timezone.utc) + timedelta(seconds=self.feedback_s)
        self._revert_job = self._ensure_scheduler().add_job(
            self._revert,
            "date",
            run_date=run_at,
            misfire_grace_time=None,
        )

    def _cancel_revert(self) -> None:
        job, self._revert_job = self._revert_job, None
        if job is None:
            return
        try:
            job.remove()
        except JobLookupError:
            pass  # already ran

    async def _revert(self) -> None:
        self._revert_job = None
        if self._disposed or self.status not in _TERMINAL:
            return
        self._transition(SubmitStatus.idle)

    # --- actions ---

    async def submit(self) -> RentalApplication | None:
        if not self.can_submit:
            log.debug("submit ignored: status=%s created=%s", self.status.value, bool(self.created))
            return None

        # advance() never validates, so the final submit is the real gate
        errors = self.form.validate_all()
        if errors:
            self.form.show_errors(errors)
            self._transition(SubmitStatus.error, INVALID_FORM_MESSAGE)
            self._schedule_revert()
            return None

        try:
            draft = self.form.to_draft()
        except ValidationError as e:
            log.warning("rental application draft rejected property=%s: %s", self.property_id, e)
            self._transition(SubmitStatus.error, INVALID_FORM_MESSAGE)
            self._schedule_revert()
            return None

        self._cancel_revert()
        self.login_required = False
        self._transition(SubmitStatus.submitting, SUBMITTING_MESSAGE)

        try:
            created = await self.applications.create(self.property_id, draft)
        except ApiError as e:
            log.warning("rental application submit failed property=%s: %s", self.property_id, e.message)
            if self._disposed:
                return None
            self.login_required = e.requires_login
            self._transition(SubmitStatus.error, e.server_message or DEFAULT_SUBMIT_ERROR)
            self._schedule_revert()
            return None

        self.created = created
        if self._disposed:
            return created

        self.form.errors = {}
        self._transition(SubmitStatus.success, SUCCESS_MESSAGE)
        self._schedule_revert()
        return created

    async def send_message(self, text: str) -> RentalApplication | None:
        if self.created is None:
            raise RuntimeError("messaging is only available after a successful submission")

        body = (text or "").strip()
        if not body:
            self.notice = Notice(NoticeLevel.error, EMPTY_MESSAGE)
            return None
        if self.sending_message:
            return None

        self.sending_message = True
        try:
            updated = await self.applications.add_message(self.created.id, body)
        except ApiError as e:
            log.warning("application message failed id=%s: %s", self.created.id, e.message)
            self.notice = Notice(NoticeLevel.error, e.server_message or MESSAGE_FAILED)
            return None
        finally:
            self.sending_message = False

        self.created = updated
        self.notice = Notice(NoticeLevel.success, MESSAGE_SENT)
        return updated

    def dispose(self) -> None:
        """Unmount: cancel the pending revert so nothing updates disposed state."""
        self._disposed = True
        self._cancel_revert()
        self._listeners.clear()
        if self._owns_scheduler and self._scheduler is not None and self._scheduler.running:
            self._scheduler.shutdown(wait=False)

# rentwise/entrypoints/cli.py
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from ..adapters.clients.api_client import ApiClient
from ..adapters.clients.appointments import AppointmentsApi
from ..adapters.clients.errors import ApiError
from ..adapters.clients.properties import PropertiesApi
from ..adapters.clients.rental_applications import RentalApplicationsApi
from ..adapters.clients.session import Session
from ..config import settings
from ..domain.types import ApplicationStatus, SubmitStatus
from ..presentation.views import listing_title, property_card, status_badge
from ..schemas import ViewingRequest
from ..service_layer.applications import ApplicantApplicationsView
from ..service_layer.form_state import FormStateController
from ..service_layer.listing_filters import ListingFilterView, PropertyFilters
from ..service_layer.submission import SubmissionWorkflow

log = logging.getLogger(__name__)


def _quiet_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(levelname)s:%(name)s:%(message)s",
    )

    # Quiet the usual offenders
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("apscheduler").setLevel(logging.WARNING)


def _client(args: argparse.Namespace) -> ApiClient:
    session = Session.from_settings()
    if args.token:
        session.sign_in(args.token)
    return ApiClient(session=session, base_url=args.base_url)


async def _properties(args: argparse.Namespace) -> int:
    view = ListingFilterView(PropertiesApi(_client(args)))
    view.draft = PropertyFilters(
        property_type=args.type or "",
        listing_type=args.listing_type or "",
        min_price=args.min_price or "",
        max_price=args.max_price or "",
        city=args.city or "",
        bedrooms=args.bedrooms or "",
    )
    rows = await view.search()
    if view.notice:
        print(view.notice.text, file=sys.stderr)
        return 1

    print(listing_title(view.applied))
    for prop in rows:
        card = property_card(prop)
        print(f"{card.id}  {card.title}  {card.price_label}  {card.location}  {card.facts}")
    return 0


async def _applications(args: argparse.Namespace) -> int:
    view = ApplicantApplicationsView(RentalApplicationsApi(_client(args)))
    view.status_filter = ApplicationStatus(args.status) if args.status else None
    rows = await view.fetch(args.page)
    if view.notice:
        print(view.notice.text, file=sys.stderr)
        return 1

    for app in rows:
        badge = status_badge(app.status)
        print(f"{app.id}  [{badge.label}]  {app.listing_title or app.listing or ''}")
    p = view.pagination
    print(f"Page {p.current} of {p.pages} ({p.total} total)")
    return 0


async def _apply(args: argparse.Namespace) -> int:
    answers = json.loads(Path(args.answers).read_text(encoding="utf-8"))

    form = FormStateController()
    form.load(answers)
    workflow = SubmissionWorkflow(form, RentalApplicationsApi(_client(args)), args.property_id)
    try:
        created = await workflow.submit()
        print(workflow.message)
        if workflow.status == SubmitStatus.error:
            for path, msg in sorted(form.errors.items()):
                print(f"  {path}: {msg}")
            if workflow.login_required:
                print("Please log in again.", file=sys.stderr)
            return 1
        if created is not None:
            print(f"application id: {created.id} status: {created.status.value}")
        return 0
    finally:
        workflow.dispose()


async def _withdraw(args: argparse.Namespace) -> int:
    app = await RentalApplicationsApi(_client(args)).withdraw(args.application_id)
    print(f"{app.id} is now {app.status.value}")
    return 0


async def _message(args: argparse.Namespace) -> int:
    app = await RentalApplicationsApi(_client(args)).add_message(args.application_id, args.text)
    print(f"{len(app.messages)} message(s) on {app.id}")
    return 0


async def _viewing(args: argparse.Namespace) -> int:
    try:
        viewing = ViewingRequest(
            property_id=args.property_id,
            preferred_date=args.date,
            preferred_time=args.time,
            message=args.message,
            contact_method=args.contact,
        )
    except ValidationError as e:
        for err in e.errors():
            field = ".".join(str(p) for p in err["loc"])
            print(f"  {field}: {err['msg']}", file=sys.stderr)
        return 1
    appt = await AppointmentsApi(_client(args)).request_viewing(viewing)
    print(f"{appt.id}  {appt.title}  {appt.status}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="rentwise")
    parser.add_argument("--base-url", default=None, help="API base URL (default: RENTWISE_API_URL)")
    parser.add_argument("--token", default=None, help="Bearer token (default: RENTWISE_API_TOKEN)")
    parser.add_argument("--log-level", default=settings.LOG_LEVEL)
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("properties", help="Browse listings")
    p.add_argument("--type", help="house, apartment, office, ...")
    p.add_argument("--listing-type", help="sale or rent")
    p.add_argument("--min-price")
    p.add_argument("--max-price")
    p.add_argument("--city")
    p.add_argument("--bedrooms", help="minimum bedrooms")
    p.set_defaults(handler=_properties)

    p = sub.add_parser("applications", help="List my rental applications")
    p.add_argument("--status", choices=[s.value for s in ApplicationStatus])
    p.add_argument("--page", type=int, default=1)
    p.set_defaults(handler=_applications)

    p = sub.add_parser("apply", help="Submit a rental application from a JSON answer file")
    p.add_argument("property_id")
    p.add_argument("answers", help="JSON file shaped like the application form (camelCase)")
    p.set_defaults(handler=_apply)

    p = sub.add_parser("withdraw", help="Withdraw a pending application")
    p.add_argument("application_id")
    p.set_defaults(handler=_withdraw)

    p = sub.add_parser("message", help="Message the landlord about an application")
    p.add_argument("application_id")
    p.add_argument("text")
    p.set_defaults(handler=_message)

    p = sub.add_parser("viewing", help="Request a property viewing")
    p.add_argument("property_id")
    p.add_argument("date", help="YYYY-MM-DD")
    p.add_argument("time", help="HH:MM")
    p.add_argument("--message", default=None)
    p.add_argument("--contact", choices=["email", "phone"], default="email")
    p.set_defaults(handler=_viewing)

    return parser


async def run(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    _quiet_logging(args.log_level)
    try:
        return await args.handler(args)
    except ApiError as e:
        log.warning("%s failed: %s", args.command, e.message)
        print(e.message, file=sys.stderr)
        if e.requires_login:
            print("Please log in again.", file=sys.stderr)
        return 1


def main() -> None:
    sys.exit(asyncio.run(run()))


if __name__ == "__main__":
    main()

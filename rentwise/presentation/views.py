# rentwise/presentation/views.py
from __future__ import annotations

from dataclasses import dataclass

from ..adapters.realtime import ConnectionStatus
from ..domain.roles import QuickAction, role_view
from ..domain.types import ApplicationStatus, SubmitStatus, UserRole
from ..domain.validation import STEP_TITLES
from ..schemas import Property
from ..service_layer.form_state import FormStateController
from ..service_layer.listing_filters import PropertyFilters
from ..service_layer.submission import SubmissionWorkflow


@dataclass(frozen=True)
class Badge:
    label: str
    tone: str  # yellow|green|red|gray


@dataclass(frozen=True)
class Banner:
    tone: str
    text: str


@dataclass(frozen=True)
class Button:
    label: str
    disabled: bool


@dataclass(frozen=True)
class StepHeader:
    title: str
    caption: str
    percent: int


@dataclass(frozen=True)
class PropertyCard:
    id: str
    title: str
    price_label: str
    location: str
    facts: str
    listing_type: str | None


@dataclass(frozen=True)
class Dashboard:
    role_name: str
    welcome: str
    actions: tuple[QuickAction, ...]


STATUS_BADGES: dict[ApplicationStatus, Badge] = {
    ApplicationStatus.pending: Badge("Pending", "yellow"),
    ApplicationStatus.approved: Badge("Approved", "green"),
    ApplicationStatus.rejected: Badge("Rejected", "red"),
    ApplicationStatus.withdrawn: Badge("Withdrawn", "gray"),
}

_BANNER_TONES: dict[SubmitStatus, str | None] = {
    SubmitStatus.idle: None,
    SubmitStatus.submitting: "blue",
    SubmitStatus.success: "green",
    SubmitStatus.error: "red",
}

_PERIOD_SUFFIX = {"monthly": "/mo", "weekly": "/wk", "daily": "/day", "yearly": "/yr"}


def status_badge(status: ApplicationStatus | str) -> Badge:
    return STATUS_BADGES[ApplicationStatus(status)]


def submission_banner(workflow: SubmissionWorkflow) -> Banner | None:
    tone = _BANNER_TONES[workflow.status]
    if tone is None or not workflow.message:
        return None
    return Banner(tone=tone, text=workflow.message)


def submit_button(workflow: SubmissionWorkflow) -> Button:
    if workflow.status == SubmitStatus.submitting:
        return Button("Submitting...", disabled=True)
    if workflow.created is not None:
        return Button("Application Submitted!", disabled=True)
    return Button("Submit Application", disabled=not workflow.can_submit)


def step_header(form: FormStateController) -> StepHeader:
    return StepHeader(
        title=STEP_TITLES.get(form.current_step, ""),
        caption=f"Step {form.current_step} of {form.total_steps}",
        percent=form.progress_percent,
    )


def _price_label(prop: Property) -> str:
    if prop.price is None:
        return "Price on request"
    label = f"{prop.currency} {prop.price:,.0f}"
    if prop.listing_type in ("rent", "rental"):
        label += _PERIOD_SUFFIX.get(prop.rent_period or "monthly", "")
    return label


def property_card(prop: Property) -> PropertyCard:
    location = ""
    if prop.address:
        location = ", ".join(p for p in (prop.address.city, prop.address.state) if p)

    facts: list[str] = []
    if prop.details:
        if prop.details.bedrooms is not None:
            facts.append(f"{prop.details.bedrooms:g} bd")
        if prop.details.bathrooms is not None:
            facts.append(f"{prop.details.bathrooms:g} ba")
        if prop.details.square_feet is not None:
            facts.append(f"{prop.details.square_feet:,.0f} sqft")

    return PropertyCard(
        id=prop.id,
        title=prop.title,
        price_label=_price_label(prop),
        location=location,
        facts=" · ".join(facts),
        listing_type=prop.listing_type,
    )


def listing_title(filters: PropertyFilters) -> str:
    """Heading for a listing page, from the applied filters."""
    kind = str(filters.property_type).capitalize() + "s" if filters.property_type else ""
    if filters.listing_type == "sale":
        return f"{kind} for Sale" if kind else "Properties for Sale"
    if filters.listing_type in ("rent", "rental"):
        return f"{kind} for Rent" if kind else "Properties for Rent"
    return kind or "All Properties"


def connection_indicator(status: ConnectionStatus) -> Badge:
    return Badge("Live", "green") if status.connected else Badge("Offline", "gray")


def role_dashboard(role: UserRole | str) -> Dashboard:
    view = role_view(role)
    return Dashboard(role_name=view.display_name, welcome=view.welcome, actions=view.quick_actions)

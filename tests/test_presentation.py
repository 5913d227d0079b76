import pytest

from rentwise.adapters.realtime import ConnectionStatus
from rentwise.domain.roles import ROLE_VIEWS, parse_role, role_view
from rentwise.domain.types import ApplicationStatus, SubmitStatus, UserRole
from rentwise.presentation.views import (
    connection_indicator,
    listing_title,
    property_card,
    role_dashboard,
    status_badge,
    step_header,
    submission_banner,
    submit_button,
)
from rentwise.schemas import Property
from rentwise.service_layer.form_state import FormStateController
from rentwise.service_layer.listing_filters import PropertyFilters
from rentwise.service_layer.submission import SubmissionWorkflow


def test_every_role_has_a_view():
    assert set(ROLE_VIEWS) == set(UserRole)
    for role in UserRole:
        view = role_view(role)
        assert view.display_name
        assert view.quick_actions[0].name == "Browse Properties"


@pytest.mark.parametrize("raw", ["landlord", "", "superuser"])
def test_unknown_role_is_an_error(raw):
    with pytest.raises(ValueError):
        parse_role(raw)


def test_role_parsing_is_case_insensitive():
    assert parse_role(" Renter ") == UserRole.renter
    assert role_dashboard("renter").role_name == "Property Renter"


@pytest.mark.parametrize(
    "status,label,tone",
    [
        ("pending", "Pending", "yellow"),
        ("approved", "Approved", "green"),
        ("rejected", "Rejected", "red"),
        ("withdrawn", "Withdrawn", "gray"),
    ],
)
def test_status_badges(status, label, tone):
    badge = status_badge(status)
    assert (badge.label, badge.tone) == (label, tone)


def test_every_status_has_a_badge():
    for status in ApplicationStatus:
        assert status_badge(status)


def test_banner_and_button_follow_workflow_state(filled_form, applications_api):
    wf = SubmissionWorkflow(filled_form, applications_api, "prop-1")
    try:
        assert submission_banner(wf) is None
        assert submit_button(wf).label == "Submit Application"
        assert submit_button(wf).disabled is False

        wf._transition(SubmitStatus.error, "Nope")
        assert submission_banner(wf).tone == "red"
        assert submission_banner(wf).text == "Nope"
        assert submit_button(wf).disabled is False

        wf._transition(SubmitStatus.submitting, "Submitting your rental application...")
        assert submission_banner(wf).tone == "blue"
        assert submit_button(wf).label == "Submitting..."
        assert submit_button(wf).disabled is True
    finally:
        wf.dispose()


def test_step_header():
    form = FormStateController()
    form.go_to(3)
    header = step_header(form)
    assert header.caption == "Step 3 of 4"
    assert header.percent == 75
    assert header.title


def test_property_card_for_rent_and_sale():
    rent = Property.model_validate(
        {
            "_id": "p1",
            "title": "Loft",
            "price": 1850,
            "listingType": "rent",
            "rentPeriod": "monthly",
            "address": {"city": "Austin", "state": "TX"},
            "details": {"bedrooms": 1, "bathrooms": 1.5, "squareFeet": 780},
        }
    )
    card = property_card(rent)
    assert card.price_label == "USD 1,850/mo"
    assert card.location == "Austin, TX"
    assert card.facts == "1 bd · 1.5 ba · 780 sqft"

    sale = Property.model_validate({"_id": "p2", "title": "House", "price": 250000, "listingType": "sale"})
    card = property_card(sale)
    assert card.price_label == "USD 250,000"
    assert card.facts == ""
    assert card.location == ""

    assert property_card(Property.model_validate({"_id": "p3"})).price_label == "Price on request"


@pytest.mark.parametrize(
    "filters,title",
    [
        (PropertyFilters(), "All Properties"),
        (PropertyFilters(property_type="house", listing_type="sale"), "Houses for Sale"),
        (PropertyFilters(listing_type="rent"), "Properties for Rent"),
        (PropertyFilters(property_type="condo"), "Condos"),
    ],
)
def test_listing_title(filters, title):
    assert listing_title(filters) == title


def test_connection_indicator_follows_status():
    status = ConnectionStatus()
    seen: list[bool] = []
    unsubscribe = status.subscribe(seen.append)

    assert connection_indicator(status).label == "Offline"
    status.mark(True)
    status.mark(True)
    assert connection_indicator(status).label == "Live"

    unsubscribe()
    status.mark(False)
    assert seen == [True]
    assert connection_indicator(status).tone == "gray"

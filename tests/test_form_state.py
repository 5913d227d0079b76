import pytest

from rentwise.domain.validation import TOTAL_STEPS
from rentwise.service_layer.form_state import FormStateController, UnknownFieldError


def test_set_field_updates_existing_leaf():
    form = FormStateController()
    form.set_field("personalInfo.currentAddress.city", "Austin")
    assert form.get_field("personalInfo.currentAddress.city") == "Austin"
    assert form.values["personalInfo"]["currentAddress"]["city"] == "Austin"


@pytest.mark.parametrize(
    "path",
    [
        "personalInfo.middleName",  # no such leaf
        "personalInfo.currentAddress",  # a section, not a leaf
        "nope.firstName",
        "employment.monthlyIncome.value",
    ],
)
def test_set_field_rejects_unknown_paths(path):
    form = FormStateController()
    before = form.values
    with pytest.raises(UnknownFieldError):
        form.set_field(path, "x")
    assert form.values == before


def test_values_is_a_copy():
    form = FormStateController()
    snapshot = form.values
    snapshot["personalInfo"]["firstName"] = "Mallory"
    assert form.get_field("personalInfo.firstName") == ""


def test_advance_and_retreat_are_clamped():
    form = FormStateController()
    assert form.current_step == 1

    form.retreat()
    form.retreat()
    assert form.current_step == 1

    for _ in range(TOTAL_STEPS * 3):
        form.advance()
    assert form.current_step == TOTAL_STEPS
    assert form.is_last_step

    for _ in range(TOTAL_STEPS * 3):
        form.retreat()
    assert form.current_step == 1
    assert form.is_first_step


def test_advance_does_not_validate():
    # empty form: step 1 is invalid, yet advance() still moves forward
    form = FormStateController()
    assert form.validate_step(1)
    assert form.advance() == 2
    assert form.errors == {}


def test_advance_if_valid_gates_on_current_step():
    form = FormStateController()
    errors = form.advance_if_valid()
    assert "personalInfo.firstName" in errors
    assert form.current_step == 1
    assert form.errors == errors


def test_negative_income_is_a_step_error_but_advance_still_possible(filled_form):
    filled_form.go_to(2)
    filled_form.set_field("employment.monthlyIncome", -5)

    errors = filled_form.validate_step(2)
    assert errors == {"employment.monthlyIncome": "Income must be positive"}

    assert filled_form.advance() == 3


def test_validate_step_is_pure(filled_form):
    filled_form.set_field("personalInfo.email", "not-an-email")
    before = filled_form.values

    first = filled_form.validate_step(1)
    second = filled_form.validate_step(1)

    assert first == second == {"personalInfo.email": "Invalid email address"}
    assert filled_form.values == before
    assert filled_form.errors == {}


def test_valid_answers_have_no_errors(filled_form):
    assert filled_form.validate_all() == {}


def test_show_errors_jumps_to_first_invalid_step(filled_form):
    filled_form.go_to(4)
    filled_form.set_field("rentalInfo.leaseDuration", "0")
    filled_form.show_errors(filled_form.validate_all())
    assert filled_form.current_step == 3
    assert filled_form.errors == {"rentalInfo.leaseDuration": "Lease duration must be at least 1 month"}


def test_to_draft_converts_form_inputs(filled_form):
    draft = filled_form.to_draft()
    payload = draft.to_payload()

    assert payload["employment"]["monthlyIncome"] == 6500.0
    assert payload["rentalInfo"]["leaseDuration"] == 12
    assert payload["rentalInfo"]["petDetails"] == "one cat"
    assert payload["personalInfo"]["dateOfBirth"] == "1990-05-01"
    assert payload["financialInfo"]["creditScore"] == 720
    # blank inputs are dropped, not sent as ""
    assert "street" not in payload["personalInfo"]["currentAddress"]
    assert "guarantorInfo" not in payload["financialInfo"]
    for key in ("status", "decision", "messages"):
        assert key not in payload


def test_to_draft_drops_pet_details_without_pets(filled_form):
    filled_form.set_field("rentalInfo.hasPets", False)
    assert "petDetails" not in filled_form.to_draft().to_payload()["rentalInfo"]


def test_load_rejects_unknown_keys():
    form = FormStateController()
    with pytest.raises(UnknownFieldError):
        form.load({"personalInfo": {"nickname": "ada"}})


def test_reset_restores_defaults(filled_form):
    filled_form.advance()
    filled_form.reset()
    assert filled_form.current_step == 1
    assert filled_form.get_field("personalInfo.firstName") == ""


def test_progress_percent():
    form = FormStateController()
    form.go_to(2)
    assert form.progress_percent == 50

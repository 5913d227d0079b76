# rentwise/service_layer/form_state.py
from __future__ import annotations

import copy
from typing import Any, Mapping

from ..domain.validation import TOTAL_STEPS, first_invalid_step, validate_all, validate_step
from ..schemas import ApplicationDraft


class UnknownFieldError(KeyError):
    pass


def application_defaults() -> dict[str, Any]:
    """Empty rental application as the form holds it (camelCase, inputs as str)."""
    contact = {"name": "", "relationship": "", "phone": "", "email": ""}
    return {
        "personalInfo": {
            "firstName": "",
            "lastName": "",
            "email": "",
            "phone": "",
            "dateOfBirth": "",
            "currentAddress": {"street": "", "city": "", "state": "", "zipCode": "", "country": ""},
        },
        "employment": {
            "employer": "",
            "jobTitle": "",
            "monthlyIncome": "",
            "employmentDuration": "",
            "workPhone": "",
        },
        "rentalInfo": {
            "desiredMoveInDate": "",
            "leaseDuration": "",
            "numberOfOccupants": 1,
            "hasPets": False,
            "petDetails": "",
            "previousLandlord": {"name": "", "phone": "", "email": ""},
            "previousRentalHistory": "",
        },
        "financialInfo": {
            "annualIncome": "",
            "creditScore": "",
            "bankName": "",
            "accountType": "",
            "hasGuarantor": False,
            "guarantorInfo": {**contact, "address": ""},
        },
        "additionalInfo": {
            "reasonForMoving": "",
            "specialRequirements": "",
            "additionalComments": "",
            "emergencyContact": dict(contact),
        },
    }


def _blank_to_none(node: Any) -> Any:
    if isinstance(node, dict):
        return {k: _blank_to_none(v) for k, v in node.items()}
    if isinstance(node, str) and not node.strip():
        return None
    return node


class FormStateController:
    """
    Values of the multi-step rental application plus the step pointer.

    advance() does NOT validate; users may skip ahead and the final submit
    re-checks everything. Use advance_if_valid() for a gated move.
    """

    def __init__(self, values: Mapping[str, Any] | None = None, *, total_steps: int = TOTAL_STEPS) -> None:
        if total_steps < 1:
            raise ValueError("total_steps must be >= 1")
        self._initial = copy.deepcopy(dict(values) if values is not None else application_defaults())
        self._values = copy.deepcopy(self._initial)
        self.total_steps = total_steps
        self.current_step = 1
        self.errors: dict[str, str] = {}

    # --- values ---

    @property
    def values(self) -> dict[str, Any]:
        return copy.deepcopy(self._values)

    def _parent(self, path: str) -> tuple[dict[str, Any], str]:
        keys = path.split(".")
        node: Any = self._values
        for key in keys[:-1]:
            if not isinstance(node, dict) or not isinstance(node.get(key), dict):
                raise UnknownFieldError(path)
            node = node[key]
        leaf = keys[-1]
        if not isinstance(node, dict) or leaf not in node or isinstance(node[leaf], dict):
            raise UnknownFieldError(path)
        return node, leaf

    def get_field(self, path: str) -> Any:
        parent, leaf = self._parent(path)
        return parent[leaf]

    def set_field(self, path: str, value: Any) -> None:
        parent, leaf = self._parent(path)
        parent[leaf] = value

    def load(self, answers: Mapping[str, Any], prefix: str = "") -> None:
        """Set every leaf of a nested mapping (e.g. a saved JSON answer file)."""
        for key, value in answers.items():
            path = f"{prefix}{key}"
            if isinstance(value, Mapping):
                self.load(value, prefix=f"{path}.")
            else:
                self.set_field(path, value)

    def reset(self) -> None:
        self._values = copy.deepcopy(self._initial)
        self.current_step = 1
        self.errors = {}

    # --- validation ---

    def validate_step(self, step: int | None = None) -> dict[str, str]:
        return validate_step(self._values, self.current_step if step is None else step)

    def validate_all(self) -> dict[str, str]:
        return validate_all(self._values)

    def check_current_step(self) -> dict[str, str]:
        """validate_step() for the current step, remembered in `errors` for display."""
        self.errors = self.validate_step()
        return self.errors

    def show_errors(self, errors: Mapping[str, str]) -> None:
        self.errors = dict(errors)
        step = first_invalid_step(self.errors)
        if step is not None:
            self.current_step = step

    # --- steps ---

    def go_to(self, step: int) -> int:
        self.current_step = min(self.total_steps, max(1, int(step)))
        return self.current_step

    def advance(self) -> int:
        return self.go_to(self.current_step + 1)

    def retreat(self) -> int:
        return self.go_to(self.current_step - 1)

    def advance_if_valid(self) -> dict[str, str]:
        errors = self.check_current_step()
        if not errors:
            self.advance()
        return errors

    @property
    def is_first_step(self) -> bool:
        return self.current_step == 1

    @property
    def is_last_step(self) -> bool:
        return self.current_step == self.total_steps

    @property
    def progress_percent(self) -> int:
        return round(self.current_step / self.total_steps * 100)

    # --- submission ---

    def to_draft(self) -> ApplicationDraft:
        """
        Request body for the current values. Call after validate_all() is clean;
        pydantic raises on anything the form rules let through.
        """
        data = _blank_to_none(self._values)

        rental = data.get("rentalInfo") or {}
        if not rental.get("hasPets"):
            rental["petDetails"] = None

        financial = data.get("financialInfo") or {}
        if not financial.get("hasGuarantor"):
            financial["guarantorInfo"] = None

        return ApplicationDraft.model_validate(data)

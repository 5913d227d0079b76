# rentwise/domain/validation.py
from __future__ import annotations

import math
import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Mapping

EMAIL_RE = re.compile(r"^[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}$", re.IGNORECASE)

INVALID_EMAIL = "Invalid email address"
INVALID_DATE = "Invalid date"


@dataclass(frozen=True)
class FieldRule:
    """
    One field's checks, applied in order: required -> format -> range.
    Optional fields (required=None) are only checked when non-blank.
    """

    path: str
    required: str | None = None
    kind: str = "text"  # text|email|date|number|integer
    invalid: str | None = None
    minimum: float | None = None
    maximum: float | None = None
    out_of_range: str | None = None


TOTAL_STEPS = 4

STEP_TITLES: dict[int, str] = {
    1: "Personal Information",
    2: "Employment & Financial",
    3: "Rental Details",
    4: "Additional Information",
}

STEP_RULES: dict[int, tuple[FieldRule, ...]] = {
    1: (
        FieldRule("personalInfo.firstName", required="First name is required"),
        FieldRule("personalInfo.lastName", required="Last name is required"),
        FieldRule("personalInfo.email", required="Email is required", kind="email", invalid=INVALID_EMAIL),
        FieldRule("personalInfo.phone", required="Phone number is required"),
        FieldRule(
            "personalInfo.dateOfBirth",
            required="Date of birth is required",
            kind="date",
            invalid=INVALID_DATE,
        ),
    ),
    2: (
        FieldRule(
            "employment.monthlyIncome",
            required="Monthly income is required",
            kind="number",
            invalid="Monthly income must be a number",
            minimum=0,
            out_of_range="Income must be positive",
        ),
        FieldRule(
            "financialInfo.annualIncome",
            kind="number",
            invalid="Annual income must be a number",
            minimum=0,
            out_of_range="Income must be positive",
        ),
        FieldRule(
            "financialInfo.creditScore",
            kind="integer",
            invalid="Credit score must be a whole number",
            minimum=300,
            maximum=850,
            out_of_range="Credit score must be between 300 and 850",
        ),
        FieldRule("financialInfo.guarantorInfo.email", kind="email", invalid=INVALID_EMAIL),
    ),
    3: (
        FieldRule(
            "rentalInfo.desiredMoveInDate",
            required="Move-in date is required",
            kind="date",
            invalid=INVALID_DATE,
        ),
        FieldRule(
            "rentalInfo.leaseDuration",
            required="Lease duration is required",
            kind="integer",
            invalid="Lease duration must be a whole number of months",
            minimum=1,
            out_of_range="Lease duration must be at least 1 month",
        ),
        FieldRule(
            "rentalInfo.numberOfOccupants",
            kind="integer",
            invalid="Number of occupants must be a whole number",
            minimum=1,
            out_of_range="At least one occupant is required",
        ),
        FieldRule("rentalInfo.previousLandlord.email", kind="email", invalid=INVALID_EMAIL),
    ),
    4: (
        FieldRule("additionalInfo.emergencyContact.email", kind="email", invalid=INVALID_EMAIL),
    ),
}


def read_path(values: Mapping[str, Any], path: str) -> Any:
    node: Any = values
    for key in path.split("."):
        if not isinstance(node, Mapping) or key not in node:
            return None
        node = node[key]
    return node


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def coerce_number(value: Any) -> float | None:
    """Form inputs arrive as str or numbers. Returns None when not a finite number."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
    elif not isinstance(value, (int, float)):
        return None
    try:
        n = float(value)
    except (ValueError, OverflowError):
        return None
    # "nan" and "inf" parse as floats
    return n if math.isfinite(n) else None


def coerce_date(value: Any) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        s = value.strip()
        try:
            return date.fromisoformat(s[:10]) if len(s) >= 10 else date.fromisoformat(s)
        except ValueError:
            return None
    return None


def check_field(rule: FieldRule, value: Any) -> str | None:
    if is_blank(value):
        return rule.required

    if rule.kind == "email":
        if not isinstance(value, str) or not EMAIL_RE.match(value.strip()):
            return rule.invalid or INVALID_EMAIL
        return None

    if rule.kind == "date":
        if coerce_date(value) is None:
            return rule.invalid or INVALID_DATE
        return None

    if rule.kind in ("number", "integer"):
        n = coerce_number(value)
        if n is None or (rule.kind == "integer" and not n.is_integer()):
            return rule.invalid
        if rule.minimum is not None and n < rule.minimum:
            return rule.out_of_range
        if rule.maximum is not None and n > rule.maximum:
            return rule.out_of_range
    return None


def validate_step(values: Mapping[str, Any], step: int) -> dict[str, str]:
    """
    Returns {dotted_path: message} for every failing field of the step.
    Never mutates `values`.
    """
    if step not in STEP_RULES:
        raise ValueError(f"step must be within 1..{TOTAL_STEPS}, got {step}")

    errors: dict[str, str] = {}
    for rule in STEP_RULES[step]:
        msg = check_field(rule, read_path(values, rule.path))
        if msg:
            errors[rule.path] = msg
    return errors


def validate_all(values: Mapping[str, Any]) -> dict[str, str]:
    errors: dict[str, str] = {}
    for step in sorted(STEP_RULES):
        errors.update(validate_step(values, step))
    return errors


def first_invalid_step(errors: Mapping[str, str]) -> int | None:
    for step in sorted(STEP_RULES):
        paths = {r.path for r in STEP_RULES[step]}
        if paths & set(errors):
            return step
    return None

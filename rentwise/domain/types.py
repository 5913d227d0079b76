# rentwise/domain/types.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ApplicationStatus(str, Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"
    withdrawn = "withdrawn"


class UserRole(str, Enum):
    buyer = "buyer"
    seller = "seller"
    agent = "agent"
    renter = "renter"
    admin = "admin"


class SubmitStatus(str, Enum):
    idle = "idle"
    submitting = "submitting"
    success = "success"
    error = "error"


class NoticeLevel(str, Enum):
    success = "success"
    error = "error"


# Landlords may only move an application to one of these.
DECISION_STATUSES = frozenset({ApplicationStatus.approved, ApplicationStatus.rejected})


@dataclass(frozen=True)
class Notice:
    """Transient one-line feedback (toast)."""

    level: NoticeLevel
    text: str

"""
core/lifecycle.py — Scheme & Tax State Rules
==============================================
The two multi-step workflows of the portal, reduced to their state rules.
Service modules (modules/schemes.py, modules/taxes.py) call these before
touching the database; the conditional UPDATEs there enforce the same rules
against concurrent requests.

Scheme enrollment:
    no-application ──apply──► pending ──decide──► accepted | rejected   (terminal)

Tax:
    unpaid (payment_date NULL) ──pay──► paid   (never reverts)
"""

from datetime import date
from typing import Optional

from fastapi import HTTPException, status

SCHEME_STATUSES = ("active", "pending", "completed", "cancelled")

PENDING = "pending"
ACCEPTED = "accepted"
REJECTED = "rejected"
ENROLLMENT_STATUSES = (PENDING, ACCEPTED, REJECTED)

# Decision values an employee may send; "approved" is the UI's word for accepted
_DECISIONS = {
    "accepted": ACCEPTED,
    "approved": ACCEPTED,
    "rejected": REJECTED,
}


class TransitionError(HTTPException):
    """A workflow step that the current state does not allow (HTTP 409)."""

    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


def normalize_scheme_status(value: str) -> str:
    value = (value or "").strip().lower()
    if value not in SCHEME_STATUSES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Scheme status must be one of {list(SCHEME_STATUSES)}",
        )
    return value


def normalize_decision(value: str) -> str:
    """Map an approve/reject request onto a terminal enrollment status."""
    decision = _DECISIONS.get((value or "").strip().lower())
    if decision is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Status must be 'accepted' (or 'approved') or 'rejected'",
        )
    return decision


def check_can_apply(scheme_status: str, already_enrolled: bool,
                    enforce_active: bool, enforce_single: bool):
    """Guard for a citizen's application; each rule is switchable by config."""
    if enforce_active and scheme_status != "active":
        raise TransitionError(f"Scheme is {scheme_status}, applications are closed")
    if enforce_single and already_enrolled:
        raise TransitionError("You have already applied to this scheme")


def check_can_decide(current_status: str):
    if current_status != PENDING:
        raise TransitionError(f"Enrollment is already {current_status}")


def is_paid(payment_date: Optional[date]) -> bool:
    return payment_date is not None


def check_can_pay(current_payment_date: Optional[date], allocated_on: date, payment_date: date):
    if is_paid(current_payment_date):
        raise TransitionError("Tax has already been paid")
    if allocated_on and payment_date < allocated_on:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Payment date cannot be earlier than the allocation date",
        )

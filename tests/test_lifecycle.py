"""Tests for the scheme and tax state rules."""

from datetime import date

import pytest
from fastapi import HTTPException

from core.lifecycle import (
    ACCEPTED, PENDING, REJECTED, TransitionError,
    check_can_apply, check_can_decide, check_can_pay, is_paid,
    normalize_decision, normalize_scheme_status,
)


class TestSchemeStatus:

    @pytest.mark.parametrize("value,expected", [
        ("active", "active"),
        (" Completed ", "completed"),
        ("CANCELLED", "cancelled"),
        ("pending", "pending"),
    ])
    def test_valid(self, value, expected):
        assert normalize_scheme_status(value) == expected

    @pytest.mark.parametrize("value", ["", None, "archived"])
    def test_invalid(self, value):
        with pytest.raises(HTTPException) as exc:
            normalize_scheme_status(value)
        assert exc.value.status_code == 400


class TestDecisions:

    def test_approved_is_stored_as_accepted(self):
        assert normalize_decision("approved") == ACCEPTED
        assert normalize_decision("Accepted") == ACCEPTED
        assert normalize_decision("rejected") == REJECTED

    @pytest.mark.parametrize("value", ["pending", "", None, "maybe"])
    def test_invalid_decision(self, value):
        with pytest.raises(HTTPException) as exc:
            normalize_decision(value)
        assert exc.value.status_code == 400

    def test_only_pending_can_be_decided(self):
        check_can_decide(PENDING)
        for terminal in (ACCEPTED, REJECTED):
            with pytest.raises(TransitionError) as exc:
                check_can_decide(terminal)
            assert exc.value.status_code == 409


class TestApplyGuard:

    def test_no_rules_enforced(self):
        check_can_apply("cancelled", already_enrolled=True, enforce_active=False, enforce_single=False)

    def test_inactive_scheme(self):
        with pytest.raises(TransitionError):
            check_can_apply("completed", already_enrolled=False, enforce_active=True, enforce_single=False)
        check_can_apply("active", already_enrolled=False, enforce_active=True, enforce_single=False)

    def test_repeat_application(self):
        with pytest.raises(TransitionError):
            check_can_apply("active", already_enrolled=True, enforce_active=False, enforce_single=True)


class TestTaxPayment:

    def test_is_paid(self):
        assert not is_paid(None)
        assert is_paid(date(2025, 1, 1))

    def test_unpaid_can_be_paid(self):
        check_can_pay(None, date(2025, 1, 1), date(2025, 1, 1))

    def test_paid_stays_paid(self):
        with pytest.raises(TransitionError) as exc:
            check_can_pay(date(2025, 2, 1), date(2025, 1, 1), date(2025, 3, 1))
        assert exc.value.detail == "Tax has already been paid"

    def test_payment_before_allocation(self):
        with pytest.raises(HTTPException) as exc:
            check_can_pay(None, date(2025, 1, 10), date(2025, 1, 9))
        assert exc.value.status_code == 400

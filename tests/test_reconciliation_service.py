from decimal import Decimal

import pytest

from models.enums import PaymentLabel
from services.reconciliation_service import (
    classify_payment,
    overdue_count,
    total_overdue,
    total_pending,
    total_received,
)


def test_exact_rent_is_full_payment():
    result = classify_payment(2500, 2500)
    assert result.is_full and not result.is_partial
    assert result.remaining == Decimal("0")
    assert result.label == PaymentLabel.FULL


def test_short_payment_is_partial():
    result = classify_payment(2500, 1000)
    assert not result.is_full and result.is_partial
    assert result.remaining == Decimal("1500")
    assert result.label == PaymentLabel.PARTIAL


def test_zero_payment_is_neither():
    result = classify_payment(2500, 0)
    assert not result.is_full and not result.is_partial
    assert result.remaining == Decimal("2500")
    assert result.label == PaymentLabel.NOT_PAID


def test_overpayment_is_full_with_negative_remaining():
    result = classify_payment(2500, 3000)
    assert result.is_full
    assert result.remaining == Decimal("-500")


@pytest.mark.parametrize("rent", [0, None, "abc"])
def test_missing_rent_never_reads_as_full(rent):
    result = classify_payment(rent, 100)
    assert not result.is_full and not result.is_partial


def test_text_amounts_are_parsed():
    result = classify_payment("2,500.00", "1000")
    assert result.is_partial
    assert result.remaining == Decimal("1500")


PAYMENTS = [
    {"amount": "2500", "status": "paid"},
    {"amount": "1000", "status": "partial"},
    {"amount": "1800", "status": "pending"},
    {"amount": "700", "status": "overdue"},
    {"amount": "abc", "status": "overdue"},
    {"amount": "abc", "status": "paid"},
]


def test_total_pending_sums_pending_and_overdue():
    assert total_pending(PAYMENTS) == Decimal("2500")


def test_total_received_sums_paid_only():
    assert total_received(PAYMENTS) == Decimal("2500")


def test_unreadable_paid_amount_counts_as_zero():
    payments = [{"amount": "2500", "status": "paid"}, {"amount": "abc", "status": "paid"}]
    assert total_received(payments) == Decimal("2500")


def test_overdue_totals():
    assert total_overdue(PAYMENTS) == Decimal("700")
    assert overdue_count(PAYMENTS) == 2


def test_empty_collections_total_zero():
    assert total_pending([]) == Decimal("0")
    assert overdue_count([]) == 0

"""Matching a rent payment against the contract's monthly rent.

The classification is a preview shown before a payment is submitted; the
status stored on the payment record is assigned by the backend.
"""

from decimal import Decimal
from typing import Any, Iterable

from core.normalizer import safe_amount, safe_sum, status_of
from models.enums import OUTSTANDING_PAYMENT_STATUSES, PaymentLabel, PaymentStatus
from schemas.schema import PaymentClassification

_OUTSTANDING = {s.value for s in OUTSTANDING_PAYMENT_STATUSES}


def classify_payment(contract_rent_amount: Any, payment_amount: Any) -> PaymentClassification:
    rent = safe_amount(contract_rent_amount)
    paid = safe_amount(payment_amount)

    is_full = paid >= rent and rent > 0
    is_partial = paid > 0 and paid < rent
    # overpayment leaves a negative remainder and still reads as a full payment
    remaining = rent - paid

    if is_full:
        label = PaymentLabel.FULL
    elif is_partial:
        label = PaymentLabel.PARTIAL
    else:
        label = PaymentLabel.NOT_PAID

    return PaymentClassification(
        is_full=is_full, is_partial=is_partial, remaining=remaining, label=label
    )


def _has_status(*statuses: str):
    wanted = set(statuses)
    return lambda item: status_of(item) in wanted


def total_pending(payments: Iterable[Any]) -> Decimal:
    return safe_sum(payments, "amount", where=_has_status(*_OUTSTANDING))


def total_received(payments: Iterable[Any]) -> Decimal:
    return safe_sum(payments, "amount", where=_has_status(PaymentStatus.PAID.value))


def total_overdue(payments: Iterable[Any]) -> Decimal:
    return safe_sum(payments, "amount", where=_has_status(PaymentStatus.OVERDUE.value))


def overdue_count(payments: Iterable[Any]) -> int:
    return sum(1 for p in payments if status_of(p) == PaymentStatus.OVERDUE.value)

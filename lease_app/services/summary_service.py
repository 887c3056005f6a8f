from typing import Any, Iterable, List, TypeVar

from core.date_helper import DateLike, month_of, today_iso, to_iso
from core.normalizer import normalize_id, read_field, safe_sum, status_of
from models.enums import ContractStatus, PaymentStatus
from schemas.schema import ContractStats, DashboardSummary, RentSummary
from services.availability_service import leased_property_ids
from services.reconciliation_service import (
    overdue_count,
    total_overdue,
    total_pending,
    total_received,
)

R = TypeVar("R")


def _count(items: Iterable[Any], status: str) -> int:
    return sum(1 for item in items if status_of(item) == status)


def rent_summary(payments: Iterable[Any]) -> RentSummary:
    payments = list(payments)
    return RentSummary(
        total_received=total_received(payments),
        total_pending=total_pending(payments),
        total_overdue=total_overdue(payments),
        paid_count=_count(payments, PaymentStatus.PAID.value),
        pending_count=_count(payments, PaymentStatus.PENDING.value),
        overdue_count=overdue_count(payments),
        partial_count=_count(payments, PaymentStatus.PARTIAL.value),
    )


def pending_payments(payments: Iterable[R], overdue_only: bool = False) -> List[R]:
    if overdue_only:
        wanted = {PaymentStatus.OVERDUE.value}
    else:
        wanted = {PaymentStatus.PENDING.value, PaymentStatus.OVERDUE.value}
    return [p for p in payments if status_of(p) in wanted]


def contract_stats(contracts: Iterable[Any], as_of_date: DateLike = None) -> ContractStats:
    contracts = list(contracts)
    as_of = today_iso(as_of_date)
    active = [c for c in contracts if status_of(c) == ContractStatus.ACTIVE.value]
    lapsed = [
        c
        for c in active
        if to_iso(read_field(c, "end_date")) and to_iso(read_field(c, "end_date")) < as_of
    ]
    return ContractStats(
        total=len(contracts),
        active=len(active),
        expired=_count(contracts, ContractStatus.EXPIRED.value),
        terminated=_count(contracts, ContractStatus.TERMINATED.value),
        lapsed=len(lapsed),
        total_monthly_rent=safe_sum(active, "rent_amount"),
    )


def dashboard_summary(
    properties: Iterable[Any],
    contracts: Iterable[Any],
    payments: Iterable[Any],
    expenses: Iterable[Any] = (),
    accounts: Iterable[Any] = (),
    as_of_date: DateLike = None,
) -> DashboardSummary:
    properties = list(properties)
    payments = list(payments)
    as_of = today_iso(as_of_date)
    month = month_of(as_of)

    occupied_ids = leased_property_ids(contracts, as_of)
    occupied = sum(1 for p in properties if normalize_id(read_field(p, "id")) in occupied_ids)

    total_rent = safe_sum(properties, "monthly_rent")
    received = total_received(p for p in payments if read_field(p, "month") == month)

    return DashboardSummary(
        as_of=as_of,
        month=month,
        total_properties=len(properties),
        occupied_properties=occupied,
        vacant_properties=len(properties) - occupied,
        total_monthly_rent=total_rent,
        rent_received=received,
        rent_pending=total_rent - received,
        overdue_payments=overdue_count(payments),
        total_bank_balance=safe_sum(accounts, "opening_balance"),
        construction_expenses=safe_sum(expenses, "amount"),
    )

import logging
from typing import Optional

from core.backend_client import BackendClient
from core.date_helper import month_of, today_iso
from core.normalizer import safe_sum, status_of
from models.enums import PaymentStatus
from repos.contract_repo import ContractRepo
from repos.rent_payment_repo import RentPaymentRepo
from schemas.schema import (
    ClassifyPaymentIn,
    ContractReconciliation,
    PaymentClassification,
    PendingPaymentsOut,
    RentSummary,
)
from services.form_service import RentFormService
from services.reconciliation_service import classify_payment
from services.summary_service import pending_payments, rent_summary

_SETTLED = {PaymentStatus.PAID.value, PaymentStatus.PARTIAL.value}

logger = logging.getLogger(__name__)


class RentPaymentService:
    def __init__(self, client: BackendClient):
        self.repo: RentPaymentRepo = RentPaymentRepo(client)
        self.contract_repo: ContractRepo = ContractRepo(client)
        self.form: RentFormService = RentFormService()

    async def classify(self, payload: ClassifyPaymentIn) -> PaymentClassification:
        if payload.contract_id is not None:
            contract = await self.contract_repo.get_by_id(payload.contract_id)
            if payload.rent_amount is not None and payload.rent_amount != contract.rent_amount:
                logger.info(
                    "Contract %s rent %s overrides submitted rent %s",
                    contract.id,
                    contract.rent_amount,
                    payload.rent_amount,
                )
        else:
            contract = {"rent_amount": payload.rent_amount}
        return self.form.preview(payload.amount, contract)

    async def summary(self) -> RentSummary:
        return rent_summary(await self.repo.fetch_all())

    async def pending(self, overdue_only: bool = False) -> PendingPaymentsOut:
        payments = await self.repo.fetch_all()
        outstanding = pending_payments(payments, overdue_only=overdue_only)
        return PendingPaymentsOut(payments=outstanding, summary=rent_summary(payments))

    async def reconcile_month(
        self, contract_id: str, month: Optional[str] = None
    ) -> ContractReconciliation:
        """Money settled on a contract for one ``YYYY-MM`` period against its rent."""
        contract = await self.contract_repo.get_by_id(contract_id)
        month = month or month_of(today_iso())
        payments = [
            p
            for p in await self.repo.fetch_all()
            if p.contract_id == contract.id and p.month == month
        ]
        settled = safe_sum(
            payments,
            "amount",
            where=lambda p: status_of(p) in _SETTLED,
        )
        return ContractReconciliation(
            contract_id=contract.id,
            month=month,
            rent_amount=contract.rent_amount,
            settled=settled,
            classification=classify_payment(contract.rent_amount, settled),
            payments=payments,
        )

import asyncio
import logging
from typing import Optional

from core.backend_client import BackendClient
from core.date_helper import today_iso
from repos.bank_repo import BankAccountRepo
from repos.contract_repo import ContractRepo
from repos.expense_repo import ExpenseRepo
from repos.property_repo import PropertyRepo
from repos.rent_payment_repo import RentPaymentRepo
from schemas.schema import DashboardSummary
from services.summary_service import dashboard_summary

logger = logging.getLogger(__name__)


class DashboardService:
    def __init__(self, client: BackendClient):
        self.property_repo: PropertyRepo = PropertyRepo(client)
        self.contract_repo: ContractRepo = ContractRepo(client)
        self.payment_repo: RentPaymentRepo = RentPaymentRepo(client)
        self.expense_repo: ExpenseRepo = ExpenseRepo(client)
        self.bank_repo: BankAccountRepo = BankAccountRepo(client)

    async def summary(self, as_of: Optional[str] = None) -> DashboardSummary:
        as_of = today_iso(as_of)
        properties, contracts, payments, expenses, accounts = await asyncio.gather(
            self.property_repo.fetch_all(),
            self.contract_repo.fetch_all(),
            self.payment_repo.fetch_all(),
            self.expense_repo.fetch_all(),
            self.bank_repo.fetch_all(),
        )
        logger.info(
            "Dashboard snapshot as of %s: %d properties, %d contracts, %d payments",
            as_of,
            len(properties),
            len(contracts),
            len(payments),
        )
        return dashboard_summary(
            properties, contracts, payments, expenses, accounts, as_of_date=as_of
        )

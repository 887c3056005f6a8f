import asyncio
import logging
from typing import Optional

from core.backend_client import BackendClient
from core.date_helper import compute_end_date, compute_months_between, today_iso
from repos.contract_repo import ContractRepo
from repos.property_repo import PropertyRepo
from repos.tenant_repo import TenantRepo
from schemas.schema import (
    AvailablePropertiesOut,
    ContractMonthsIn,
    ContractMonthsOut,
    ContractOut,
    ContractStats,
    ContractTermIn,
    ContractTermOut,
    ContractValidationIn,
    ContractValidationOut,
)
from services.availability_service import (
    available_properties,
    double_leased_property_ids,
    leased_properties,
)
from services.form_service import ContractFormService
from services.summary_service import contract_stats

logger = logging.getLogger(__name__)


class ContractService:
    def __init__(self, client: BackendClient):
        self.repo: ContractRepo = ContractRepo(client)
        self.property_repo: PropertyRepo = PropertyRepo(client)
        self.tenant_repo: TenantRepo = TenantRepo(client)
        self.form: ContractFormService = ContractFormService()

    def term(self, payload: ContractTermIn) -> ContractTermOut:
        return ContractTermOut(
            start_date=payload.start_date,
            number_of_months=payload.number_of_months,
            end_date=compute_end_date(payload.start_date, payload.number_of_months),
        )

    def months(self, payload: ContractMonthsIn) -> ContractMonthsOut:
        return ContractMonthsOut(
            start_date=payload.start_date,
            end_date=payload.end_date,
            number_of_months=compute_months_between(
                payload.start_date, payload.end_date, default=self.form.default_months
            ),
        )

    async def _editing_contract(self, contracts, contract_id) -> Optional[ContractOut]:
        if not contract_id:
            return None
        found = next((c for c in contracts if c.id == str(contract_id)), None)
        return found or await self.repo.get_by_id(contract_id)

    async def available_properties(
        self,
        tenant_id: Optional[str] = None,
        contract_id: Optional[str] = None,
        as_of: Optional[str] = None,
    ) -> AvailablePropertiesOut:
        as_of = today_iso(as_of)
        contracts, properties = await asyncio.gather(
            self.repo.fetch_all(), self.property_repo.fetch_all()
        )
        tenant = await self.tenant_repo.get_by_id(tenant_id) if tenant_id else None
        editing = await self._editing_contract(contracts, contract_id)

        doubled = double_leased_property_ids(contracts, as_of)
        if doubled:
            logger.warning(
                "Properties leased under more than one active contract: %s",
                ", ".join(sorted(doubled)),
            )

        return AvailablePropertiesOut(
            as_of=as_of,
            available=available_properties(
                properties, contracts, as_of, editing_contract=editing, tenant=tenant
            ),
            leased=leased_properties(
                properties, contracts, as_of, editing_contract=editing
            ),
        )

    async def stats(self, as_of: Optional[str] = None) -> ContractStats:
        contracts = await self.repo.fetch_all()
        return contract_stats(contracts, as_of)

    async def validate(self, payload: ContractValidationIn) -> ContractValidationOut:
        form = self.form.recompute(payload.form)
        contracts = await self.repo.fetch_all()
        errors = self.form.validate(
            form,
            contracts,
            as_of_date=payload.as_of,
            editing_contract_id=payload.contract_id,
        )
        return ContractValidationOut(valid=not errors, errors=errors, form=form)

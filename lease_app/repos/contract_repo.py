from core.normalizer import safe_amount
from repos.backend_repo import BackendRepo
from schemas.schema import ContractOut, ContractStats


class ContractRepo(BackendRepo[ContractOut]):
    resource = "/contracts"
    schema = ContractOut
    int_fields = ("tenant_id", "property_id")

    async def get_stats(self) -> ContractStats:
        data = await self.client.get(f"{self.resource}/stats") or {}
        return ContractStats(
            total=int(data.get("total") or 0),
            active=int(data.get("active") or 0),
            expired=int(data.get("expired") or 0),
            terminated=int(data.get("terminated") or 0),
            total_monthly_rent=safe_amount(
                data.get("totalMonthlyRent", data.get("total_monthly_rent"))
            ),
        )

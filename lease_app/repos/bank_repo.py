from typing import List

from repos.backend_repo import BackendRepo
from schemas.schema import BankAccountOut


class BankAccountRepo(BackendRepo[BankAccountOut]):
    resource = "/bank-accounts"
    schema = BankAccountOut

    async def fetch_all(self, per_page=None) -> List[BankAccountOut]:
        # bank accounts are listed unpaginated
        payload = await self.client.get(self.resource) or []
        if isinstance(payload, dict):
            payload = payload.get("data") or []
        return [BankAccountOut.model_validate(row) for row in payload]

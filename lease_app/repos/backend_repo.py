import logging
from typing import Any, Generic, List, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel

from core.backend_client import BackendClient
from core.paginate import PaginatePage
from core.settings import settings
from schemas.schema import Page

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class BackendRepo(Generic[T]):
    """CRUD access to one collection of the REST backend.

    Rows come back with string ids; foreign keys listed in ``int_fields`` are
    sent back as integers, which is what the backend stores.
    """

    resource: str = ""
    schema: Type[T]
    int_fields: Tuple[str, ...] = ()

    def __init__(self, client: BackendClient):
        self.client = client
        self.paginate: PaginatePage = PaginatePage()

    @staticmethod
    def _to_int(value: Any) -> Any:
        try:
            return int(value)
        except (TypeError, ValueError):
            return value

    def to_payload(self, data: BaseModel | dict) -> dict:
        if isinstance(data, BaseModel):
            payload = data.model_dump(mode="json", exclude_none=True)
        else:
            payload = dict(data)
        payload.pop("id", None)

        for field in self.int_fields:
            value = payload.get(field)
            if isinstance(value, list):
                payload[field] = [self._to_int(v) for v in value]
            elif value not in (None, ""):
                payload[field] = self._to_int(value)
        return payload

    def _one(self, payload: Any) -> T:
        # single resources are returned bare or wrapped in {"data": {...}}
        if isinstance(payload, dict) and "id" not in payload and isinstance(payload.get("data"), dict):
            payload = payload["data"]
        return self.schema.model_validate(payload)

    async def get_all(
        self, page: int = 1, per_page: Optional[int] = None, search: Optional[str] = None
    ) -> Page[T]:
        per_page = per_page or settings.DEFAULT_PER_PAGE
        params: dict = {"page": page, "per_page": per_page}
        if search:
            params["search"] = search
        payload = await self.client.get(self.resource, params=params)
        return self.paginate.parse(payload, self.schema, per_page=per_page)

    async def fetch_all(self, per_page: Optional[int] = None) -> List[T]:
        """Full snapshot of the collection, walking every page."""
        per_page = per_page or settings.SNAPSHOT_PER_PAGE

        async def fetch_page(page_number: int) -> Page[T]:
            return await self.get_all(page=page_number, per_page=per_page)

        items = await self.paginate.collect(fetch_page)
        logger.debug("Loaded %d rows from %s", len(items), self.resource)
        return items

    async def get_by_id(self, record_id: Any) -> T:
        return self._one(await self.client.get(f"{self.resource}/{record_id}"))

    async def create(self, data: BaseModel | dict) -> T:
        return self._one(await self.client.post(self.resource, self.to_payload(data)))

    async def update(self, record_id: Any, data: BaseModel | dict) -> T:
        return self._one(
            await self.client.put(f"{self.resource}/{record_id}", self.to_payload(data))
        )

    async def delete(self, record_id: Any) -> None:
        await self.client.delete(f"{self.resource}/{record_id}")

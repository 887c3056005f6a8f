from typing import Any, Callable, Type, TypeVar

from pydantic import BaseModel

from schemas.schema import Page

T = TypeVar("T", bound=BaseModel)


def _as_int(value: Any, default: int | None) -> int | None:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


class PaginatePage:
    """Reads the backend's paginated listing envelope.

    The backend answers ``{data, current_page, last_page, per_page, total,
    from, to}``; missing or malformed numbers fall back to a single page.
    """

    def parse(self, payload: Any, schema: Type[T], per_page: int = 15) -> Page[T]:
        if isinstance(payload, list):
            payload = {"data": payload, "total": len(payload), "per_page": len(payload) or per_page}
        payload = payload or {}
        rows = payload.get("data") or []
        return Page[schema](
            data=[schema.model_validate(row) for row in rows],
            current_page=_as_int(payload.get("current_page"), 1),
            last_page=_as_int(payload.get("last_page"), 1),
            per_page=_as_int(payload.get("per_page"), per_page),
            total=_as_int(payload.get("total"), len(rows)),
            from_=_as_int(payload.get("from"), None),
            to=_as_int(payload.get("to"), None),
        )

    async def collect(
        self, fetch_page: Callable[[int], Any], max_pages: int = 100
    ) -> list:
        """Walk every page through ``fetch_page(page_number)`` and concatenate."""
        items: list = []
        page_number = 1
        while page_number <= max_pages:
            page = await fetch_page(page_number)
            items.extend(page.data)
            if page.current_page >= page.last_page or not page.data:
                break
            page_number += 1
        return items

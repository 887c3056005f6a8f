import logging
from typing import Any, Optional

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from .breaker import CircuitBreaker, breaker
from .errors import BackendError, BackendUnavailable, NotFound
from .settings import settings

logger = logging.getLogger(__name__)


class BackendClient:
    """Async JSON client for the property-management REST backend."""

    def __init__(
        self,
        base_url: str | None = None,
        *,
        token: str | None = None,
        xsrf_token: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        circuit: CircuitBreaker | None = None,
    ):
        self.base_url = (base_url or settings.BACKEND_API_URL).rstrip("/")
        self.headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        token = token or settings.BACKEND_AUTH_TOKEN
        xsrf_token = xsrf_token or settings.BACKEND_XSRF_TOKEN
        if token:
            self.headers["Authorization"] = f"Bearer {token}"
        if xsrf_token:
            self.headers["X-XSRF-TOKEN"] = xsrf_token

        self.breaker = circuit or breaker
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=self.headers,
            timeout=timeout or settings.BACKEND_TIMEOUT,
            transport=transport,
        )

    async def close(self):
        await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.close()

    @staticmethod
    def _error_detail(res: httpx.Response) -> str:
        try:
            payload = res.json()
        except ValueError:
            return res.text or res.reason_phrase
        if isinstance(payload, dict):
            return str(payload.get("message") or payload.get("detail") or payload)
        return str(payload)

    async def _send(self, method: str, path: str, **kwargs) -> httpx.Response:
        return await self.client.request(method, path, **kwargs)

    @retry(
        stop=stop_after_attempt(settings.BACKEND_RETRY_ATTEMPTS),
        wait=wait_exponential(multiplier=0.5, min=0.5, max=5),
        retry=retry_if_exception_type(httpx.TransportError),
        reraise=True,
    )
    async def _send_with_retry(self, method: str, path: str, **kwargs) -> httpx.Response:
        return await self._send(method, path, **kwargs)

    async def request(self, method: str, path: str, **kwargs) -> Any:
        # writes are sent once; a timed out POST may already have been stored
        send = self._send_with_retry if method.upper() == "GET" else self._send

        async def handler():
            try:
                res = await send(method, path, **kwargs)
            except httpx.TransportError as e:
                logger.error("Backend %s %s unreachable: %s", method, path, e)
                raise BackendUnavailable() from e

            if res.status_code == 404:
                raise NotFound(self._error_detail(res))
            if res.is_error:
                detail = self._error_detail(res)
                logger.warning(
                    "Backend %s %s failed with %s: %s",
                    method,
                    path,
                    res.status_code,
                    detail,
                )
                raise BackendError(res.status_code, detail)

            if res.status_code == 204 or not res.content:
                return None
            return res.json()

        return await self.breaker.call(handler)

    async def get(self, path: str, params: Optional[dict] = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, data: dict) -> Any:
        return await self.request("POST", path, json=data)

    async def put(self, path: str, data: dict) -> Any:
        return await self.request("PUT", path, json=data)

    async def delete(self, path: str) -> Any:
        return await self.request("DELETE", path)

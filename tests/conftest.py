import math

import httpx
import pytest
from fastapi.testclient import TestClient

from app import app
from core.backend_client import BackendClient
from core.breaker import CircuitBreaker
from core.get_backend import get_backend

BASE_URL = "http://backend.test/api"


class FakeBackend:
    """In-memory stand-in for the REST backend, served through httpx.MockTransport."""

    def __init__(self, collections=None, fixed=None):
        self.collections = collections or {}
        self.fixed = fixed or {}
        self.requests = []

    def _page(self, rows, request):
        page = int(request.url.params.get("page", 1))
        per_page = int(request.url.params.get("per_page", 15))
        chunk = rows[(page - 1) * per_page : page * per_page]
        return {
            "data": chunk,
            "current_page": page,
            "last_page": max(1, math.ceil(len(rows) / per_page)),
            "per_page": per_page,
            "total": len(rows),
            "from": (page - 1) * per_page + 1 if chunk else None,
            "to": (page - 1) * per_page + len(chunk) if chunk else None,
        }

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/api")

        if (request.method, path) in self.fixed:
            status, body = self.fixed[(request.method, path)]
            return httpx.Response(status, json=body)

        if request.method == "GET" and path in self.collections:
            return httpx.Response(200, json=self._page(self.collections[path], request))

        resource, _, record_id = path.rpartition("/")
        if request.method == "GET" and resource in self.collections:
            for row in self.collections[resource]:
                if str(row["id"]) == record_id:
                    return httpx.Response(200, json={"data": row})
            return httpx.Response(404, json={"message": f"No query results for {record_id}"})

        return httpx.Response(404, json={"message": "Route not found"})


@pytest.fixture
def fake_backend():
    return FakeBackend()


@pytest.fixture
def make_client():
    def factory(handler, **kwargs):
        return BackendClient(
            BASE_URL,
            transport=httpx.MockTransport(handler),
            circuit=CircuitBreaker(failure_threshold=3, base_recovery_time=10),
            **kwargs,
        )

    return factory


@pytest.fixture
def api(fake_backend, make_client):
    client = make_client(fake_backend)
    app.dependency_overrides[get_backend] = lambda: client
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def contracts_payload():
    return [
        {
            "id": 1,
            "contract_number": "C-001",
            "tenant_id": 10,
            "property_id": 100,
            "rent_amount": "2500.00",
            "start_date": "2024-01-01",
            "end_date": "2024-12-31",
            "terms": "Standard",
            "status": "active",
        },
        {
            "id": 2,
            "contract_number": "C-002",
            "tenant_id": 11,
            "property_id": 101,
            "rent_amount": 1800,
            "start_date": "2023-01-01",
            "end_date": "2023-12-31",
            "terms": "Standard",
            "status": "active",
        },
        {
            "id": 3,
            "contract_number": "C-003",
            "tenant_id": 12,
            "property_id": 102,
            "rent_amount": 900,
            "start_date": "2022-01-01",
            "end_date": "2022-06-30",
            "terms": "Short",
            "status": "terminated",
        },
    ]


@pytest.fixture
def properties_payload():
    return [
        {"id": 100, "name": "Shop A", "status": "occupied", "monthly_rent": "2500"},
        {"id": 101, "name": "Shop B", "status": "occupied", "monthly_rent": "1800"},
        {"id": 102, "name": "Shop C", "status": "available", "monthly_rent": "900"},
    ]


@pytest.fixture
def payments_payload():
    return [
        {"id": 1, "tenant_id": 10, "contract_id": 1, "amount": "2500", "payment_date": "2024-05-03", "status": "paid"},
        {"id": 2, "tenant_id": 10, "contract_id": 1, "amount": "1000", "payment_date": "2024-06-02", "status": "partial"},
        {"id": 3, "tenant_id": 11, "contract_id": 2, "amount": "1800", "payment_date": "2024-06-05", "status": "pending"},
        {"id": 4, "tenant_id": 11, "contract_id": 2, "amount": "1800", "payment_date": "2024-04-05", "status": "overdue"},
        {"id": 5, "tenant_id": 10, "contract_id": 1, "amount": "500", "payment_date": "2024-06-20", "status": "paid"},
    ]

from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi_utils.cbv import cbv

from core.backend_client import BackendClient
from core.get_backend import get_backend
from core.safe_handler import safe_handler
from schemas.schema import (
    ClassifyPaymentIn,
    ContractReconciliation,
    PaymentClassification,
    PendingPaymentsOut,
    RentSummary,
)
from services.rent_payment_service import RentPaymentService

router = APIRouter(tags=["Rent Payments"])


@cbv(router=router)
class RentPaymentRoutes:
    @router.post("/classify", response_model=PaymentClassification)
    @safe_handler
    async def classify(
        self,
        payload: ClassifyPaymentIn,
        backend: BackendClient = Depends(get_backend),
    ):
        return await RentPaymentService(backend).classify(payload)

    @router.get("/summary", response_model=RentSummary)
    @safe_handler
    async def summary(self, backend: BackendClient = Depends(get_backend)):
        return await RentPaymentService(backend).summary()

    @router.get("/pending", response_model=PendingPaymentsOut)
    @safe_handler
    async def pending(
        self,
        overdue_only: bool = Query(False),
        backend: BackendClient = Depends(get_backend),
    ):
        return await RentPaymentService(backend).pending(overdue_only=overdue_only)

    @router.get(
        "/contracts/{contract_id}/reconcile", response_model=ContractReconciliation
    )
    @safe_handler
    async def reconcile(
        self,
        contract_id: str,
        month: Optional[str] = Query(None, pattern=r"^\d{4}-\d{2}$"),
        backend: BackendClient = Depends(get_backend),
    ):
        return await RentPaymentService(backend).reconcile_month(contract_id, month)

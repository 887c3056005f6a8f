from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi_utils.cbv import cbv

from core.backend_client import BackendClient
from core.get_backend import get_backend
from core.safe_handler import safe_handler
from schemas.schema import (
    AvailablePropertiesOut,
    ContractMonthsIn,
    ContractMonthsOut,
    ContractStats,
    ContractTermIn,
    ContractTermOut,
    ContractValidationIn,
    ContractValidationOut,
)
from services.contract_service import ContractService

router = APIRouter(tags=["Contracts"])


@cbv(router=router)
class ContractRoutes:
    @router.post("/term", response_model=ContractTermOut)
    @safe_handler
    async def term(
        self,
        payload: ContractTermIn,
        backend: BackendClient = Depends(get_backend),
    ):
        return ContractService(backend).term(payload)

    @router.post("/months", response_model=ContractMonthsOut)
    @safe_handler
    async def months(
        self,
        payload: ContractMonthsIn,
        backend: BackendClient = Depends(get_backend),
    ):
        return ContractService(backend).months(payload)

    @router.get("/available-properties", response_model=AvailablePropertiesOut)
    @safe_handler
    async def available_properties(
        self,
        tenant_id: Optional[str] = Query(None),
        contract_id: Optional[str] = Query(None),
        as_of: Optional[str] = Query(None, description="YYYY-MM-DD, defaults to today"),
        backend: BackendClient = Depends(get_backend),
    ):
        return await ContractService(backend).available_properties(
            tenant_id=tenant_id, contract_id=contract_id, as_of=as_of
        )

    @router.get("/stats", response_model=ContractStats)
    @safe_handler
    async def stats(
        self,
        as_of: Optional[str] = Query(None),
        backend: BackendClient = Depends(get_backend),
    ):
        return await ContractService(backend).stats(as_of=as_of)

    @router.post("/validate", response_model=ContractValidationOut)
    @safe_handler
    async def validate(
        self,
        payload: ContractValidationIn,
        backend: BackendClient = Depends(get_backend),
    ):
        return await ContractService(backend).validate(payload)

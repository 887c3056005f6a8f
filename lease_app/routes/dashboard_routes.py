from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi_utils.cbv import cbv

from core.backend_client import BackendClient
from core.get_backend import get_backend
from core.safe_handler import safe_handler
from schemas.schema import DashboardSummary
from services.dashboard_service import DashboardService

router = APIRouter(tags=["Dashboard"])


@cbv(router=router)
class DashboardRoutes:
    @router.get("/", response_model=DashboardSummary)
    @safe_handler
    async def summary(
        self,
        as_of: Optional[str] = Query(None, description="YYYY-MM-DD, defaults to today"),
        backend: BackendClient = Depends(get_backend),
    ):
        return await DashboardService(backend).summary(as_of=as_of)

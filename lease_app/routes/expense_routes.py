from fastapi import APIRouter, Depends
from fastapi_utils.cbv import cbv

from core.backend_client import BackendClient
from core.get_backend import get_backend
from core.safe_handler import safe_handler
from schemas.schema import ExpenseForm
from services.expense_service import ExpenseService

router = APIRouter(tags=["Construction Expenses"])


@cbv(router=router)
class ExpenseRoutes:
    @router.post("/amount", response_model=ExpenseForm)
    @safe_handler
    async def amount(
        self,
        payload: ExpenseForm,
        backend: BackendClient = Depends(get_backend),
    ):
        return ExpenseService(backend).amount(payload)

    @router.get("/{expense_id}/form", response_model=ExpenseForm)
    @safe_handler
    async def load_form(
        self,
        expense_id: str,
        backend: BackendClient = Depends(get_backend),
    ):
        return await ExpenseService(backend).load_form(expense_id)

from core.backend_client import BackendClient
from repos.expense_repo import ExpenseRepo
from schemas.schema import ExpenseForm
from services.form_service import ExpenseFormService


class ExpenseService:
    def __init__(self, client: BackendClient):
        self.repo: ExpenseRepo = ExpenseRepo(client)
        self.form: ExpenseFormService = ExpenseFormService()

    def amount(self, form: ExpenseForm) -> ExpenseForm:
        return self.form.recompute(form)

    async def load_form(self, expense_id: str) -> ExpenseForm:
        return self.form.load(await self.repo.get_by_id(expense_id))

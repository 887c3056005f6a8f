from repos.backend_repo import BackendRepo
from schemas.schema import ConstructionExpenseOut


class ExpenseRepo(BackendRepo[ConstructionExpenseOut]):
    resource = "/construction-expenses"
    schema = ConstructionExpenseOut
    int_fields = ("project_id", "material_id", "vendor_id", "bank_account_id")

from repos.backend_repo import BackendRepo
from schemas.schema import RentPaymentOut


class RentPaymentRepo(BackendRepo[RentPaymentOut]):
    resource = "/rent-payments"
    schema = RentPaymentOut
    int_fields = ("tenant_id", "contract_id", "bank_account_id")

    def to_payload(self, data) -> dict:
        payload = super().to_payload(data)
        # status and month are assigned by the backend on submission
        payload.pop("month", None)
        payload.setdefault("status", "pending")
        return payload

import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, List, Optional

from core.date_helper import (
    DateLike,
    compute_end_date,
    compute_months_between,
    parse_iso_date,
    to_iso,
)
from core.normalizer import normalize_id, read_field, safe_amount, status_of
from core.settings import settings
from models.enums import ContractStatus
from schemas.schema import ContractForm, ExpenseForm, PaymentClassification
from services.availability_service import is_property_available
from services.reconciliation_service import classify_payment

logger = logging.getLogger(__name__)

_CONTRACT_STATUSES = {s.value for s in ContractStatus}


class ContractFormService:
    """State transitions of the contract create/edit form.

    Every transition goes through :meth:`recompute`, so ``end_date`` always
    reflects the current start date and duration.
    """

    def __init__(self, default_months: int | None = None):
        self.default_months = default_months or settings.DEFAULT_CONTRACT_MONTHS

    def new_form(self) -> ContractForm:
        return ContractForm(number_of_months=self.default_months)

    def recompute(self, form: ContractForm) -> ContractForm:
        return form.model_copy(
            update={"end_date": compute_end_date(form.start_date, form.number_of_months)}
        )

    def load(self, contract: Any) -> ContractForm:
        start_date = to_iso(read_field(contract, "start_date"))
        end_date = to_iso(read_field(contract, "end_date"))
        months = compute_months_between(start_date, end_date, default=self.default_months)
        status = status_of(contract)
        if status not in _CONTRACT_STATUSES:
            status = ContractStatus.ACTIVE.value
        form = ContractForm(
            contract_number=read_field(contract, "contract_number"),
            tenant_id=normalize_id(read_field(contract, "tenant_id")),
            property_id=normalize_id(read_field(contract, "property_id")),
            rent_amount=safe_amount(read_field(contract, "rent_amount")),
            start_date=start_date,
            number_of_months=months,
            terms=read_field(contract, "terms") or "",
            status=status,
        )
        return self.recompute(form)

    def change(self, form: ContractForm, *, is_edit: bool = False, **changes) -> ContractForm:
        """Apply field edits from the user and re-derive the end date.

        ``end_date`` is read-only and any value supplied for it is dropped.
        Picking another tenant while creating a contract clears the property.
        """
        if "end_date" in changes:
            logger.debug("Ignoring user supplied end_date %r", changes["end_date"])
            changes.pop("end_date")

        if "tenant_id" in changes:
            changes["tenant_id"] = normalize_id(changes["tenant_id"])
            if not is_edit and changes["tenant_id"] != form.tenant_id:
                changes.setdefault("property_id", "")

        data = form.model_dump()
        data.update(changes)
        return self.recompute(ContractForm.model_validate(data))

    def validate(
        self,
        form: ContractForm,
        contracts: Iterable[Any] = (),
        as_of_date: DateLike = None,
        editing_contract_id: Any = None,
    ) -> Dict[str, str]:
        errors: Dict[str, str] = {}

        if not form.tenant_id:
            errors["tenant_id"] = "Tenant selection is required"
        if not form.property_id:
            errors["property_id"] = "Property selection is required"
        elif not is_property_available(
            form.property_id, contracts, as_of_date, exclude_contract_id=editing_contract_id
        ):
            errors["property_id"] = "Property is already leased under an active contract"
        if form.rent_amount < 0:
            errors["rent_amount"] = "Rent must be positive"
        if parse_iso_date(form.start_date) is None:
            errors["start_date"] = "Start date is required"
        if form.number_of_months is None:
            errors["number_of_months"] = "Number of months is required"
        elif form.number_of_months < 1:
            errors["number_of_months"] = "Must be at least 1 month"
        if not form.end_date:
            errors["end_date"] = "End date is required"
        if not form.terms.strip():
            errors["terms"] = "Contract terms are required"

        return errors

    def to_payload(self, form: ContractForm) -> dict:
        # the backend prefers number_of_months but receives the derived end_date too
        return self.recompute(form).model_dump(mode="json", exclude_none=True)


class ExpenseFormService:
    def recompute(self, form: ExpenseForm) -> ExpenseForm:
        quantity = form.quantity or Decimal("0")
        unit_price = form.unit_price or Decimal("0")
        return form.model_copy(update={"amount": quantity * unit_price})

    def load(self, expense: Any) -> ExpenseForm:
        amount = safe_amount(read_field(expense, "amount"))
        quantity = safe_amount(read_field(expense, "quantity")) or Decimal("1")
        unit_price = safe_amount(read_field(expense, "unit_price"))
        if not unit_price:
            try:
                unit_price = amount / quantity
            except (InvalidOperation, ZeroDivisionError):
                unit_price = Decimal("0")
        return ExpenseForm(quantity=quantity, unit_price=unit_price, amount=amount)


class RentFormService:
    def contract_options(self, contracts: Iterable[Any]) -> List[Any]:
        return [c for c in contracts if status_of(c) == ContractStatus.ACTIVE.value]

    def find_contract(self, contracts: Iterable[Any], contract_id: Any) -> Optional[Any]:
        wanted = normalize_id(contract_id)
        if not wanted:
            return None
        return next(
            (c for c in contracts if normalize_id(read_field(c, "id")) == wanted), None
        )

    def preview(self, payment_amount: Any, contract: Any = None) -> PaymentClassification:
        rent = read_field(contract, "rent_amount") if contract is not None else 0
        return classify_payment(rent, payment_amount)

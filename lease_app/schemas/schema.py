from __future__ import annotations

from decimal import Decimal
from typing import Dict, Generic, List, Optional, TypeVar, Union

from pydantic import BaseModel, Field, field_validator, model_validator

from core.date_helper import DEFAULT_CONTRACT_MONTHS, to_iso
from core.normalizer import normalize_id, safe_amount
from core.validate_enum import validate_enum
from models.enums import (
    ContractStatus,
    ExpenseType,
    PaymentLabel,
    PaymentMethod,
    PaymentStatus,
    PropertyStatus,
    TenantStatus,
)

T = TypeVar("T")


class BackendRecord(BaseModel):
    """Snapshot of a row returned by the external REST backend."""

    id: str
    model_config = {"from_attributes": True, "extra": "ignore"}

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, v):
        return normalize_id(v)


class PropertyOut(BackendRecord):
    name: str
    property_type_id: Optional[str] = None
    location_id: Optional[str] = None
    size: str = ""
    status: PropertyStatus = PropertyStatus.AVAILABLE
    monthly_rent: Decimal = Decimal("0")
    date_added: str = ""

    @model_validator(mode="before")
    @classmethod
    def flatten_relations(cls, obj):
        if not isinstance(obj, dict):
            return obj
        data = dict(obj)
        for ref in ("property_type", "location"):
            nested = data.get(ref)
            if not data.get(f"{ref}_id") and isinstance(nested, dict):
                data[f"{ref}_id"] = nested.get("id")
        if not data.get("date_added"):
            data["date_added"] = data.get("created_at")
        return data

    @field_validator("property_type_id", "location_id", mode="before")
    @classmethod
    def stringify_refs(cls, v):
        return normalize_id(v) or None

    @field_validator("size", mode="before")
    @classmethod
    def size_as_text(cls, v):
        return "" if v is None else str(v)

    @field_validator("status", mode="before")
    @classmethod
    def check_status(cls, v):
        return validate_enum(
            v, PropertyStatus, field="property status", default=PropertyStatus.AVAILABLE
        )

    @field_validator("monthly_rent", mode="before")
    @classmethod
    def coerce_rent(cls, v):
        return safe_amount(v)

    @field_validator("date_added", mode="before")
    @classmethod
    def iso_date(cls, v):
        return to_iso(v)


class TenantOut(BackendRecord):
    name: str
    phone: str = ""
    id_number: str = ""
    business_type: str = ""
    property_ids: List[str] = Field(default_factory=list)
    status: TenantStatus = TenantStatus.ACTIVE

    @model_validator(mode="before")
    @classmethod
    def property_ids_from_relation(cls, obj):
        if isinstance(obj, dict) and isinstance(obj.get("properties"), list):
            return {
                **obj,
                "property_ids": [p.get("id") for p in obj["properties"] if isinstance(p, dict)],
            }
        return obj

    @field_validator("phone", "id_number", "business_type", mode="before")
    @classmethod
    def none_as_blank(cls, v):
        return "" if v is None else str(v)

    @field_validator("property_ids", mode="before")
    @classmethod
    def stringify_property_ids(cls, v):
        if not v:
            return []
        return [normalize_id(item) for item in v if normalize_id(item)]

    @field_validator("status", mode="before")
    @classmethod
    def check_status(cls, v):
        return validate_enum(
            v, TenantStatus, field="tenant status", default=TenantStatus.ACTIVE
        )


class ContractOut(BackendRecord):
    contract_number: Optional[str] = None
    tenant_id: str
    property_id: str
    rent_amount: Decimal = Decimal("0")
    start_date: str = ""
    end_date: str = ""
    terms: str = ""
    # unknown statuses are kept as text and never govern a lease
    status: Union[ContractStatus, str] = ContractStatus.ACTIVE

    @field_validator("tenant_id", "property_id", mode="before")
    @classmethod
    def stringify_refs(cls, v):
        return normalize_id(v)

    @field_validator("rent_amount", mode="before")
    @classmethod
    def coerce_rent(cls, v):
        return safe_amount(v)

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def iso_dates(cls, v):
        return to_iso(v)

    @field_validator("terms", mode="before")
    @classmethod
    def none_as_blank(cls, v):
        return "" if v is None else str(v)

    @field_validator("status", mode="before")
    @classmethod
    def check_status(cls, v):
        try:
            return validate_enum(v, ContractStatus, field="contract status")
        except ValueError:
            return "" if v is None else str(v).strip().lower()


class RentPaymentOut(BackendRecord):
    tenant_id: str
    contract_id: Optional[str] = None
    bank_account_id: Optional[str] = None
    amount: Decimal = Decimal("0")
    month: str = ""
    payment_date: str = ""
    payment_method: PaymentMethod = PaymentMethod.CASH
    bank_receipt: Optional[str] = None
    status: PaymentStatus = PaymentStatus.PENDING

    @field_validator("tenant_id", mode="before")
    @classmethod
    def stringify_tenant(cls, v):
        return normalize_id(v)

    @field_validator("contract_id", "bank_account_id", mode="before")
    @classmethod
    def stringify_refs(cls, v):
        return normalize_id(v) or None

    @field_validator("amount", mode="before")
    @classmethod
    def coerce_amount(cls, v):
        return safe_amount(v)

    @field_validator("month", mode="before")
    @classmethod
    def blank_month(cls, v):
        return v or ""

    @field_validator("payment_date", mode="before")
    @classmethod
    def iso_date(cls, v):
        return to_iso(v)

    @field_validator("payment_method", mode="before")
    @classmethod
    def check_method(cls, v):
        return validate_enum(
            v, PaymentMethod, field="payment method", default=PaymentMethod.CASH
        )

    @field_validator("status", mode="before")
    @classmethod
    def check_status(cls, v):
        return validate_enum(
            v, PaymentStatus, field="payment status", default=PaymentStatus.PENDING
        )

    @model_validator(mode="after")
    def month_from_payment_date(self):
        if not self.month and self.payment_date:
            self.month = self.payment_date[:7]
        return self


class ConstructionExpenseOut(BackendRecord):
    project_id: str
    type: ExpenseType = ExpenseType.MATERIALS
    material_id: Optional[str] = None
    quantity: Optional[Decimal] = None
    unit_price: Optional[Decimal] = None
    amount: Decimal = Decimal("0")
    date: str = ""
    description: str = ""

    @field_validator("project_id", mode="before")
    @classmethod
    def stringify_project(cls, v):
        return normalize_id(v)

    @field_validator("material_id", mode="before")
    @classmethod
    def stringify_material(cls, v):
        return normalize_id(v) or None

    @field_validator("amount", mode="before")
    @classmethod
    def coerce_amount(cls, v):
        return safe_amount(v)

    @field_validator("date", mode="before")
    @classmethod
    def iso_date(cls, v):
        return to_iso(v)

    @field_validator("description", mode="before")
    @classmethod
    def none_as_blank(cls, v):
        return "" if v is None else str(v)


class BankAccountOut(BackendRecord):
    account_name: str = ""
    bank_name: str = ""
    account_number: str = ""
    opening_balance: Decimal = Decimal("0")

    @field_validator("opening_balance", mode="before")
    @classmethod
    def coerce_balance(cls, v):
        return safe_amount(v)


class Page(BaseModel, Generic[T]):
    data: List[T] = Field(default_factory=list)
    current_page: int = 1
    last_page: int = 1
    per_page: int = 15
    total: int = 0
    from_: Optional[int] = Field(None, alias="from")
    to: Optional[int] = None
    model_config = {"populate_by_name": True}


# Contract term


class ContractTermIn(BaseModel):
    start_date: str
    number_of_months: Optional[int] = Field(DEFAULT_CONTRACT_MONTHS)

    @field_validator("number_of_months", mode="before")
    @classmethod
    def blank_months(cls, v):
        return None if v is None or v == "" else v


class ContractTermOut(BaseModel):
    start_date: str
    number_of_months: Optional[int] = None
    end_date: str


class ContractMonthsIn(BaseModel):
    start_date: str
    end_date: str


class ContractMonthsOut(BaseModel):
    start_date: str
    end_date: str
    number_of_months: int


class ContractForm(BaseModel):
    """Editable state of the contract form.

    ``end_date`` is derived from ``start_date`` and ``number_of_months`` and
    is never taken from user input.
    """

    contract_number: Optional[str] = None
    tenant_id: str = ""
    property_id: str = ""
    rent_amount: Decimal = Decimal("0")
    start_date: str = ""
    number_of_months: Optional[int] = DEFAULT_CONTRACT_MONTHS
    end_date: str = ""
    terms: str = ""
    status: ContractStatus = ContractStatus.ACTIVE

    @field_validator("tenant_id", "property_id", mode="before")
    @classmethod
    def stringify_refs(cls, v):
        return normalize_id(v)

    @field_validator("contract_number", mode="before")
    @classmethod
    def stringify_number(cls, v):
        return normalize_id(v) or None

    @field_validator("rent_amount", mode="before")
    @classmethod
    def coerce_rent(cls, v):
        return safe_amount(v)

    @field_validator("number_of_months", mode="before")
    @classmethod
    def blank_months(cls, v):
        return None if v is None or v == "" else v

    @field_validator("start_date", mode="before")
    @classmethod
    def iso_start(cls, v):
        return to_iso(v)


class ContractValidationIn(BaseModel):
    form: ContractForm
    contract_id: Optional[str] = None
    as_of: Optional[str] = None


class ContractValidationOut(BaseModel):
    valid: bool
    errors: Dict[str, str] = Field(default_factory=dict)
    form: ContractForm


class AvailablePropertiesOut(BaseModel):
    as_of: str
    available: List[PropertyOut] = Field(default_factory=list)
    leased: List[PropertyOut] = Field(default_factory=list)


class ContractStats(BaseModel):
    total: int = 0
    active: int = 0
    expired: int = 0
    terminated: int = 0
    lapsed: int = 0
    total_monthly_rent: Decimal = Decimal("0")


# Payments


class PaymentClassification(BaseModel):
    is_full: bool
    is_partial: bool
    remaining: Decimal
    label: PaymentLabel


class ClassifyPaymentIn(BaseModel):
    amount: Decimal
    contract_id: Optional[str] = None
    rent_amount: Optional[Decimal] = None

    @field_validator("amount", "rent_amount", mode="before")
    @classmethod
    def coerce_money(cls, v):
        return v if v is None else safe_amount(v)

    @model_validator(mode="after")
    def needs_rent_source(self):
        if self.contract_id is None and self.rent_amount is None:
            raise ValueError("Either contract_id or rent_amount is required")
        return self


class RentSummary(BaseModel):
    total_received: Decimal = Decimal("0")
    total_pending: Decimal = Decimal("0")
    total_overdue: Decimal = Decimal("0")
    paid_count: int = 0
    pending_count: int = 0
    overdue_count: int = 0
    partial_count: int = 0


class ContractReconciliation(BaseModel):
    contract_id: str
    month: str
    rent_amount: Decimal
    settled: Decimal
    classification: PaymentClassification
    payments: List[RentPaymentOut] = Field(default_factory=list)


class PendingPaymentsOut(BaseModel):
    payments: List[RentPaymentOut] = Field(default_factory=list)
    summary: RentSummary


class DashboardSummary(BaseModel):
    as_of: str
    month: str
    total_properties: int = 0
    occupied_properties: int = 0
    vacant_properties: int = 0
    total_monthly_rent: Decimal = Decimal("0")
    rent_received: Decimal = Decimal("0")
    rent_pending: Decimal = Decimal("0")
    overdue_payments: int = 0
    total_bank_balance: Decimal = Decimal("0")
    construction_expenses: Decimal = Decimal("0")


# Expenses


class ExpenseForm(BaseModel):
    quantity: Optional[Decimal] = Decimal("1")
    unit_price: Optional[Decimal] = Decimal("0")
    amount: Decimal = Decimal("0")

    @field_validator("quantity", "unit_price", mode="before")
    @classmethod
    def coerce_optional(cls, v):
        return None if v is None or v == "" else safe_amount(v)

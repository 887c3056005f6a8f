from decimal import Decimal

import pytest
from pydantic import ValidationError

from core.paginate import PaginatePage
from models.enums import ContractStatus, PaymentMethod, PaymentStatus, PropertyStatus
from schemas.schema import (
    ClassifyPaymentIn,
    ContractOut,
    Page,
    PropertyOut,
    RentPaymentOut,
    TenantOut,
)


def test_property_flattens_relations_and_dates():
    prop = PropertyOut.model_validate(
        {
            "id": 4,
            "name": "Kiosk",
            "property_type": {"id": 2, "name": "Shop"},
            "location": {"id": 9, "name": "Mwanza"},
            "size": 40,
            "status": "OCCUPIED",
            "monthly_rent": "abc",
            "created_at": "2024-02-01T10:00:00.000000Z",
        }
    )
    assert prop.id == "4"
    assert prop.property_type_id == "2"
    assert prop.location_id == "9"
    assert prop.size == "40"
    assert prop.status is PropertyStatus.OCCUPIED
    assert prop.monthly_rent == Decimal("0")
    assert prop.date_added == "2024-02-01"


def test_tenant_property_ids_come_from_relation():
    tenant = TenantOut.model_validate(
        {"id": 1, "name": "Baraka", "phone": None, "properties": [{"id": 3}, {"id": 8}]}
    )
    assert tenant.property_ids == ["3", "8"]
    assert tenant.phone == ""


def test_contract_normalises_ids_and_dates():
    contract = ContractOut.model_validate(
        {
            "id": 12,
            "tenant_id": 3,
            "property_id": 8,
            "rent_amount": "1,200",
            "start_date": "2024-01-01T00:00:00Z",
            "end_date": "2024-06-30",
            "terms": None,
            "status": "Active",
        }
    )
    assert (contract.id, contract.tenant_id, contract.property_id) == ("12", "3", "8")
    assert contract.rent_amount == Decimal("1200")
    assert contract.start_date == "2024-01-01"
    assert contract.status is ContractStatus.ACTIVE


def test_contract_keeps_unknown_status_as_text():
    archived = ContractOut.model_validate({"id": 1, "tenant_id": 1, "property_id": 1, "status": "Archived"})
    missing = ContractOut.model_validate({"id": 2, "tenant_id": 1, "property_id": 1, "status": None})
    assert archived.status == "archived"
    assert missing.status == ""
    assert ContractOut.model_validate({"id": 3, "tenant_id": 1, "property_id": 1}).status is ContractStatus.ACTIVE


def test_payment_defaults_status_and_derives_month():
    payment = RentPaymentOut.model_validate(
        {"id": 1, "tenant_id": 2, "contract_id": None, "amount": "500", "payment_date": "2024-06-02", "status": None}
    )
    assert payment.status is PaymentStatus.PENDING
    assert payment.month == "2024-06"
    assert payment.contract_id is None
    assert payment.payment_method is PaymentMethod.CASH


def test_payment_keeps_explicit_month():
    payment = RentPaymentOut.model_validate(
        {"id": 1, "tenant_id": 2, "amount": 500, "month": "2024-05", "payment_date": "2024-06-02"}
    )
    assert payment.month == "2024-05"


def test_classify_input_needs_a_rent_source():
    with pytest.raises(ValidationError):
        ClassifyPaymentIn(amount=100)
    assert ClassifyPaymentIn(amount="100", rent_amount="250").rent_amount == Decimal("250")


def test_page_reads_from_alias():
    page = Page[PropertyOut].model_validate({"data": [], "from": 16, "to": 30})
    assert page.from_ == 16


def test_paginate_parses_envelope():
    page = PaginatePage().parse(
        {
            "data": [{"id": 1, "name": "A"}, {"id": 2, "name": "B"}],
            "current_page": "2",
            "last_page": 3,
            "per_page": 2,
            "total": 6,
            "from": 3,
            "to": 4,
        },
        PropertyOut,
    )
    assert [p.id for p in page.data] == ["1", "2"]
    assert (page.current_page, page.last_page, page.total, page.from_, page.to) == (2, 3, 6, 3, 4)


def test_paginate_wraps_bare_lists_and_tolerates_junk():
    page = PaginatePage().parse([{"id": 1, "name": "A"}], PropertyOut)
    assert page.total == 1 and page.last_page == 1

    page = PaginatePage().parse({"data": None, "current_page": "x"}, PropertyOut)
    assert page.data == [] and page.current_page == 1

    assert PaginatePage().parse(None, PropertyOut).data == []


async def test_collect_walks_every_page():
    pages = {
        1: Page[PropertyOut](data=[PropertyOut(id=1, name="A")], current_page=1, last_page=2),
        2: Page[PropertyOut](data=[PropertyOut(id=2, name="B")], current_page=2, last_page=2),
    }
    seen = []

    async def fetch_page(number):
        seen.append(number)
        return pages[number]

    items = await PaginatePage().collect(fetch_page)
    assert [p.id for p in items] == ["1", "2"]
    assert seen == [1, 2]

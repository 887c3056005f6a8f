from schemas.schema import ContractOut, PropertyOut, TenantOut
from services.availability_service import (
    available_properties,
    double_leased_property_ids,
    is_property_available,
    leased_properties,
    leased_property_ids,
)

AS_OF = "2024-06-15"


def contract(id, property_id, end_date="2024-12-31", status="active", tenant_id=1):
    return ContractOut(
        id=id,
        tenant_id=tenant_id,
        property_id=property_id,
        rent_amount=1000,
        start_date="2024-01-01",
        end_date=end_date,
        status=status,
    )


def prop(id):
    return PropertyOut(id=id, name=f"Unit {id}")


def ids(items):
    return [p.id for p in items]


def test_active_unexpired_contract_leases_its_property():
    assert leased_property_ids([contract(1, 100)], AS_OF) == {"100"}


def test_expired_but_still_active_contract_does_not_block():
    assert leased_property_ids([contract(1, 100, end_date="2024-06-14")], AS_OF) == set()


def test_contract_ending_today_still_leases():
    assert leased_property_ids([contract(1, 100, end_date=AS_OF)], AS_OF) == {"100"}


def test_terminated_and_expired_contracts_are_ignored():
    contracts = [contract(1, 100, status="terminated"), contract(2, 101, status="expired")]
    assert leased_property_ids(contracts, AS_OF) == set()


def test_excluded_contract_does_not_count():
    contracts = [contract(1, 100), contract(2, 101)]
    assert leased_property_ids(contracts, AS_OF, exclude_contract_id=1) == {"101"}


def test_raw_backend_rows_work_too():
    rows = [{"id": 1, "property_id": 100, "status": "ACTIVE", "end_date": "2024-12-31"}]
    assert leased_property_ids(rows, AS_OF) == {"100"}


def test_create_mode_hides_leased_property():
    properties = [prop(1), prop(2)]
    contracts = [contract("C1", 1)]
    assert ids(available_properties(properties, contracts, AS_OF)) == ["2"]
    assert ids(leased_properties(properties, contracts, AS_OF)) == ["1"]


def test_edit_mode_offers_the_contracts_own_property():
    properties = [prop(1), prop(2)]
    c1 = contract("C1", 1)
    assert ids(available_properties(properties, [c1], AS_OF, editing_contract=c1)) == ["1", "2"]
    assert leased_properties(properties, [c1], AS_OF, editing_contract=c1) == []


def test_editing_one_contract_still_hides_other_leases():
    properties = [prop(1), prop(2), prop(3)]
    c1, c2 = contract("C1", 1), contract("C2", 2)
    assert ids(available_properties(properties, [c1, c2], AS_OF, editing_contract=c1)) == ["1", "3"]


def test_tenant_property_list_restricts_choices():
    properties = [prop(1), prop(2), prop(3)]
    tenant = TenantOut(id=7, name="Amina", property_ids=[2, 3])
    contracts = [contract("C1", 3)]
    assert ids(available_properties(properties, contracts, AS_OF, tenant=tenant)) == ["2"]


def test_tenant_without_property_list_sees_everything_free():
    properties = [prop(1), prop(2)]
    tenant = TenantOut(id=7, name="Amina")
    assert ids(available_properties(properties, [], AS_OF, tenant=tenant)) == ["1", "2"]


def test_double_leasing_is_reported_not_filtered():
    contracts = [contract("C1", 1), contract("C2", 1), contract("C3", 2)]
    assert double_leased_property_ids(contracts, AS_OF) == {"1"}
    assert leased_property_ids(contracts, AS_OF) == {"1", "2"}


def test_is_property_available():
    contracts = [contract("C1", 1)]
    assert not is_property_available(1, contracts, AS_OF)
    assert is_property_available(1, contracts, AS_OF, exclude_contract_id="C1")
    assert is_property_available(2, contracts, AS_OF)


def test_property_is_released_when_its_lease_ends_or_is_terminated():
    properties = [prop("P1"), prop("P2")]
    c1 = contract("C1", "P1")
    assert ids(available_properties(properties, [c1], AS_OF)) == ["P2"]

    terminated = c1.model_copy(update={"status": "terminated"})
    assert ids(available_properties(properties, [terminated], AS_OF)) == ["P1", "P2"]

    lapsed = c1.model_copy(update={"end_date": "2024-06-14"})
    assert ids(available_properties(properties, [lapsed], AS_OF)) == ["P1", "P2"]

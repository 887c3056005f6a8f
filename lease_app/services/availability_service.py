"""Which properties are leased, and which can be offered on a contract form.

A property counts as leased while some contract on it is ``active`` and its
end date has not passed. The operator-maintained ``Property.status`` field is
not consulted.
"""

from collections import Counter
from typing import Any, Iterable, List, Optional, Set, TypeVar

from core.date_helper import DateLike, today_iso, to_iso
from core.normalizer import normalize_id, read_field, status_of
from models.enums import ContractStatus

P = TypeVar("P")


def _governing_contracts(
    contracts: Iterable[Any], as_of: str, exclude_contract_id: Optional[str]
):
    for contract in contracts:
        if exclude_contract_id and normalize_id(read_field(contract, "id")) == exclude_contract_id:
            continue
        if status_of(contract) != ContractStatus.ACTIVE.value:
            continue
        end_date = to_iso(read_field(contract, "end_date"))
        # ISO dates order lexically
        if not end_date or end_date < as_of:
            continue
        yield contract


def leased_property_ids(
    contracts: Iterable[Any],
    as_of_date: DateLike = None,
    exclude_contract_id: Any = None,
) -> Set[str]:
    as_of = today_iso(as_of_date)
    exclude = normalize_id(exclude_contract_id) or None
    return {
        normalize_id(read_field(c, "property_id"))
        for c in _governing_contracts(contracts, as_of, exclude)
        if normalize_id(read_field(c, "property_id"))
    }


def double_leased_property_ids(
    contracts: Iterable[Any], as_of_date: DateLike = None
) -> Set[str]:
    """Properties already governed by more than one active, unexpired contract.

    Reporting only; the availability filter does not act on it.
    """
    as_of = today_iso(as_of_date)
    counts = Counter(
        normalize_id(read_field(c, "property_id"))
        for c in _governing_contracts(contracts, as_of, None)
    )
    return {pid for pid, n in counts.items() if pid and n > 1}


def available_properties(
    properties: Iterable[P],
    contracts: Iterable[Any],
    as_of_date: DateLike = None,
    *,
    editing_contract: Any = None,
    tenant: Any = None,
) -> List[P]:
    """Properties selectable on the contract form.

    A property is offered when nobody else leases it, or when it is the one
    already attached to ``editing_contract``. When ``tenant`` has pre-assigned
    ``property_ids`` the choice is limited to those.
    """
    editing_id = normalize_id(read_field(editing_contract, "id")) if editing_contract else None
    current_property_id = (
        normalize_id(read_field(editing_contract, "property_id")) if editing_contract else None
    )
    leased = leased_property_ids(contracts, as_of_date, exclude_contract_id=editing_id)

    tenant_property_ids: Set[str] = set()
    if tenant is not None:
        tenant_property_ids = {
            normalize_id(pid) for pid in (read_field(tenant, "property_ids") or [])
        }

    offered = []
    for prop in properties:
        prop_id = normalize_id(read_field(prop, "id"))
        if current_property_id and prop_id == current_property_id:
            offered.append(prop)
            continue
        if tenant_property_ids and prop_id not in tenant_property_ids:
            continue
        if prop_id not in leased:
            offered.append(prop)
    return offered


def leased_properties(
    properties: Iterable[P],
    contracts: Iterable[Any],
    as_of_date: DateLike = None,
    *,
    editing_contract: Any = None,
) -> List[P]:
    editing_id = normalize_id(read_field(editing_contract, "id")) if editing_contract else None
    current_property_id = (
        normalize_id(read_field(editing_contract, "property_id")) if editing_contract else None
    )
    leased = leased_property_ids(contracts, as_of_date, exclude_contract_id=editing_id)
    return [
        prop
        for prop in properties
        if normalize_id(read_field(prop, "id")) in leased
        and normalize_id(read_field(prop, "id")) != current_property_id
    ]


def is_property_available(
    property_id: Any,
    contracts: Iterable[Any],
    as_of_date: DateLike = None,
    exclude_contract_id: Any = None,
) -> bool:
    return normalize_id(property_id) not in leased_property_ids(
        contracts, as_of_date, exclude_contract_id
    )

from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Iterable, Mapping

ZERO = Decimal("0")


def safe_amount(value: Any) -> Decimal:
    """Coerce a stored monetary value to `Decimal`, substituting zero.

    Numbers pass through, text is parsed, and anything that is not a finite
    number (``None``, ``"abc"``, ``NaN``, ``inf``) becomes ``Decimal("0")``.
    """
    if value is None or isinstance(value, bool):
        return ZERO

    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float)):
        amount = Decimal(str(value))
    else:
        text = str(value).strip().replace(",", "")
        if not text:
            return ZERO
        try:
            amount = Decimal(text)
        except InvalidOperation:
            return ZERO

    return amount if amount.is_finite() else ZERO


def read_field(item: Any, key: str) -> Any:
    if isinstance(item, Mapping):
        return item.get(key)
    return getattr(item, key, None)


def safe_sum(
    items: Iterable[Any],
    key: str = "amount",
    where: Callable[[Any], bool] | None = None,
) -> Decimal:
    total = ZERO
    for item in items:
        if where is not None and not where(item):
            continue
        total += safe_amount(read_field(item, key))
    return total


def normalize_id(value: Any) -> str:
    if value is None or value == "":
        return ""
    return str(value)


def status_of(item: Any) -> str:
    """Lower-case status string of a record, whether it holds an enum or text."""
    status = read_field(item, "status")
    status = getattr(status, "value", status)
    return str(status).strip().lower() if status else ""

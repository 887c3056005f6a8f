from enum import Enum
from typing import Optional, Type, TypeVar

E = TypeVar("E", bound=Enum)


def validate_enum(
    value: str | Enum | None,
    enum_cls: Type[E],
    *,
    field: str,
    default: Optional[E] = None,
) -> E:
    """Resolve a backend status string to ``enum_cls`` by value or by name.

    Blank values resolve to ``default`` when one is given; unknown values
    raise ``ValueError`` listing the allowed choices.
    """
    if isinstance(value, enum_cls):
        return value

    if value is None or (isinstance(value, str) and not value.strip()):
        if default is not None:
            return default
        raise ValueError(f"{field} is required")

    if isinstance(value, str):
        raw = value.strip()
        try:
            return enum_cls(raw.lower())
        except ValueError:
            pass

        try:
            return enum_cls[raw.upper()]
        except KeyError:
            pass

    allowed = ", ".join(e.value for e in enum_cls)
    raise ValueError(f"Invalid {field}: {value}. Allowed values: {allowed}")

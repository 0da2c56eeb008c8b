"""Utility functions for handling enum/string values safely."""
from enum import Enum
from typing import Type, TypeVar

E = TypeVar("E", bound=Enum)


def enum_to_str(v):
    """
    Safely convert enum or string value to string.

    Examples:
        >>> enum_to_str(LeaveType.ANNUAL)
        'annual'
        >>> enum_to_str('annual')
        'annual'
        >>> enum_to_str(None)
        None
    """
    if v is None:
        return None
    if isinstance(v, Enum):
        return v.value
    return str(v)


def coerce_enum(enum_cls: Type[E], v) -> E:
    """
    Convert an enum member or its string value to a member of enum_cls.

    Raises:
        ValueError: If v is not a member or a member's value
    """
    if isinstance(v, enum_cls):
        return v
    return enum_cls(enum_to_str(v))

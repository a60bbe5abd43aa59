"""Small general-purpose helpers."""

import copy
import secrets
import time
from enum import Enum
from typing import Any, TypeVar

T = TypeVar("T")


def generate_id() -> str:
    """Generate a unique id for a filter row.

    Returns:
        A string of the form "<epoch-millis>-<9 random chars>"
    """
    return f"{int(time.time() * 1000)}-{secrets.token_hex(5)[:9]}"


def deep_clone(obj: T) -> T:
    """Return a deep copy of obj, preserving its class."""
    return copy.deepcopy(obj)


def retrieve_operator_value(enum_cls: type[Enum], enum_value: Any) -> str:
    """Find the member name whose value equals enum_value.

    Args:
        enum_cls: The enum class to search
        enum_value: The member value (e.g. a display label) to look up

    Returns:
        The member name, or an empty string if no member has that value
    """
    for member in enum_cls:
        if member.value == enum_value:
            return member.name
    return ""

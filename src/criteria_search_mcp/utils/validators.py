"""Input validation utilities for datasets, URLs and criteria values."""

import re
from typing import Any

from ..constants import NUMERIC_INPUT_PATTERN

_URL_PATTERN = re.compile(r"^(?:\w+:)?//([^\s.]+\.\S{2}|localhost[:?\d]*)\S*$")
_NUMERIC_INPUT = re.compile(NUMERIC_INPUT_PATTERN)


def is_url(url: str) -> bool:
    """Validate URL format.

    Args:
        url: The URL to validate

    Returns:
        True if the string looks like an absolute or protocol-relative URL
    """
    if not isinstance(url, str):
        return False
    return _URL_PATTERN.fullmatch(url) is not None


def is_numeric_input(value: str) -> bool:
    """Check that a (possibly partially typed) value is numeric.

    Empty strings, "-" and "1." are accepted so that a value can be typed
    character by character.

    Args:
        value: The raw value entered for a GT/LT filter

    Returns:
        True if value is numeric input
    """
    return isinstance(value, str) and _NUMERIC_INPUT.fullmatch(value) is not None


def validate_records(data: Any) -> tuple[bool, list[str]]:
    """Validate that data is a non-empty list of key/value records.

    Args:
        data: Decoded JSON payload

    Returns:
        Tuple of (is_valid, list_of_errors)
    """
    errors = []

    if not isinstance(data, list):
        errors.append(f"Expected a JSON array, got {type(data).__name__}")
        return False, errors

    if not data:
        errors.append("Array cannot be empty")
        return False, errors

    for idx, record in enumerate(data):
        if not isinstance(record, dict):
            errors.append(f"Item {idx}: Expected an object, got {type(record).__name__}")

    return len(errors) == 0, errors


def validate_index(index: Any) -> bool:
    """Validate a collection index supplied by a caller.

    Args:
        index: The index to validate

    Returns:
        True if index is an int (bools are rejected)
    """
    return isinstance(index, int) and not isinstance(index, bool)

"""Utility modules for criteria search."""

from .decorators import handle_tool_errors
from .helpers import deep_clone, generate_id, retrieve_operator_value
from .validators import is_numeric_input, is_url, validate_index, validate_records

__all__ = [
    "deep_clone",
    "generate_id",
    "handle_tool_errors",
    "is_numeric_input",
    "is_url",
    "retrieve_operator_value",
    "validate_index",
    "validate_records",
]

"""Common exceptions for the criteria-search-mcp package."""

from typing import Optional


class CriteriaSearchError(Exception):
    """Base class for all package errors."""


class InvalidInputError(CriteriaSearchError):
    """Raised when a caller breaks a structural contract (wrong types, bad indices)."""

    def __init__(self, message: str, details: Optional[dict] = None) -> None:
        super().__init__(message)
        self.details = details or {}


class CriteriaNotFoundError(InvalidInputError):
    """Raised when a criteria list or filter index does not exist."""

    def __init__(self, criteria_list_index: int, index: Optional[int] = None) -> None:
        if index is None:
            message = f"Criteria list at index {criteria_list_index} not found"
        else:
            message = f"Filter at index {index} not found"
        super().__init__(message, {"criteria_list_index": criteria_list_index, "index": index})
        self.criteria_list_index = criteria_list_index
        self.index = index


class NoColumnsError(InvalidInputError):
    """Raised when a new filter is requested but no dataset columns are known."""

    def __init__(self, message: str = "No columns available to create new filter") -> None:
        super().__init__(message)


class DataLoadError(CriteriaSearchError):
    """Raised when a dataset cannot be loaded from a URL."""

    def __init__(self, message: str, url: Optional[str] = None) -> None:
        super().__init__(message)
        self.url = url


class InvalidUrlError(DataLoadError):
    """Raised when the dataset URL is malformed."""


class DataParseError(DataLoadError):
    """Raised when a response body is not a non-empty array of records."""

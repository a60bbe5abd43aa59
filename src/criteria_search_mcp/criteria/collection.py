"""
Ordered criteria collections.

``Criteria`` is a generic insertion-ordered sequence. ``CriteriaList`` holds the
filters of one OR-group and ``CriteriaGroup`` holds the OR-groups that are
combined with AND.
"""

import logging
from typing import Any, Generic, Iterator, Optional, TypeVar

from ..exceptions import InvalidInputError
from .models import Filter

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Criteria(Generic[T]):
    """Generic index-addressable collection of criteria items."""

    def __init__(self) -> None:
        self._terms: list[Optional[T]] = []

    def all(self) -> list[Optional[T]]:
        """Return a copy of the items; mutating it never affects the collection."""
        return list(self._terms)

    def size(self) -> int:
        return len(self._terms)

    def clear(self) -> None:
        self._terms = []

    def get(self, index: int) -> Optional[T]:
        """Return the item at index, or None when index is out of range."""
        if 0 <= index < len(self._terms):
            return self._terms[index]
        return None

    def set(self, index: int, value: T) -> None:
        """Overwrite the item at index.

        Setting past the end grows the collection; the gap is filled with
        None placeholders. Negative indices are ignored.
        """
        if index < 0:
            logger.debug(f"Ignoring set() at negative index {index}")
            return

        if index >= len(self._terms):
            self._terms.extend([None] * (index + 1 - len(self._terms)))
        self._terms[index] = value

    def add(self, value: T) -> None:
        self._terms.append(value)

    def insert(self, index: int, value: T) -> None:
        """Insert value immediately after index (index -1 prepends).

        Out-of-range indices clamp to the nearest end.
        """
        self._terms.insert(index + 1, value)

    def remove(self, index: int) -> None:
        """Remove the item at index; out-of-range indices are a no-op."""
        if 0 <= index < len(self._terms):
            del self._terms[index]

    def __len__(self) -> int:
        return len(self._terms)

    def __iter__(self) -> Iterator[Optional[T]]:
        return iter(self.all())

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._terms == other._terms  # type: ignore[attr-defined]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._terms!r})"


class CriteriaList(Criteria[Filter]):
    """Filters of which at least one must match (OR)."""

    def valid_filters(self) -> list[Filter]:
        """Filters that take part in evaluation; placeholders and blank rows are skipped."""
        return [term for term in self._terms if isinstance(term, Filter) and term.is_valid()]

    def to_list(self) -> list[dict[str, Any]]:
        return [term.to_dict() if term is not None else None for term in self._terms]

    @classmethod
    def from_list(cls, raw: Any) -> "CriteriaList":
        """Build a CriteriaList from a list of filter dicts (None entries stay placeholders)."""
        if not isinstance(raw, list):
            raise InvalidInputError(f"Criteria list must be a list, got {type(raw).__name__}")

        criteria_list = cls()
        for idx, item in enumerate(raw):
            if item is None:
                criteria_list.set(idx, None)
            elif isinstance(item, dict):
                criteria_list.add(Filter.from_dict(item))
            else:
                raise InvalidInputError(f"Filter {idx}: Expected an object, got {type(item).__name__}")
        return criteria_list


class CriteriaGroup(Criteria[CriteriaList]):
    """OR-groups of which every one must be satisfied (AND)."""

    def valid_filter_count(self) -> int:
        return sum(len(lst.valid_filters()) for lst in self._terms if isinstance(lst, CriteriaList))

    def to_list(self) -> list[Optional[list[dict[str, Any]]]]:
        return [lst.to_list() if lst is not None else None for lst in self._terms]

    @classmethod
    def from_list(cls, raw: Any) -> "CriteriaGroup":
        """Build a CriteriaGroup from a list of lists of filter dicts.

        Raises:
            InvalidInputError: When the document does not have that shape
        """
        if not isinstance(raw, list):
            raise InvalidInputError(f"Criteria group must be a list, got {type(raw).__name__}")

        group = cls()
        for idx, item in enumerate(raw):
            if item is None:
                group.set(idx, None)
                continue
            try:
                group.add(CriteriaList.from_list(item))
            except InvalidInputError as e:
                raise InvalidInputError(f"Criteria list {idx}: {e}") from e
        return group

"""
Criteria builder: the editing operations a client performs on a CriteriaGroup.
"""

import logging
from typing import Any, Callable, Optional

from ..constants import ERROR_MESSAGES
from ..exceptions import CriteriaNotFoundError, InvalidInputError, NoColumnsError
from ..utils.helpers import deep_clone
from ..utils.validators import is_numeric_input, validate_index
from .collection import CriteriaGroup, CriteriaList
from .models import Filter, Operator

logger = logging.getLogger(__name__)


class CriteriaBuilder:
    """Edits one CriteriaGroup against the columns of the loaded dataset."""

    def __init__(self, columns: Optional[list[str]] = None, criteria_group: Optional[CriteriaGroup] = None):
        self.columns = list(columns or [])
        self.criteria_group = criteria_group if criteria_group is not None else CriteriaGroup()

    def _new_filter(self) -> Filter:
        return Filter.create(left_condition=self.columns[0] if self.columns else "", operator=Operator.EQ)

    def reset(self, columns: list[str]) -> None:
        """Start over for a freshly loaded dataset: one OR-group with one blank filter."""
        self.columns = list(columns)
        self.criteria_group.clear()
        self.add_criteria_list()

    def add_criteria_list(self) -> int:
        """Append a new OR-group holding one blank filter and return its index."""
        criteria_list = CriteriaList()
        criteria_list.add(self._new_filter())
        self.criteria_group.add(criteria_list)
        logger.debug(f"Added criteria list {self.criteria_group.size() - 1}")
        return self.criteria_group.size() - 1

    def _get_list(self, criteria_list_index: int) -> CriteriaList:
        if not validate_index(criteria_list_index):
            raise InvalidInputError(f"Invalid criteria list index: {criteria_list_index!r}")
        criteria_list = self.criteria_group.get(criteria_list_index)
        if criteria_list is None:
            raise CriteriaNotFoundError(criteria_list_index)
        return criteria_list

    def add_criteria(self, criteria_list_index: int, index: int) -> Filter:
        """Insert a blank filter right after the filter at index.

        Raises:
            NoColumnsError: When no dataset columns are known
            CriteriaNotFoundError: When the criteria list does not exist
        """
        if not self.columns:
            raise NoColumnsError()

        criteria_list = self._get_list(criteria_list_index)
        new_filter = self._new_filter()
        criteria_list.insert(index, new_filter)
        self.criteria_group.set(criteria_list_index, criteria_list)
        return new_filter

    def remove_criteria(self, criteria_list_index: int, index: int) -> None:
        """Remove a filter; a list left empty is removed from the group as well."""
        criteria_list = self._get_list(criteria_list_index)
        criteria_list.remove(index)
        self.criteria_group.set(criteria_list_index, criteria_list)

        if criteria_list.size() == 0:
            self.criteria_group.remove(criteria_list_index)
            logger.debug(f"Removed empty criteria list {criteria_list_index}")

    def _update_filter(self, criteria_list_index: int, index: int, update_fn: Callable[[Filter], Any]) -> Filter:
        if not validate_index(index):
            raise InvalidInputError(f"Invalid filter index: {index!r}")

        criteria_list = self._get_list(criteria_list_index)
        filter_ = criteria_list.get(index)
        if filter_ is None:
            raise CriteriaNotFoundError(criteria_list_index, index)

        update_fn(filter_)
        criteria_list.set(index, filter_)
        self.criteria_group.set(criteria_list_index, criteria_list)
        return filter_

    def change_left_condition(self, criteria_list_index: int, index: int, left_condition: str) -> Filter:
        def update(filter_: Filter) -> None:
            filter_.left_condition = left_condition

        return self._update_filter(criteria_list_index, index, update)

    def change_operator(self, criteria_list_index: int, index: int, operator: Any) -> Filter:
        resolved = Operator.parse(operator)
        if resolved is None:
            raise InvalidInputError(f"Invalid operator: {operator}")

        def update(filter_: Filter) -> None:
            filter_.operator = resolved

        return self._update_filter(criteria_list_index, index, update)

    def change_value(self, criteria_list_index: int, index: int, value: str) -> Optional[str]:
        """Store a new value and return a validation message if it does not suit the operator.

        GT/LT values are expected to be numeric; the value is stored regardless
        so that partially typed input is never lost.
        """

        def update(filter_: Filter) -> None:
            filter_.value = value

        filter_ = self._update_filter(criteria_list_index, index, update)
        return self.check_numeric_error(filter_, value)

    @staticmethod
    def check_numeric_error(filter_: Filter, value: str) -> Optional[str]:
        if filter_.operator in (Operator.GT, Operator.LT) and not is_numeric_input(value):
            return ERROR_MESSAGES["numeric_value"]
        return None

    def snapshot(self) -> CriteriaGroup:
        """Deep copy of the group, safe to search while editing continues."""
        return deep_clone(self.criteria_group)

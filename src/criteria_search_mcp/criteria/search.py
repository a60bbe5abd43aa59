"""
Criteria search engine.

Evaluates a CriteriaGroup against an in-memory dataset: every CriteriaList must
be satisfied (AND) and a CriteriaList is satisfied when at least one of its
valid filters matches (OR).
"""

import json
import logging
import math
import re
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Callable, Optional, Sequence

from ..constants import FIELD_PATH_SEPARATOR, NUMBER_PATTERN
from ..exceptions import InvalidInputError
from .collection import CriteriaGroup, CriteriaList
from .models import Filter, Operator

logger = logging.getLogger(__name__)

_NUMBER = re.compile(NUMBER_PATTERN)

Record = Mapping[str, Any]


@dataclass(frozen=True)
class SearchOptions:
    """Options for configuring search behavior."""

    case_sensitive: bool = False
    safe_regex: bool = True


def to_number(value: Any) -> Optional[float]:
    """Coerce a field or filter value to a finite number.

    Booleans count as 1/0, strings must hold a decimal literal (surrounding
    whitespace allowed, an empty string counts as 0).

    Returns:
        The number, or None when the value is not a finite number
    """
    if isinstance(value, bool):
        return float(value)

    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        if not _NUMBER.match(text):
            return None
        number = float(text)
    else:
        return None

    return number if math.isfinite(number) else None


def _format_number(value: float) -> str:
    """Render a finite float the way JSON.stringify / String() does."""
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))

    text = repr(value)
    if "e" not in text:
        return text

    mantissa, exponent = text.split("e")
    exp = int(exponent)
    if -7 < exp < 21:
        return format(Decimal(text), "f")
    return f"{mantissa}e{'+' if exp > 0 else '-'}{abs(exp)}"


def _to_json(value: Any) -> str:
    """Compact JSON text with numbers written like JSON.stringify."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return _format_number(value) if math.isfinite(value) else "null"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    if isinstance(value, Mapping):
        items = (f"{json.dumps(str(k), ensure_ascii=False)}:{_to_json(v)}" for k, v in value.items())
        return "{" + ",".join(items) + "}"
    if isinstance(value, (list, tuple)):
        return "[" + ",".join(_to_json(v) for v in value) + "]"
    return json.dumps(str(value), ensure_ascii=False)


def to_text(value: Any) -> str:
    """Convert any field value to the text used by string comparisons.

    Objects and arrays become compact JSON; None becomes an empty string.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        return _format_number(value)
    if isinstance(value, (dict, list, tuple)):
        return _to_json(value)
    return str(value)


class CriteriaSearch:
    """Filters a dataset with a two-level AND-of-ORs criteria group.

    The engine only reads the dataset and the criteria; ``search()`` can be
    called any number of times and always returns a new list whose records
    are the input records themselves.
    """

    def __init__(
        self,
        data: Sequence[Record],
        criteria_group: CriteriaGroup,
        options: Optional[SearchOptions] = None,
    ) -> None:
        if not isinstance(data, (list, tuple)):
            raise InvalidInputError(f"Search data must be a list of records, got {type(data).__name__}")
        if not isinstance(criteria_group, CriteriaGroup):
            raise InvalidInputError(
                f"criteria_group must be a CriteriaGroup, got {type(criteria_group).__name__}"
            )

        self.data = data
        self.criteria_group = criteria_group
        self.options = options or SearchOptions()

        self._operators: dict[Operator, Callable[[Any, str], bool]] = {
            Operator.EQ: self._evaluate_equals,
            Operator.GT: self._evaluate_greater_than,
            Operator.LT: self._evaluate_less_than,
            Operator.C: self._evaluate_contains,
            Operator.NC: self._evaluate_not_contains,
            Operator.RGX: self._evaluate_regex,
        }

    def search(self) -> list[Record]:
        """Return the records that satisfy every criteria list."""
        criteria_lists = self.criteria_group.all()

        if not criteria_lists:
            return list(self.data)

        # Valid filters are resolved once per search, not once per record
        or_groups = [self._valid_filters(criteria_list) for criteria_list in criteria_lists]
        or_groups = [filters for filters in or_groups if filters]

        results = [item for item in self.data if self._matches_all_criteria(item, or_groups)]
        logger.debug(f"Criteria search kept {len(results)} of {len(self.data)} records")
        return results

    def _valid_filters(self, criteria_list: Optional[CriteriaList]) -> list[Filter]:
        # Placeholder slots left by a sparse set() behave like empty lists
        if not isinstance(criteria_list, CriteriaList):
            return []
        return criteria_list.valid_filters()

    def _matches_all_criteria(self, item: Record, or_groups: list[list[Filter]]) -> bool:
        return all(any(self._evaluate_filter(item, f) for f in filters) for filters in or_groups)

    def _evaluate_filter(self, item: Record, filter_: Filter) -> bool:
        """Evaluate one filter; any failure means the filter does not match."""
        try:
            field_value = self._get_field_value(item, filter_.left_condition)

            if field_value is None:
                return False

            return self._apply_operator(field_value, filter_.operator, filter_.value)
        except re.error as e:
            log = logger.debug if self.options.safe_regex else logger.warning
            log(f"Invalid regex {filter_.value!r} for field {filter_.left_condition!r}: {e}")
            return False
        except Exception as e:
            logger.debug(f"Filter evaluation error for {filter_.left_condition!r}: {e}")
            return False

    def _get_field_value(self, item: Record, field_name: str) -> Any:
        """Look up a field, walking nested objects for dotted names ("user.name")."""
        if FIELD_PATH_SEPARATOR in field_name:
            return self._get_nested_value(item, field_name)

        if not isinstance(item, Mapping):
            return None
        return item.get(field_name)

    def _get_nested_value(self, obj: Any, path: str) -> Any:
        current = obj
        for key in path.split(FIELD_PATH_SEPARATOR):
            if isinstance(current, Mapping) and key in current:
                current = current[key]
            elif isinstance(current, (list, tuple)) and key.isdigit() and int(key) < len(current):
                current = current[int(key)]
            else:
                return None
        return current

    def _apply_operator(self, field_value: Any, operator: Any, filter_value: str) -> bool:
        evaluate = self._operators.get(operator) if isinstance(operator, Operator) else None
        if evaluate is None:
            return False
        return evaluate(field_value, filter_value)

    def _evaluate_equals(self, field_value: Any, filter_value: str) -> bool:
        """Type-aware equality."""
        if isinstance(field_value, bool):
            return to_text(field_value) == filter_value.lower()

        if isinstance(field_value, (int, float)):
            numeric_filter = to_number(filter_value)
            return numeric_filter is not None and field_value == numeric_filter

        string_value = to_text(field_value)
        if self.options.case_sensitive:
            return string_value == filter_value
        return string_value.lower() == filter_value.lower()

    def _evaluate_greater_than(self, field_value: Any, filter_value: str) -> bool:
        numeric_field = to_number(field_value)
        numeric_filter = to_number(filter_value)
        return numeric_field is not None and numeric_filter is not None and numeric_field > numeric_filter

    def _evaluate_less_than(self, field_value: Any, filter_value: str) -> bool:
        numeric_field = to_number(field_value)
        numeric_filter = to_number(filter_value)
        return numeric_field is not None and numeric_filter is not None and numeric_field < numeric_filter

    def _evaluate_contains(self, field_value: Any, filter_value: str) -> bool:
        string_value = to_text(field_value)
        if self.options.case_sensitive:
            return filter_value in string_value
        return filter_value.lower() in string_value.lower()

    def _evaluate_not_contains(self, field_value: Any, filter_value: str) -> bool:
        return not self._evaluate_contains(field_value, filter_value)

    def _evaluate_regex(self, field_value: Any, filter_value: str) -> bool:
        flags = 0 if self.options.case_sensitive else re.IGNORECASE
        regex = re.compile(filter_value, flags)
        return regex.search(to_text(field_value)) is not None

"""
Criteria data model: comparison operators and filter terms.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union

from ..utils.helpers import generate_id, retrieve_operator_value


class Operator(str, Enum):
    """Comparison kind of a filter. Member names are the wire codes, values the display labels."""

    EQ = "Equals"
    GT = "Greater Than"
    LT = "Less Than"
    C = "Contains"
    NC = "Not Contains"
    RGX = "Regex"

    @classmethod
    def parse(cls, raw: Any) -> Optional["Operator"]:
        """Resolve an operator from a member, a code ("EQ", "rgx") or a label ("Equals").

        Returns None instead of raising for anything unrecognised.
        """
        if isinstance(raw, cls):
            return raw
        if not isinstance(raw, str):
            return None

        code = raw.strip().upper()
        if code in cls.__members__:
            return cls[code]

        # Labels are title case ("Not Contains")
        name = retrieve_operator_value(cls, raw.strip().title())
        return cls[name] if name else None


@dataclass
class Filter:
    """One atomic comparison term.

    ``id`` only keeps rows stable for a client and takes no part in
    equality or evaluation.
    """

    id: str = field(compare=False)
    left_condition: str
    operator: Union[Operator, str]
    value: str

    @classmethod
    def create(cls, left_condition: str = "", operator: Operator = Operator.EQ, value: str = "") -> "Filter":
        """Create a filter with a freshly generated id."""
        return cls(id=generate_id(), left_condition=left_condition, operator=operator, value=value)

    def is_valid(self) -> bool:
        """A filter takes part in evaluation only when field and value are both non-blank."""
        return (
            isinstance(self.left_condition, str)
            and isinstance(self.value, str)
            and len(self.left_condition.strip()) > 0
            and len(self.value.strip()) > 0
        )

    def to_dict(self) -> dict[str, Any]:
        operator = self.operator.name if isinstance(self.operator, Operator) else self.operator
        return {
            "id": self.id,
            "left_condition": self.left_condition,
            "operator": operator,
            "value": self.value,
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "Filter":
        """Create a Filter from its wire form.

        Unknown operators are kept verbatim so that they simply never match.
        """
        left_condition = raw.get("left_condition", raw.get("leftCondition", ""))
        raw_operator = raw.get("operator", Operator.EQ)
        value = raw.get("value", "")

        return cls(
            id=str(raw.get("id") or generate_id()),
            left_condition="" if left_condition is None else str(left_condition),
            operator=Operator.parse(raw_operator) or raw_operator,
            value="" if value is None else str(value),
        )

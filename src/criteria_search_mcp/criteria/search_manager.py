"""
Search manager for running criteria searches and reporting on them.
"""

import json
import logging
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from ..exceptions import InvalidInputError
from .collection import CriteriaGroup
from .search import CriteriaSearch, SearchOptions

logger = logging.getLogger(__name__)


@dataclass
class SearchResult:
    """Result of a criteria search."""

    success: bool
    data: Any
    total_count: int
    filtered_count: int
    execution_time_ms: float
    criteria_applied: int
    error: Optional[str] = None
    metadata: dict[str, Any] = None


class SearchManager:
    """Runs criteria searches and wraps them in timed results."""

    def __init__(self, options: Optional[SearchOptions] = None):
        self.options = options or SearchOptions()

    def search(self, data: Any, criteria_group: CriteriaGroup, options: Optional[SearchOptions] = None) -> SearchResult:
        """Apply a criteria group to data."""
        start_time = time.time()
        total_count = len(data) if isinstance(data, (list, tuple)) else 0

        try:
            criteria_search = CriteriaSearch(data, criteria_group, options or self.options)
            result = criteria_search.search()
            execution_time = (time.time() - start_time) * 1000

            return SearchResult(
                success=True,
                data=result,
                total_count=total_count,
                filtered_count=len(result),
                execution_time_ms=execution_time,
                criteria_applied=criteria_group.valid_filter_count(),
                metadata={"criteria_lists": criteria_group.size()},
            )

        except Exception as e:
            logger.exception(f"Error applying criteria: {e}")
            execution_time = (time.time() - start_time) * 1000

            return SearchResult(
                success=False,
                data=data,
                total_count=total_count,
                filtered_count=total_count,
                execution_time_ms=execution_time,
                criteria_applied=0,
                error=str(e),
            )

    def search_from_json(self, data: Any, criteria: str, options: Optional[SearchOptions] = None) -> SearchResult:
        """Apply a criteria document given as JSON (a list of lists of filters)."""
        total_count = len(data) if isinstance(data, (list, tuple)) else 0

        try:
            criteria_group = CriteriaGroup.from_list(json.loads(criteria) if criteria else [])
        except (ValueError, InvalidInputError) as e:
            logger.warning(f"Invalid criteria document: {e}")
            return SearchResult(
                success=False,
                data=data,
                total_count=total_count,
                filtered_count=total_count,
                execution_time_ms=0.0,
                criteria_applied=0,
                error="invalid_criteria",
                metadata={"message": str(e)},
            )

        return self.search(data, criteria_group, options)

    def format_response(self, result: SearchResult) -> dict[str, Any]:
        """Format a SearchResult as the response envelope returned to tool callers."""
        response = {
            "success": result.success,
            "data": result.data,
            "metadata": {
                "total_count": result.total_count,
                "filtered_count": result.filtered_count,
                "criteria_applied": result.criteria_applied,
                "execution_time_ms": round(result.execution_time_ms, 2),
                "timestamp": datetime.now().isoformat(),
            },
        }

        if result.metadata:
            response["metadata"].update(result.metadata)

        if not result.success:
            response["error"] = result.error

        return response

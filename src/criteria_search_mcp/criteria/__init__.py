"""
Criteria Search Module

This module provides the criteria data model and the evaluation engine that
filters an in-memory dataset with a two-level boolean expression.

Key Components:
- Filter / Operator: one atomic comparison term
- CriteriaList: filters combined with OR
- CriteriaGroup: criteria lists combined with AND
- CriteriaSearch: compiles and applies a CriteriaGroup to records
- CriteriaBuilder: editing operations on a CriteriaGroup
- SearchManager: timed searches with reporting

Usage:
    from criteria_search_mcp.criteria import CriteriaGroup, CriteriaList, CriteriaSearch, Filter, Operator

    criteria_list = CriteriaList()
    criteria_list.add(Filter.create("age", Operator.GT, "26"))
    group = CriteriaGroup()
    group.add(criteria_list)
    matches = CriteriaSearch(records, group).search()
"""

from .builder import CriteriaBuilder
from .collection import Criteria, CriteriaGroup, CriteriaList
from .models import Filter, Operator
from .search import CriteriaSearch, SearchOptions, to_number, to_text
from .search_manager import SearchManager, SearchResult

__all__ = [
    "Criteria",
    "CriteriaBuilder",
    "CriteriaGroup",
    "CriteriaList",
    "CriteriaSearch",
    "Filter",
    "Operator",
    "SearchManager",
    "SearchOptions",
    "SearchResult",
    "to_number",
    "to_text",
]

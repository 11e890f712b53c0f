"""Search functionality for catalogue records.

This module provides boolean query parsing and evaluation, faceted
filtering, sorting, pagination and aggregate statistics over an in-memory
record set.

Main components:
- QueryParser / QueryEvaluator: the search box language
- filter_records: format, tag and sort pipeline
- BrowseState / paginate: current page handling
- aggregate: library statistics
"""

from .evaluator import (
    QueryEvaluator,
    group_tokens,
    match_token,
    matches,
)
from .facets import (
    ALL_FORMATS,
    FilterCriteria,
    SortOrder,
    TagLogic,
    apply_criteria,
    collation_key,
    filter_by_format,
    filter_by_tags,
    filter_records,
    sort_records,
)
from .pagination import (
    DEFAULT_PAGE_SIZE,
    BrowseState,
    Page,
    paginate,
)
from .query import (
    BooleanOperator,
    QueryParser,
    SearchField,
    Token,
    TokenKind,
    parse,
)
from .stats import (
    CountedValue,
    LibraryStatistics,
    WeightedTag,
    aggregate,
)

__all__ = [
    # Query parsing
    "QueryParser",
    "Token",
    "TokenKind",
    "SearchField",
    "BooleanOperator",
    "parse",
    # Evaluation
    "QueryEvaluator",
    "match_token",
    "matches",
    "group_tokens",
    # Filtering
    "ALL_FORMATS",
    "FilterCriteria",
    "SortOrder",
    "TagLogic",
    "apply_criteria",
    "filter_records",
    "filter_by_format",
    "filter_by_tags",
    "sort_records",
    "collation_key",
    # Pagination
    "DEFAULT_PAGE_SIZE",
    "BrowseState",
    "Page",
    "paginate",
    # Statistics
    "CountedValue",
    "WeightedTag",
    "LibraryStatistics",
    "aggregate",
]

"""Pagination and browse state.

Pages are 1-indexed slices of the ordered result list. ``BrowseState``
pairs the filter criteria with the current page and resets the page
whenever the result list would change underneath it.
"""

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field, replace
from typing import Generic, TypeVar

from ..core.models import Record
from .facets import FilterCriteria, apply_criteria

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 24

# Criteria fields whose change invalidates the current page.
_PAGE_RESET_FIELDS = ("query", "format", "tags", "sort")


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of an ordered result list."""

    items: list[T]
    number: int
    page_size: int
    total_items: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_items / self.page_size)

    @property
    def has_next(self) -> bool:
        return self.number < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.number > 1

    @property
    def start(self) -> int:
        """1-based position of the first item on the page, 0 if empty."""
        if not self.items:
            return 0
        return (self.number - 1) * self.page_size + 1

    @property
    def end(self) -> int:
        """1-based position of the last item on the page, 0 if empty."""
        if not self.items:
            return 0
        return self.start + len(self.items) - 1


def paginate(
    items: Sequence[T], page: int = 1, page_size: int = DEFAULT_PAGE_SIZE
) -> Page[T]:
    """Slice one page out of an ordered sequence.

    Args:
        items: Ordered items
        page: Page number (1-based); values below 1 are treated as 1
        page_size: Items per page

    Returns:
        The requested page. Pages past the end are empty.

    Raises:
        ValueError: If page_size is less than 1
    """
    if page_size < 1:
        raise ValueError(f"page_size must be at least 1, got {page_size}")

    page = max(page, 1)
    start = (page - 1) * page_size
    return Page(
        items=list(items[start : start + page_size]),
        number=page,
        page_size=page_size,
        total_items=len(items),
    )


@dataclass(frozen=True)
class BrowseState:
    """Current criteria and page of a library browser.

    Every change produces a new state. Changing the query, format, tag
    selection or sort order returns to page 1; switching only the tag
    combination logic keeps the current page.
    """

    criteria: FilterCriteria = field(default_factory=FilterCriteria)
    page: int = 1

    @classmethod
    def for_query(cls, query: str) -> "BrowseState":
        """State for opening the browser on a query, e.g. a clicked tag."""
        return cls(criteria=FilterCriteria(query=query))

    def update(self, **changes) -> "BrowseState":
        """Apply criteria changes."""
        return self._with_criteria(self.criteria.with_changes(**changes))

    def toggle_tag(self, tag: str) -> "BrowseState":
        return self._with_criteria(self.criteria.toggle_tag(tag))

    def clear_filters(self) -> "BrowseState":
        return self._with_criteria(self.criteria.cleared())

    def go_to(self, page: int) -> "BrowseState":
        """Move to another page without touching the criteria."""
        return replace(self, page=max(page, 1))

    def results(
        self, records: Iterable[Record], page_size: int = DEFAULT_PAGE_SIZE
    ) -> Page[Record]:
        """Run the filter pipeline and return the current page."""
        return paginate(apply_criteria(records, self.criteria), self.page, page_size)

    def _with_criteria(self, criteria: FilterCriteria) -> "BrowseState":
        reset = any(
            getattr(criteria, name) != getattr(self.criteria, name)
            for name in _PAGE_RESET_FIELDS
        )
        return BrowseState(criteria=criteria, page=1 if reset else self.page)

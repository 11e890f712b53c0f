"""Faceted filtering and ordering of catalogue records.

The pipeline applies its stages in a fixed order. Each stage only narrows
or reorders what the previous one produced:

1. Free-text query (boolean search language)
2. Format equality
3. Tag selection, combined with AND or OR
4. Stable sort

Nothing here raises for well-typed input. Zero matches is an empty list.
"""

import logging
import unicodedata
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace
from enum import Enum

from ..core.models import Record
from .evaluator import QueryEvaluator

logger = logging.getLogger(__name__)

ALL_FORMATS = "all"


class SortOrder(Enum):
    """Sort order options for filtered records."""

    DATE_NEWEST = "date_newest"
    DATE_OLDEST = "date_oldest"
    TITLE_ASC = "title_asc"
    AUTHOR_ASC = "author_asc"


class TagLogic(Enum):
    """How selected tags combine."""

    AND = "AND"
    OR = "OR"


@dataclass(frozen=True)
class FilterCriteria:
    """Filter and sort selections for one view of the library.

    ``tags`` keeps selection order. ``format`` is a single format code or
    ``"all"``.
    """

    query: str = ""
    format: str = ALL_FORMATS
    tags: tuple[str, ...] = ()
    tag_logic: TagLogic = TagLogic.AND
    sort: SortOrder = SortOrder.DATE_NEWEST

    def with_changes(self, **changes) -> "FilterCriteria":
        """Return a copy with the given fields replaced."""
        if "tags" in changes:
            changes["tags"] = tuple(tag.strip() for tag in changes["tags"])
        return replace(self, **changes)

    def toggle_tag(self, tag: str) -> "FilterCriteria":
        """Select a tag, or deselect it if already selected."""
        tag = tag.strip()
        if tag in self.tags:
            return replace(self, tags=tuple(t for t in self.tags if t != tag))
        return replace(self, tags=self.tags + (tag,))

    def cleared(self) -> "FilterCriteria":
        """Drop query, format and tag selections, keeping logic and sort."""
        return replace(self, query="", format=ALL_FORMATS, tags=())

    @property
    def is_filtered(self) -> bool:
        """True when any narrowing filter is active."""
        return bool(self.query.strip() or self.format != ALL_FORMATS or self.tags)


def collation_key(text: str) -> tuple[str, str, str]:
    """Build a locale-style sort key.

    Compares base letters first, then accents, then case, with lower
    case before upper case.
    """
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(c for c in decomposed if not unicodedata.combining(c))
    return (base.casefold(), text.casefold(), text.swapcase())


def _timestamp_key(record: Record) -> float:
    added = record.added_at
    if added is None:
        return float("-inf")
    return added.timestamp()


def sort_records(records: Iterable[Record], order: SortOrder) -> list[Record]:
    """Stable sort of records.

    Unparseable timestamps sort as the oldest possible value. Titles and
    authors prefer their sort keys and fall back to the display value.
    """
    if order == SortOrder.DATE_NEWEST:
        return sorted(records, key=_timestamp_key, reverse=True)
    elif order == SortOrder.DATE_OLDEST:
        return sorted(records, key=_timestamp_key)
    elif order == SortOrder.TITLE_ASC:
        return sorted(records, key=lambda r: collation_key(r.title_sort or r.title))
    elif order == SortOrder.AUTHOR_ASC:
        return sorted(
            records, key=lambda r: collation_key(r.author_sort or r.authors)
        )
    return list(records)


def filter_by_format(records: Iterable[Record], fmt: str) -> list[Record]:
    """Keep records available in ``fmt``; ``"all"`` keeps everything."""
    if fmt == ALL_FORMATS:
        return list(records)
    return [record for record in records if record.has_format(fmt)]


def filter_by_tags(
    records: Iterable[Record],
    tags: Sequence[str],
    logic: TagLogic = TagLogic.AND,
) -> list[Record]:
    """Keep records carrying the selected tags.

    Record tags are trimmed before comparison. With AND every selected tag
    must be present; with OR at least one.
    """
    if not tags:
        return list(records)

    selected = [tag.strip() for tag in tags]
    combine = all if logic == TagLogic.AND else any

    filtered = []
    for record in records:
        record_tags = {tag.strip() for tag in record.tags}
        if combine(tag in record_tags for tag in selected):
            filtered.append(record)
    return filtered


def filter_records(
    records: Iterable[Record],
    query: str = "",
    format: str = ALL_FORMATS,
    tags: Sequence[str] = (),
    tag_logic: TagLogic = TagLogic.AND,
    sort: SortOrder = SortOrder.DATE_NEWEST,
) -> list[Record]:
    """Run the full filter pipeline.

    Args:
        records: Full record set
        query: Free-text query in the search language
        format: Format code, or ``"all"``
        tags: Selected tags
        tag_logic: How selected tags combine
        sort: Final ordering

    Returns:
        Ordered list of matching records (not paginated)
    """
    result = list(records)
    total = len(result)

    if query.strip():
        result = QueryEvaluator(query).filter(result)
    after_query = len(result)

    result = filter_by_format(result, format)
    after_format = len(result)

    result = filter_by_tags(result, tags, tag_logic)

    logger.debug(
        "Filtered %d records: query=%d format=%d tags=%d",
        total,
        after_query,
        after_format,
        len(result),
    )

    return sort_records(result, sort)


def apply_criteria(records: Iterable[Record], criteria: FilterCriteria) -> list[Record]:
    """Run the filter pipeline with a criteria object."""
    return filter_records(
        records,
        query=criteria.query,
        format=criteria.format,
        tags=criteria.tags,
        tag_logic=criteria.tag_logic,
        sort=criteria.sort,
    )

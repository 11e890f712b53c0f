"""Aggregate statistics over a full record set.

Statistics are always computed from the whole library, never from a
filtered view.
"""

from collections import Counter
from collections.abc import Iterable
from typing import Any

import msgspec

from ..core.models import Record

TOP_LANGUAGES = 5
TOP_FORMATS = 5
TOP_AUTHORS = 10
TOP_TAGS = 60

MIN_TAG_WEIGHT = 0.85
TAG_WEIGHT_RANGE = 1.5


class CountedValue(msgspec.Struct, frozen=True):
    """A facet value with its occurrence count."""

    name: str
    count: int


class WeightedTag(msgspec.Struct, frozen=True):
    """A tag with its count and display weight for a tag cloud."""

    name: str
    count: int
    weight: float


class LibraryStatistics(msgspec.Struct, frozen=True, kw_only=True):
    """Summary tables for a library."""

    total_books: int
    unique_author_count: int
    top_languages: list[CountedValue]
    top_formats: list[CountedValue]
    top_authors: list[CountedValue]
    top_tags: list[WeightedTag]

    def to_dict(self) -> dict[str, Any]:
        """Convert to plain builtins for serialization."""
        return msgspec.to_builtins(self)


def top_values(counter: Counter, limit: int) -> list[CountedValue]:
    """Most frequent values first; ties keep first-encountered order."""
    return [CountedValue(name, count) for name, count in counter.most_common(limit)]


def tag_weights(tags: list[CountedValue]) -> list[WeightedTag]:
    """Scale tag counts into display weights relative to the largest."""
    max_count = tags[0].count if tags else 1
    return [
        WeightedTag(
            tag.name,
            tag.count,
            MIN_TAG_WEIGHT + (tag.count / max_count) * TAG_WEIGHT_RANGE,
        )
        for tag in tags
    ]


def aggregate(records: Iterable[Record]) -> LibraryStatistics:
    """Compute library statistics.

    Args:
        records: The full record set

    Returns:
        Totals plus top languages, formats, authors and tags
    """
    total = 0
    authors: Counter[str] = Counter()
    languages: Counter[str] = Counter()
    formats: Counter[str] = Counter()
    tags: Counter[str] = Counter()

    for record in records:
        total += 1
        authors.update(record.author_list)
        languages.update(record.language_list)
        formats.update(f.strip().lower() for f in record.formats)
        tags.update(record.clean_tags)

    return LibraryStatistics(
        total_books=total,
        unique_author_count=len(authors),
        top_languages=top_values(languages, TOP_LANGUAGES),
        top_formats=top_values(formats, TOP_FORMATS),
        top_authors=top_values(authors, TOP_AUTHORS),
        top_tags=tag_weights(top_values(tags, TOP_TAGS)),
    )

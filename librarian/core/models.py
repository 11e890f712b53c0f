"""Core data models for catalogue records.

This module defines the record shape decoded from a catalogue export
(Calibre's ``metadata.json`` layout) and the record set that owns a
loaded library together with its derived facet index.

Key components:
- Record: Immutable bibliographic record
- RecordSet: Ordered, immutable collection of records for one library
- FacetIndex: Tag frequencies and format codes derived from a record set
"""

from collections import Counter
from dataclasses import dataclass
from datetime import datetime, timezone
from functools import cached_property
from typing import Any, Iterable, Iterator

import msgspec

from .exceptions import LibraryFormatError


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an ISO-8601 timestamp.

    Naive values are taken as UTC so that every parsed timestamp can be
    compared with every other one. This applies to date-times without an
    offset too, not only to bare dates, so results never depend on the
    local timezone of the machine.

    Returns:
        Aware datetime, or None when the value is empty or unparseable.
    """
    if not value or not value.strip():
        return None

    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def split_authors(authors: str | None) -> tuple[str, ...]:
    """Split an ampersand-joined author string into trimmed names."""
    if not authors:
        return ()
    return tuple(name.strip() for name in authors.split("&") if name.strip())


class Record(msgspec.Struct, frozen=True, kw_only=True):
    """Immutable bibliographic record.

    Field names follow the catalogue export so records decode without
    renaming. ``authors`` is the display string with names joined by
    ``&``; individual names are derived on read through ``author_list``.
    """

    id: int
    title: str
    title_sort: str = ""
    authors: str = ""
    author_sort: str = ""
    publisher: str = ""
    timestamp: str = ""
    tags: tuple[str, ...] = ()
    formats: tuple[str, ...] = ()
    languages: str = ""

    @property
    def author_list(self) -> tuple[str, ...]:
        """Individual author names in display order."""
        return split_authors(self.authors)

    @property
    def language_list(self) -> tuple[str, ...]:
        """Language codes, or ``("Unknown",)`` when none are recorded."""
        if not self.languages:
            return ("Unknown",)
        return tuple(lang.strip() for lang in self.languages.split(","))

    @property
    def clean_tags(self) -> tuple[str, ...]:
        """Tags with surrounding whitespace removed, empty tags dropped."""
        return tuple(tag.strip() for tag in self.tags if tag.strip())

    @property
    def added_at(self) -> datetime | None:
        """Parsed timestamp, or None when it cannot be parsed."""
        return parse_timestamp(self.timestamp)

    def has_format(self, fmt: str) -> bool:
        """Check whether the record is available in the given format."""
        wanted = fmt.strip().lower()
        return any(f.strip().lower() == wanted for f in self.formats)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dictionary of JSON-compatible values."""
        data = msgspec.to_builtins(self)
        data["tags"] = list(self.tags)
        data["formats"] = list(self.formats)
        return data


@dataclass(frozen=True)
class FacetIndex:
    """Facet values derived from a full record set.

    Attributes:
        tag_counts: Trimmed tag name to occurrence count, most frequent
            first; ties keep first-encountered order.
        format_counts: Lower-cased format code to the number of records
            available in it, alphabetically by code.
    """

    tag_counts: dict[str, int]
    format_counts: dict[str, int]

    @classmethod
    def from_records(cls, records: Iterable[Record]) -> "FacetIndex":
        """Compute the facet index for a sequence of records."""
        tags: Counter[str] = Counter()
        formats: Counter[str] = Counter()

        for record in records:
            formats.update({f.strip().lower() for f in record.formats if f.strip()})
            tags.update(record.clean_tags)

        return cls(
            tag_counts=dict(tags.most_common()),
            format_counts={name: formats[name] for name in sorted(formats)},
        )

    @property
    def formats(self) -> tuple[str, ...]:
        """Distinct format codes, alphabetically sorted."""
        return tuple(self.format_counts)

    def search_tags(self, text: str) -> dict[str, int]:
        """Return tag counts whose name contains ``text``, ignoring case."""
        needle = text.strip().lower()
        if not needle:
            return dict(self.tag_counts)
        return {
            name: count
            for name, count in self.tag_counts.items()
            if needle in name.lower()
        }

    def get_tag_count(self, tag: str) -> int:
        """Get the occurrence count for a tag."""
        return self.tag_counts.get(tag.strip(), 0)


@dataclass(frozen=True)
class RecordSet:
    """The complete, ordered collection of records for one library.

    A record set is never mutated. Reloading a library produces a new
    record set, which in turn derives a new facet index.
    """

    records: tuple[Record, ...] = ()

    def __post_init__(self):
        """Reject duplicate record ids."""
        seen: set[int] = set()
        for record in self.records:
            if record.id in seen:
                raise LibraryFormatError(f"Duplicate record id: {record.id}")
            seen.add(record.id)

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[Record]:
        return iter(self.records)

    def __getitem__(self, index: int) -> Record:
        return self.records[index]

    @cached_property
    def facets(self) -> FacetIndex:
        """Facet index computed once for this record set."""
        return FacetIndex.from_records(self.records)

    def get(self, record_id: int) -> Record | None:
        """Find a record by id."""
        for record in self.records:
            if record.id == record_id:
                return record
        return None

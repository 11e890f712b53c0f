"""Library loading from catalogue JSON exports.

A library document is either a bare array of book objects or an object
with a ``books`` array. Anything else is rejected with a
``LibraryFormatError`` describing what was wrong, so the search core only
ever sees typed records.
"""

import logging
from pathlib import Path
from typing import Any

import msgspec

from .exceptions import LibraryFormatError
from .models import Record, RecordSet

logger = logging.getLogger(__name__)


def load_library(path: Path | str) -> RecordSet:
    """Load a library from a JSON file.

    Args:
        path: Path to a catalogue export.

    Returns:
        Record set holding every book in the file.

    Raises:
        LibraryFormatError: If the file cannot be read or decoded.
    """
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise LibraryFormatError(f"Failed to read file: {e}", source=str(path)) from e

    record_set = decode_library(data, source=str(path))
    logger.info("Loaded %d records from %s", len(record_set), path)
    return record_set


def decode_library(data: bytes | str, source: str | None = None) -> RecordSet:
    """Decode a JSON library document.

    Raises:
        LibraryFormatError: If the document is not valid JSON or does not
            have the expected shape.
    """
    try:
        obj = msgspec.json.decode(data)
    except msgspec.DecodeError as e:
        raise LibraryFormatError(f"Invalid JSON: {e}", source=source) from e

    return records_from_builtins(obj, source=source)


def records_from_builtins(obj: Any, source: str | None = None) -> RecordSet:
    """Convert already-decoded JSON data into a record set."""
    if isinstance(obj, list):
        books = obj
    elif isinstance(obj, dict) and isinstance(obj.get("books"), list):
        books = obj["books"]
    else:
        raise LibraryFormatError(
            "Invalid format: expected an array or an object with a 'books' array",
            source=source,
        )

    if books:
        first = books[0]
        title = first.get("title") if isinstance(first, dict) else None
        if not isinstance(title, str) or not title:
            raise LibraryFormatError(
                "Data doesn't look like book records (missing title)", source=source
            )

    cleaned = [_drop_nulls(book) for book in books]

    try:
        records = msgspec.convert(cleaned, list[Record])
    except msgspec.ValidationError as e:
        raise LibraryFormatError(f"Invalid book record: {e}", source=source) from e

    logger.debug("Decoded %d book records", len(records))
    return RecordSet(tuple(records))


def _drop_nulls(book: Any) -> Any:
    """Treat null-valued fields as absent so defaults apply."""
    if not isinstance(book, dict):
        return book
    return {k: v for k, v in book.items() if v is not None}

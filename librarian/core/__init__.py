"""Core record models, library loading and presentation helpers."""

from librarian.core.colors import (
    PALETTE,
    TagColor,
    color_index,
    tag_color,
)
from librarian.core.exceptions import (
    LibrarianError,
    LibraryFormatError,
)
from librarian.core.loader import (
    decode_library,
    load_library,
    records_from_builtins,
)
from librarian.core.models import (
    FacetIndex,
    Record,
    RecordSet,
    parse_timestamp,
    split_authors,
)

__all__ = [
    # Models
    "Record",
    "RecordSet",
    "FacetIndex",
    "parse_timestamp",
    "split_authors",
    # Loading
    "load_library",
    "decode_library",
    "records_from_builtins",
    # Errors
    "LibrarianError",
    "LibraryFormatError",
    # Colors
    "PALETTE",
    "TagColor",
    "color_index",
    "tag_color",
]

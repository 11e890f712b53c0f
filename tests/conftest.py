"""Pytest configuration and fixtures."""

import json

import msgspec
import pytest

from librarian.core.models import Record, RecordSet


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch, tmp_path):
    """Isolate configuration lookups and environment for each test.

    This prevents a user's config files or LIBRARIAN_* variables from
    changing what the tests see.
    """
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.delenv("LIBRARIAN_LIBRARY", raising=False)
    monkeypatch.delenv("LIBRARIAN_PAGE_SIZE", raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def sample_books() -> list[dict]:
    """Raw book objects as found in a catalogue export."""
    return [
        {
            "id": 1,
            "title": "Foundation",
            "title_sort": "Foundation",
            "authors": "Isaac Asimov",
            "author_sort": "Asimov, Isaac",
            "publisher": "Gnome Press",
            "timestamp": "2021-03-01T10:00:00+00:00",
            "tags": ["Science Fiction", " Classics "],
            "formats": ["EPUB", "pdf"],
            "languages": "eng",
        },
        {
            "id": 2,
            "title": "Dune",
            "title_sort": "Dune",
            "authors": "Frank Herbert",
            "author_sort": "Herbert, Frank",
            "publisher": "Chilton Books",
            "timestamp": "2022-06-01T00:00:00+00:00",
            "tags": ["Science Fiction"],
            "formats": ["epub"],
            "languages": "eng",
        },
        {
            "id": 3,
            "title": "The Hobbit",
            "title_sort": "Hobbit, The",
            "authors": "J.R.R. Tolkien",
            "author_sort": "Tolkien, J.R.R.",
            "publisher": "Allen & Unwin",
            "timestamp": "2020-01-01T00:00:00+00:00",
            "tags": ["Fantasy", "Classics"],
            "formats": ["mobi"],
            "languages": "eng, fra",
        },
        {
            "id": 4,
            "title": "Good Omens",
            "title_sort": "",
            "authors": "Terry Pratchett & Neil Gaiman",
            "author_sort": "Pratchett, Terry & Gaiman, Neil",
            "publisher": "Gollancz",
            "timestamp": "not a date",
            "tags": ["Fantasy", "Humor"],
            "formats": ["EPUB"],
            "languages": "",
        },
        {
            "id": 5,
            "title": "Machine Learning Basics",
            "title_sort": "Machine Learning Basics",
            "authors": "Ann Lee & Bo Kim",
            "author_sort": "Lee, Ann & Kim, Bo",
            "publisher": "O'Reilly",
            "timestamp": "2019-05-05",
            "tags": ["Nonfiction"],
            "formats": ["pdf"],
            "languages": "eng",
        },
    ]


@pytest.fixture
def sample_records(sample_books) -> RecordSet:
    """Sample books as a record set."""
    return RecordSet(tuple(msgspec.convert(book, Record) for book in sample_books))


@pytest.fixture
def library_file(tmp_path, sample_books):
    """Sample library written as a Calibre-style export."""
    path = tmp_path / "metadata.json"
    path.write_text(json.dumps({"books": sample_books}))
    return path

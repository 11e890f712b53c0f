"""Librarian CLI.

A command-line interface for searching and summarizing a book library.
Built with Click and Rich.
"""

from librarian.cli.main import cli

__all__ = ["cli"]

"""Exception classes for the librarian package."""


class LibrarianError(Exception):
    """Base exception for librarian errors."""

    pass


class LibraryFormatError(LibrarianError, ValueError):
    """Raised when a library document cannot be decoded into records."""

    def __init__(self, message: str, source: str | None = None):
        """Initialize with message and optional source description."""
        self.source = source
        if source:
            message = f"{source}: {message}"
        super().__init__(message)

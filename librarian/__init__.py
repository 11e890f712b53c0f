"""Search and browse a bibliographic catalogue held in memory."""

__version__ = "1.0.0"

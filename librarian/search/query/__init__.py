"""Query parsing subsystem."""

from .parser import (
    BooleanOperator,
    QueryParser,
    SearchField,
    Token,
    TokenKind,
    parse,
)

__all__ = [
    "QueryParser",
    "Token",
    "TokenKind",
    "SearchField",
    "BooleanOperator",
    "parse",
]

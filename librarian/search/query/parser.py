"""Query parser for search box strings.

The search language is deliberately small:

- ``term``: matches anywhere
- ``"exact phrase"``: quoted text, spaces preserved
- ``author:name``, ``title:x``, ``tag:scifi``, ``publisher:x``: field scope
- ``AND``, ``OR``: boolean keywords (AND is implicit between terms)
- ``-term``: exclude

Parsing never fails. Anything that does not fit the syntax is taken as
literal text.
"""

import re
from dataclasses import dataclass
from enum import Enum


class TokenKind(Enum):
    """Kinds of query tokens."""

    TERM = "term"
    PHRASE = "phrase"
    OPERATOR = "operator"


class SearchField(Enum):
    """Fields a token can be scoped to."""

    TITLE = "title"
    AUTHOR = "author"
    TAG = "tag"
    PUBLISHER = "publisher"


class BooleanOperator(Enum):
    """Boolean keywords recognised in queries."""

    AND = "AND"
    OR = "OR"
    NOT = "NOT"


@dataclass(frozen=True)
class Token:
    """One lexical unit of a parsed query."""

    kind: TokenKind
    value: str
    field: SearchField | None = None
    negated: bool = False

    @property
    def is_operator(self) -> bool:
        return self.kind == TokenKind.OPERATOR

    @property
    def operator(self) -> BooleanOperator | None:
        """The boolean operator, for operator tokens."""
        if not self.is_operator:
            return None
        return BooleanOperator(self.value)

    def to_string(self) -> str:
        """Convert token back to query syntax."""
        if self.is_operator:
            return self.value

        result = f'"{self.value}"' if self.kind == TokenKind.PHRASE else self.value
        if self.field:
            result = f"{self.field.value}:{result}"
        if self.negated:
            result = f"-{result}"
        return result


class QueryParser:
    """Tokenizer for search query strings."""

    def __init__(self):
        self.token_pattern = re.compile(
            r'(-?)(?:(title|author|tag|publisher):)?(?:"([^"]+)"|(\S+))',
            re.IGNORECASE,
        )
        self.operators = {op.value for op in BooleanOperator}

    def parse(self, query_string: str) -> list[Token]:
        """Parse a query string into tokens.

        Args:
            query_string: Raw query string from user

        Returns:
            Tokens in query order; empty for a blank query
        """
        if not query_string or not query_string.strip():
            return []

        tokens = []
        for match in self.token_pattern.finditer(query_string):
            negation, field, phrase, term = match.groups()

            if phrase is None and field is None and term.upper() in self.operators:
                tokens.append(Token(TokenKind.OPERATOR, term.upper()))
                continue

            tokens.append(
                Token(
                    kind=TokenKind.PHRASE if phrase is not None else TokenKind.TERM,
                    value=phrase if phrase is not None else term,
                    field=SearchField(field.lower()) if field else None,
                    negated=negation == "-",
                )
            )

        return tokens

    def get_terms(self, tokens: list[Token]) -> list[str]:
        """Get all searchable values from parsed tokens."""
        return [token.value for token in tokens if not token.is_operator]

    def to_string(self, tokens: list[Token]) -> str:
        """Render tokens back to a query string."""
        return " ".join(token.to_string() for token in tokens)


_default_parser = QueryParser()


def parse(query_string: str) -> list[Token]:
    """Parse a query string with the default parser."""
    return _default_parser.parse(query_string)

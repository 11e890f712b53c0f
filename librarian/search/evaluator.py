"""Boolean evaluation of parsed queries against records.

Tokens are split into groups on ``OR``. Every token in a group must match
for the group to match, and a record matches when any group does, so
AND binds tighter than OR. There are no parentheses.
"""

from collections.abc import Iterable

from ..core.models import Record
from .query.parser import BooleanOperator, SearchField, Token, parse


def _contains(text: str, needle: str) -> bool:
    return needle in text.lower()


def match_token(record: Record, token: Token) -> bool:
    """Check whether a single token matches a record.

    Matching is a case-insensitive substring test. Phrases are tested
    the same way as terms. Negation inverts the result of this token only.
    """
    needle = token.value.lower()

    if token.field == SearchField.TITLE:
        result = _contains(record.title, needle) or _contains(record.title_sort, needle)
    elif token.field == SearchField.AUTHOR:
        result = _contains(record.authors, needle) or _contains(
            record.author_sort, needle
        )
    elif token.field == SearchField.TAG:
        result = any(_contains(tag, needle) for tag in record.tags)
    elif token.field == SearchField.PUBLISHER:
        result = _contains(record.publisher, needle)
    else:
        result = (
            _contains(record.title, needle)
            or _contains(record.authors, needle)
            or any(_contains(tag, needle) for tag in record.tags)
            or _contains(record.publisher, needle)
        )

    return not result if token.negated else result


def group_tokens(tokens: Iterable[Token]) -> list[list[Token]]:
    """Split tokens into OR-separated groups.

    ``AND`` is implicit and dropped. A standalone ``NOT`` keyword is
    dropped as well; only the ``-`` prefix negates. Empty groups are
    discarded.
    """
    groups: list[list[Token]] = []
    current: list[Token] = []

    for token in tokens:
        if token.operator == BooleanOperator.OR:
            if current:
                groups.append(current)
            current = []
        elif token.is_operator:
            continue
        else:
            current.append(token)

    if current:
        groups.append(current)
    return groups


def matches(record: Record, tokens: Iterable[Token]) -> bool:
    """Check whether a record matches a parsed query.

    A query with no tokens at all matches every record. A query made only
    of operators has no groups and matches nothing.
    """
    tokens = list(tokens)
    if not tokens:
        return True
    return _matches_groups(record, group_tokens(tokens))


def _matches_groups(record: Record, groups: list[list[Token]]) -> bool:
    return any(all(match_token(record, token) for token in group) for group in groups)


class QueryEvaluator:
    """A query compiled once and applied to many records."""

    def __init__(self, query: str):
        self.query = query
        self.tokens = parse(query)
        self.groups = group_tokens(self.tokens)

    @property
    def is_empty(self) -> bool:
        """True when the query is blank and matches everything."""
        return not self.tokens

    def matches(self, record: Record) -> bool:
        if self.is_empty:
            return True
        return _matches_groups(record, self.groups)

    def filter(self, records: Iterable[Record]) -> list[Record]:
        """Keep the records matching the query, in their original order."""
        if self.is_empty:
            return list(records)
        return [record for record in records if self.matches(record)]

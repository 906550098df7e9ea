"""
Search query parsing.

A query is either free text or field-qualified (``field:value``), in which
case scoring is restricted to the named field. Parsing happens once per
search, before any record is scored.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

# ASCII word characters only: "étape:x" stays free text
FIELD_QUERY_PATTERN = re.compile(r"^(\w+):(.*)$", re.ASCII)


class QueryKind(Enum):
    """Shapes a search query can take."""

    FREE_TEXT = "free_text"
    FIELD_QUALIFIED = "field_qualified"


@dataclass(frozen=True)
class ParsedQuery:
    """Result of query parsing."""

    kind: QueryKind
    raw: str
    text: str
    field: Optional[str] = None

    @property
    def is_field_qualified(self) -> bool:
        return self.kind is QueryKind.FIELD_QUALIFIED


def is_empty_query(raw: Optional[str]) -> bool:
    """True for None, empty or whitespace-only queries."""
    return not raw or not raw.strip()


def parse_query(raw: str) -> ParsedQuery:
    """
    Parse a raw query into free text or a field-qualified query.

    The pattern is matched against the whole trimmed query. For
    ``"title:Report"`` the field is ``title`` and the text ``Report``; the
    value may be empty (``"title:"``). Anything else is free text.

    Args:
        raw: Query as typed by the user

    Returns:
        ParsedQuery describing the query
    """
    trimmed = (raw or "").strip()
    match = FIELD_QUERY_PATTERN.match(trimmed)
    if match:
        field, value = match.groups()
        return ParsedQuery(
            kind=QueryKind.FIELD_QUALIFIED, raw=trimmed, text=value, field=field
        )
    return ParsedQuery(kind=QueryKind.FREE_TEXT, raw=trimmed, text=trimmed)

"""
Search & highlight.

Matching is a case-insensitive literal substring test on title or content.
The excerpt is the first 200 characters of content (plus "..."), and every
occurrence of the query inside that excerpt is wrapped in <mark> tags.
A match beyond the excerpt is still a result, just without a visible mark.
"""

import re
from typing import Iterable, List

from app.features.journaling.models import Entry, SearchResult
from app.shared.constants import (
    HIGHLIGHT_CLOSE,
    HIGHLIGHT_EXCERPT_CHARS,
    HIGHLIGHT_OPEN,
    SEARCH_RESULT_LIMIT,
)
from app.shared.errors import ValidationError


def require_query(query) -> str:
    """Return the query, raising ValidationError if it is missing or blank."""
    if not query or not query.strip():
        raise ValidationError("query required", details={"field": "q"})
    return query


def matches(entry: Entry, query: str) -> bool:
    needle = query.lower()
    return needle in entry.title.lower() or needle in entry.content.lower()


def excerpt(content: str, limit: int = HIGHLIGHT_EXCERPT_CHARS) -> str:
    if len(content) > limit:
        return content[:limit] + "..."
    return content


def highlight(content: str, query: str) -> str:
    """Truncate content, then mark every case-insensitive occurrence of query."""
    pattern = re.compile(re.escape(query), re.IGNORECASE)
    return pattern.sub(lambda m: f"{HIGHLIGHT_OPEN}{m.group(0)}{HIGHLIGHT_CLOSE}", excerpt(content))


def search_entries(
    entries: Iterable[Entry],
    query: str,
    limit: int = SEARCH_RESULT_LIMIT,
) -> List[SearchResult]:
    """Filter entries by query, newest first, capped at limit, with highlights."""
    query = require_query(query)
    found = sorted(
        (entry for entry in entries if matches(entry, query)),
        key=lambda entry: entry.created_at,
        reverse=True,
    )
    return [
        SearchResult.model_validate({**entry.model_dump(), "highlight": highlight(entry.content, query)})
        for entry in found[:limit]
    ]

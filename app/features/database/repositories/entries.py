"""
Entries Repository - journal entry data access.

Every query is scoped to one owner with eq("user_id", ...). Unlike the
best-effort lookups elsewhere, store failures here are not swallowed: the
callers' results depend on the rows, so errors surface as UpstreamError.
"""

import logging
from datetime import datetime
from typing import Dict, List, Optional

from app.features.journaling.models import Entry
from app.shared.errors import UpstreamError

logger = logging.getLogger("Journal.Database.Entries")

TABLE = "entries"


def _like_literal(text: str) -> str:
    """Escape LIKE metacharacters so the text only matches itself."""
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _ilike_pattern(text: str) -> str:
    """Quote a literal substring for a PostgREST or=(...) ilike filter."""
    escaped = f"%{_like_literal(text)}%".replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


class EntriesRepository:
    """Repository for journal entry operations."""

    def __init__(self, client):
        """Initialize with Supabase client."""
        self.client = client

    def fetch(
        self,
        owner_id: str,
        after: Optional[datetime] = None,
        before: Optional[datetime] = None,
        before_exclusive: Optional[datetime] = None,
        query: Optional[str] = None,
        ascending: bool = False,
        limit: Optional[int] = None,
    ) -> List[Entry]:
        """
        Fetch one owner's entries ordered by created_at.

        Args:
            owner_id: Owning user; always applied
            after: Inclusive lower bound on created_at
            before: Inclusive upper bound on created_at
            before_exclusive: Exclusive upper bound on created_at
            query: Case-insensitive substring on title or content
            ascending: Oldest first instead of newest first
            limit: Maximum number of rows
        """
        if not owner_id:
            raise ValueError("owner_id is required for every entries query")

        try:
            request = self.client.table(TABLE).select("*").eq("user_id", owner_id)
            if after is not None:
                request = request.gte("created_at", after.isoformat())
            if before is not None:
                request = request.lte("created_at", before.isoformat())
            if before_exclusive is not None:
                request = request.lt("created_at", before_exclusive.isoformat())
            if query:
                pattern = _ilike_pattern(query)
                request = request.or_(f"title.ilike.{pattern},content.ilike.{pattern}")
            request = request.order("created_at", desc=not ascending)
            if limit is not None:
                request = request.limit(limit)

            result = request.execute()
        except Exception as e:
            logger.error(f"Error fetching entries: {type(e).__name__}: {e}")
            raise UpstreamError("supabase", "Failed to fetch entries", operation="select") from e

        rows = result.data or []
        logger.debug(f"Fetched {len(rows)} entries")
        return [Entry.model_validate(row) for row in rows]

    def insert(self, owner_id: str, payload: Dict) -> Entry:
        """Insert a new entry for owner_id and return the stored row."""
        if not owner_id:
            raise ValueError("owner_id is required to create an entry")

        row = dict(payload, user_id=owner_id)
        try:
            result = self.client.table(TABLE).insert(row).execute()
        except Exception as e:
            logger.error(f"Error creating entry: {type(e).__name__}: {e}")
            raise UpstreamError("supabase", "Failed to create entry", operation="insert") from e

        if not result.data:
            raise UpstreamError("supabase", "Failed to create entry", operation="insert")

        entry = Entry.model_validate(result.data[0])
        logger.info(f"Entry created: {entry.id}")
        return entry

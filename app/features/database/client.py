"""
Database Client - access to the journal's Supabase tables.

Thin wrapper that hands out domain-specific repositories over one shared
Supabase client.
"""

import logging
from functools import lru_cache

from app.core.database import get_supabase_client
from app.features.database.repositories.entries import EntriesRepository

logger = logging.getLogger("Journal.Database")


class DatabaseClient:
    """
    Unified database client providing access to all repositories.

    Usage:
        db = get_database_client()
        entries = db.entries.fetch(owner_id, query="family")
    """

    def __init__(self, client=None):
        self._client = client if client is not None else get_supabase_client()
        self.entries = EntriesRepository(self._client)
        logger.info("Database client initialized")

    @property
    def client(self):
        """Direct access to the Supabase client (auth, one-off queries)."""
        return self._client


@lru_cache(maxsize=1)
def get_database_client() -> DatabaseClient:
    """Get the singleton database client."""
    return DatabaseClient()

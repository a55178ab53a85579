"""
Database Feature Module - data access layer over Supabase.

Usage:
    from app.features.database import get_database_client

    entries = get_database_client().entries.fetch(owner_id, ascending=True)
"""

from app.features.database.client import DatabaseClient, get_database_client

__all__ = [
    "DatabaseClient",
    "get_database_client",
]

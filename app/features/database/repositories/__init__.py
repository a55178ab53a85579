"""Database Repositories - Organized data access."""

from app.features.database.repositories.entries import EntriesRepository

__all__ = [
    "EntriesRepository",
]

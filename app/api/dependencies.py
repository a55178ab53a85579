from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header

from app.features.auth.identity import SupabaseIdentityResolver, extract_bearer_token
from app.features.database.client import DatabaseClient, get_database_client
from app.features.journaling.service import JournalService
from app.services.llm import JournalLanguageModel, create_language_model


@lru_cache(maxsize=1)
def get_language_model() -> JournalLanguageModel:
    """Provide a singleton language model for request handlers."""
    return create_language_model()


def get_database() -> DatabaseClient:
    """Provide the singleton Supabase interface for request handlers."""
    return get_database_client()


def get_identity_resolver(db: DatabaseClient = Depends(get_database)) -> SupabaseIdentityResolver:
    return SupabaseIdentityResolver(db.client)


def get_current_owner(
    authorization: Optional[str] = Header(default=None),
    resolver: SupabaseIdentityResolver = Depends(get_identity_resolver),
) -> str:
    """Resolve the Authorization bearer token to the owner id, or raise UnauthorizedError."""
    return resolver.resolve(extract_bearer_token(authorization))


def get_journal_service(
    db: DatabaseClient = Depends(get_database),
    model: JournalLanguageModel = Depends(get_language_model),
) -> JournalService:
    """Per-request journal service wired to the shared store and model."""
    return JournalService(
        entries=db.entries,
        classifier=model,
        summarizer=model,
    )

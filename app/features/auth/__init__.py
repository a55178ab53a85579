"""Auth Feature Module - bearer token to owner id."""

from app.features.auth.identity import SupabaseIdentityResolver, extract_bearer_token

__all__ = [
    "SupabaseIdentityResolver",
    "extract_bearer_token",
]

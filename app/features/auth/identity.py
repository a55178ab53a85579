"""
Owner identity resolution.

Turns the bearer token sent by the web client into the Supabase user id that
every journal operation is scoped to.
"""

import logging
from typing import Optional

from app.shared.errors import UnauthorizedError

logger = logging.getLogger("Journal.Auth")

BEARER_PREFIX = "Bearer "


def extract_bearer_token(authorization: Optional[str]) -> str:
    """Return the token from an Authorization header, or raise UnauthorizedError."""
    if not authorization:
        raise UnauthorizedError()
    token = authorization[len(BEARER_PREFIX):] if authorization.startswith(BEARER_PREFIX) else authorization
    token = token.strip()
    if not token:
        raise UnauthorizedError()
    return token


class SupabaseIdentityResolver:
    """Validates access tokens against Supabase Auth."""

    def __init__(self, client):
        self.client = client

    def resolve(self, token: str) -> str:
        """
        Return the owner id for a valid access token.

        Raises:
            UnauthorizedError: If Supabase rejects the token or returns no user
        """
        try:
            response = self.client.auth.get_user(token)
        except Exception as e:
            logger.info(f"Token rejected by Supabase Auth: {type(e).__name__}")
            raise UnauthorizedError() from e

        user = getattr(response, "user", None)
        if user is None or not getattr(user, "id", None):
            raise UnauthorizedError()
        return str(user.id)

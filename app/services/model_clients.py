"""
Shared model clients for the journal service.

Centralizes OpenAI and Anthropic API access so every feature reuses one
connection pool per provider.
"""

import logging
from functools import lru_cache

from anthropic import AsyncAnthropic
from openai import AsyncOpenAI

from app.core.config import settings

logger = logging.getLogger("Journal.ModelClients")


@lru_cache(maxsize=1)
def get_openai_client() -> AsyncOpenAI:
    """
    Get the singleton OpenAI async client.

    Raises:
        ValueError: If OPENAI_API_KEY is not set
    """
    if not settings.OPENAI_API_KEY:
        raise ValueError("OPENAI_API_KEY environment variable not set")

    client = AsyncOpenAI(api_key=settings.OPENAI_API_KEY, timeout=settings.LLM_TIMEOUT_SECONDS)
    logger.info("OpenAI client initialized")
    return client


@lru_cache(maxsize=1)
def get_anthropic_client() -> AsyncAnthropic:
    """
    Get the singleton Anthropic async client.

    Raises:
        ValueError: If ANTHROPIC_API_KEY is not set
    """
    if not settings.ANTHROPIC_API_KEY:
        raise ValueError("ANTHROPIC_API_KEY environment variable not set")

    client = AsyncAnthropic(api_key=settings.ANTHROPIC_API_KEY, timeout=settings.LLM_TIMEOUT_SECONDS)
    logger.info("Anthropic client initialized")
    return client

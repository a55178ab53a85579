"""
Logging utilities for keeping journal text out of the logs.

Entries are private writing: titles, contents, search queries and tokens are
redacted or truncated before they reach a log line.
"""
import re
from typing import Any

# Keys whose values are never logged verbatim
SENSITIVE_KEYS = [
    "content", "title", "text", "highlight",
    "token", "authorization", "bearer", "api_key",
    "password", "secret", "email",
]


def sanitize_for_logging(data: Any, max_len: int = 100) -> Any:
    """
    Sanitize data for safe logging.

    Args:
        data: The data to sanitize (dict, list, str, or other types)
        max_len: Maximum length for string values before truncation

    Returns:
        Sanitized version of the data safe for logging
    """
    if data is None:
        return "None"

    if isinstance(data, dict):
        sanitized = {}
        for k, v in data.items():
            if any(sensitive in str(k).lower() for sensitive in SENSITIVE_KEYS):
                sanitized[k] = "***REDACTED***"
            else:
                sanitized[k] = sanitize_for_logging(v, max_len)
        return sanitized

    if isinstance(data, (list, tuple)):
        return [sanitize_for_logging(item, max_len) for item in data]

    if isinstance(data, (int, float, bool)):
        return data

    if isinstance(data, str):
        # Single-line output
        cleaned = re.sub(r'[\x00-\x1F\x7F]', '', data)
        if len(cleaned) > max_len:
            return cleaned[:max_len] + "..."
        return cleaned

    return sanitize_for_logging(str(data), max_len)


def describe_text(text: str) -> str:
    """Describe a piece of journal text by its size only."""
    if not text:
        return "<empty>"
    return f"<{len(text)} chars, {len(text.split())} words>"

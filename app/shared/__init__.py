# Shared constants and utilities
from .constants import (
    DEFAULT_PERIOD,
    PERIOD_DAYS,
    SENTIMENT_LABELS,
    STOP_WORDS,
)

__all__ = [
    "DEFAULT_PERIOD",
    "PERIOD_DAYS",
    "SENTIMENT_LABELS",
    "STOP_WORDS",
]

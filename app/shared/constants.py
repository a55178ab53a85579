"""
Shared constants for the journal service.
"""

# Sentiment buckets an entry can be filed under
SENTIMENT_LABELS = ("positive", "negative", "neutral")

# Analytics period selector -> days back from now
PERIOD_DAYS = {
    "last7days": 7,
    "last30days": 30,
    "last3months": 90,
    "last6months": 180,
    "lastyear": 365,
}
DEFAULT_PERIOD = "last30days"

# Word-frequency ranking
TOP_WORDS_LIMIT = 20
MIN_WORD_LENGTH = 4
STOP_WORDS = frozenset({
    "that", "this", "with", "have", "will", "been", "were", "said",
    "each", "which", "their", "time", "would", "there", "could", "other",
})

# Search
SEARCH_RESULT_LIMIT = 20
HIGHLIGHT_EXCERPT_CHARS = 200
HIGHLIGHT_OPEN = "<mark>"
HIGHLIGHT_CLOSE = "</mark>"

# Language model fallbacks
FALLBACK_SENTIMENT = {"score": 0.0, "label": "neutral", "confidence": 0.5}
FALLBACK_SUMMARY = "Unable to generate summary at this time."
FALLBACK_PROMPT = "What made you feel most alive today?"

# Export
DEFAULT_EXPORT_HEADING = "My Life Story"
EXPORT_SUBTITLE = "A year of reflections and growth • {year}"

"""
Journal service: the per-request pipeline behind every journal endpoint.

Each operation takes the resolved owner id explicitly, fetches that owner's
rows once through the entries repository, and hands them to one of the pure
transforms (analytics, memories, search, export). The language model is only
reached through the injected classifier and summarizer.
"""

import logging
from datetime import datetime, tzinfo
from typing import Callable, List, Optional
from zoneinfo import ZoneInfo

from app.core.config import settings
from app.core.logging_utils import sanitize_for_logging
from app.core.tracing import get_tracer
from app.features.database.repositories.entries import EntriesRepository
from app.features.journaling.analytics import compute_analytics, period_window, resolve_sentiment_mode
from app.features.journaling.export import (
    DocumentRenderer,
    HtmlDocumentRenderer,
    compose_export,
    export_title,
    year_bounds,
)
from app.features.journaling.memories import find_memory, one_year_before
from app.features.journaling.models import AnalyticsBundle, Entry, ExportResult, SearchResult
from app.features.journaling.search import require_query, search_entries
from app.services.llm import SentimentClassifier, Summarizer
from app.shared.constants import SEARCH_RESULT_LIMIT
from app.shared.errors import ValidationError

logger = logging.getLogger("Journal.Service")
tracer = get_tracer(__name__)

MIN_YEAR = 1
MAX_YEAR = 9998


def count_words(content: str) -> int:
    """Whitespace-separated tokens, empty tokens discarded."""
    return len(content.split())


def _validate_year(year: int) -> int:
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise ValidationError(f"year must be between {MIN_YEAR} and {MAX_YEAR}", details={"field": "year"})
    return year


class JournalService:
    """Orchestrates store, language model and aggregation for one owner at a time."""

    def __init__(
        self,
        entries: EntriesRepository,
        classifier: SentimentClassifier,
        summarizer: Summarizer,
        tz: Optional[tzinfo] = None,
        sentiment_mode: Optional[str] = None,
        renderer: Optional[DocumentRenderer] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.entries = entries
        self.classifier = classifier
        self.summarizer = summarizer
        self.tz = tz or ZoneInfo(settings.JOURNAL_TIMEZONE)
        self.sentiment_mode = resolve_sentiment_mode(sentiment_mode or settings.MONTHLY_SENTIMENT_MODE)
        self.renderer = renderer or HtmlDocumentRenderer()
        self._clock = clock

    def now(self) -> datetime:
        if self._clock is not None:
            return self._clock()
        return datetime.now(self.tz)

    # =========================================================================
    # WRITE
    # =========================================================================

    async def create_entry(self, owner_id: str, title: Optional[str], content: Optional[str]) -> Entry:
        """Score and store a new entry."""
        if not title or not title.strip() or not content or not content.strip():
            raise ValidationError("Title and content are required", details={"fields": ["title", "content"]})

        sentiment = await self.classifier.classify(content)
        entry = self.entries.insert(owner_id, {
            "title": title,
            "content": content,
            "word_count": count_words(content),
            "sentiment_score": sentiment.score,
            "sentiment_label": sentiment.label,
        })
        logger.info(
            "Entry stored",
            extra={"entry_id": entry.id, "word_count": entry.word_count, "sentiment": sentiment.label},
        )
        return entry

    # =========================================================================
    # READ
    # =========================================================================

    def list_entries(self, owner_id: str, month: Optional[int] = None, year: Optional[int] = None) -> List[Entry]:
        """Timeline listing, newest first, optionally narrowed to a month or a year."""
        if month is not None:
            if not 1 <= month <= 12:
                raise ValidationError("month must be between 1 and 12", details={"field": "month"})
            year = _validate_year(year if year is not None else self.now().year)
            start = datetime(year, month, 1, tzinfo=self.tz)
            end = datetime(year + 1, 1, 1, tzinfo=self.tz) if month == 12 else datetime(year, month + 1, 1, tzinfo=self.tz)
            return self.entries.fetch(owner_id, after=start, before_exclusive=end)

        if year is not None:
            _validate_year(year)
            return self.entries.fetch(
                owner_id,
                after=datetime(year, 1, 1, tzinfo=self.tz),
                before_exclusive=datetime(year + 1, 1, 1, tzinfo=self.tz),
            )

        return self.entries.fetch(owner_id)

    async def get_analytics(self, owner_id: str, period: Optional[str] = None) -> AnalyticsBundle:
        """Analytics bundle for the period window ending now."""
        period, start, end = period_window(period, self.now())
        entries = self.entries.fetch(owner_id, after=start, before=end)

        with tracer.start_as_current_span("journal.compute_analytics") as span:
            span.set_attribute("journal.period", period)
            span.set_attribute("journal.entries", len(entries))
            bundle = compute_analytics(entries, end, tz=self.tz, sentiment_mode=self.sentiment_mode)

        if entries:
            bundle.summary = await self.summarizer.summarize([entry.content for entry in entries], period)

        logger.info(
            "Analytics computed",
            extra={"period": period, "total_entries": bundle.total_entries, "mode": self.sentiment_mode},
        )
        return bundle

    def get_today_memory(self, owner_id: str) -> Optional[Entry]:
        """Most recent entry from a prior year written on today's month-day."""
        today = self.now()
        candidates = self.entries.fetch(owner_id, before_exclusive=one_year_before(today))
        return find_memory(candidates, today, tz=self.tz)

    def search(self, owner_id: str, query: Optional[str]) -> List[SearchResult]:
        """Entries whose title or content contains query, with highlighted excerpts."""
        query = require_query(query)
        logger.info(f"Searching entries for {sanitize_for_logging(query, max_len=20)!r}")
        # ilike treats % and _ as wildcards, so rows are re-checked literally
        candidates = self.entries.fetch(owner_id, query=query, limit=SEARCH_RESULT_LIMIT)
        return search_entries(candidates, query)

    def compose_export(self, owner_id: str, year: int, title: Optional[str] = None) -> ExportResult:
        """Yearly export as a chapter document plus its rendered HTML."""
        _validate_year(year)
        start, end = year_bounds(year, self.tz)
        entries = self.entries.fetch(owner_id, after=start, before=end, ascending=True)

        document = compose_export(entries, year, title, tz=self.tz)
        logger.info(f"Export composed: {document.total_entries} entries in {len(document.chapters)} chapters")
        return ExportResult(
            title=export_title(year, title),
            total_entries=document.total_entries,
            html=self.renderer.render(document),
            document=document,
        )

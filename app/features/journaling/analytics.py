"""
Analytics aggregation over one owner's journal entries.

Everything here is a pure reduction over an already-fetched list; the
summary text is requested separately by the journal service.
"""

import logging
import math
import re
from collections import Counter
from datetime import datetime, timedelta, tzinfo
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from app.features.journaling.models import (
    AnalyticsBundle,
    Entry,
    MonthlyPoint,
    SentimentDistribution,
    WeeklyPoint,
    WordCount,
)
from app.shared.constants import (
    DEFAULT_PERIOD,
    MIN_WORD_LENGTH,
    PERIOD_DAYS,
    SENTIMENT_LABELS,
    STOP_WORDS,
    TOP_WORDS_LIMIT,
)
from app.shared.errors import DataIntegrityError

logger = logging.getLogger("Journal.Analytics")

MONTH_ABBR = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
WEEKDAY_ABBR = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

RUNNING_AVERAGE = "running"
TRUE_MEAN = "mean"

# ASCII word characters only; accented letters are stripped like punctuation
_NON_WORD = re.compile(r"[^A-Za-z0-9_\s]")


def resolve_period(period: Optional[str]) -> str:
    """Map a requested period onto a known one, defaulting to last30days."""
    if not period:
        return DEFAULT_PERIOD
    if period not in PERIOD_DAYS:
        logger.warning(f"Unknown analytics period '{period}', using {DEFAULT_PERIOD}")
        return DEFAULT_PERIOD
    return period


def resolve_sentiment_mode(mode: Optional[str]) -> str:
    """Map a configured monthly averaging mode onto a known one, defaulting to running."""
    if not mode:
        return RUNNING_AVERAGE
    mode = mode.strip().lower()
    if mode not in (RUNNING_AVERAGE, TRUE_MEAN):
        logger.warning(f"Unknown monthly sentiment mode '{mode}', using {RUNNING_AVERAGE}")
        return RUNNING_AVERAGE
    return mode


def period_window(period: Optional[str], now: datetime) -> Tuple[str, datetime, datetime]:
    """Return (period, start, end) for the analytics date range ending at now."""
    period = resolve_period(period)
    return period, now - timedelta(days=PERIOD_DAYS[period]), now


def to_local(moment: datetime, tz: Optional[tzinfo] = None) -> datetime:
    """Express a timestamp in the journal's timezone (naive values are taken as-is)."""
    if tz is None or moment.tzinfo is None:
        return moment
    return moment.astimezone(tz)


def round_half_up(value: float) -> int:
    """Round like JavaScript's Math.round (x.5 goes up)."""
    return int(math.floor(value + 0.5))


def month_label(moment: datetime) -> str:
    """Format a timestamp as 'Mon YYYY', e.g. 'Mar 2024'."""
    return f"{MONTH_ABBR[moment.month - 1]} {moment.year}"


# =============================================================================
# REDUCTIONS
# =============================================================================

def sentiment_distribution(entries: Iterable[Entry]) -> SentimentDistribution:
    """
    Count entries per sentiment label.

    Raises:
        DataIntegrityError: If an entry carries a label outside SENTIMENT_LABELS
    """
    counts = dict.fromkeys(SENTIMENT_LABELS, 0)
    for entry in entries:
        if entry.sentiment_label not in counts:
            raise DataIntegrityError(
                "Entry has an unrecognized sentiment label",
                details={"entry_id": entry.id, "label": entry.sentiment_label},
            )
        counts[entry.sentiment_label] += 1
    return SentimentDistribution(**counts)


def monthly_series(
    entries: Sequence[Entry],
    tz: Optional[tzinfo] = None,
    mode: str = RUNNING_AVERAGE,
) -> List[MonthlyPoint]:
    """
    Group entries by calendar month, in order of first appearance.

    In RUNNING_AVERAGE mode each month's avgSentiment follows the recurrence
    avg = (avg + score) / 2 over the entries in iteration order, seeded with
    the first score. It is order dependent and is not the arithmetic mean;
    TRUE_MEAN mode gives the mean instead.
    """
    buckets: Dict[str, dict] = {}
    for entry in entries:
        month = month_label(to_local(entry.created_at, tz))
        bucket = buckets.get(month)
        if bucket is None:
            buckets[month] = {
                "entries": 1,
                "words": entry.word_count,
                "running": entry.sentiment_score,
                "score_sum": entry.sentiment_score,
            }
            continue
        bucket["entries"] += 1
        bucket["words"] += entry.word_count
        bucket["running"] = (bucket["running"] + entry.sentiment_score) / 2
        bucket["score_sum"] += entry.sentiment_score

    series = []
    for month, bucket in buckets.items():
        if mode == TRUE_MEAN:
            avg = bucket["score_sum"] / bucket["entries"]
        else:
            avg = bucket["running"]
        series.append(MonthlyPoint(
            month=month,
            entries=bucket["entries"],
            words=bucket["words"],
            avg_sentiment=avg,
        ))
    return series


def weekly_series(
    entries: Sequence[Entry],
    now: datetime,
    tz: Optional[tzinfo] = None,
) -> List[WeeklyPoint]:
    """Entry count and mean sentiment for each of the last 7 days, oldest first."""
    today = to_local(now, tz).date()
    by_day: Dict = {}
    for entry in entries:
        by_day.setdefault(to_local(entry.created_at, tz).date(), []).append(entry.sentiment_score)

    series = []
    for offset in range(6, -1, -1):
        day = today - timedelta(days=offset)
        scores = by_day.get(day, [])
        series.append(WeeklyPoint(
            day=WEEKDAY_ABBR[day.weekday()],
            entries=len(scores),
            sentiment=sum(scores) / len(scores) if scores else 0,
        ))
    return series


def tokenize_words(text: str) -> List[str]:
    """Lowercased words worth counting: punctuation stripped, short and stop words dropped."""
    cleaned = _NON_WORD.sub("", text.lower())
    return [
        word for word in cleaned.split()
        if len(word) >= MIN_WORD_LENGTH and word not in STOP_WORDS
    ]


def top_words(entries: Iterable[Entry], limit: int = TOP_WORDS_LIMIT) -> List[WordCount]:
    """Most frequent words across all contents; ties keep first-seen order."""
    all_text = " ".join(entry.content for entry in entries)
    counts = Counter(tokenize_words(all_text))
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [WordCount(word=word, count=count) for word, count in ranked[:limit]]


# =============================================================================
# BUNDLE
# =============================================================================

def compute_analytics(
    entries: Sequence[Entry],
    now: datetime,
    tz: Optional[tzinfo] = None,
    sentiment_mode: str = RUNNING_AVERAGE,
) -> AnalyticsBundle:
    """
    Reduce entries into an AnalyticsBundle (summary left empty).

    Args:
        entries: One owner's entries for the period, newest first
        now: End of the analytics window
        tz: Timezone used for calendar grouping
        sentiment_mode: RUNNING_AVERAGE or TRUE_MEAN for monthly avgSentiment
    """
    if not entries:
        return AnalyticsBundle()

    total_entries = len(entries)
    total_words = sum(entry.word_count for entry in entries)

    return AnalyticsBundle(
        total_entries=total_entries,
        total_words=total_words,
        average_words_per_entry=round_half_up(total_words / total_entries),
        sentiment_distribution=sentiment_distribution(entries),
        monthly_data=monthly_series(entries, tz, sentiment_mode),
        weekly_data=weekly_series(entries, now, tz),
        top_words=top_words(entries),
    )

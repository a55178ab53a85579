"""On-this-day memories: the most recent entry from a prior year sharing today's month-day."""

from datetime import datetime, tzinfo
from typing import Iterable, Optional

from app.features.journaling.analytics import to_local
from app.features.journaling.models import Entry


def one_year_before(moment: datetime) -> datetime:
    """Same instant one calendar year earlier; Feb 29 maps to Feb 28."""
    try:
        return moment.replace(year=moment.year - 1)
    except ValueError:
        return moment.replace(year=moment.year - 1, day=28)


def month_day(moment: datetime) -> str:
    return moment.strftime("%m-%d")


def find_memory(
    entries: Iterable[Entry],
    today: datetime,
    tz: Optional[tzinfo] = None,
) -> Optional[Entry]:
    """
    Return the first entry (in the given newest-first order) written on
    today's month-day in an earlier year, or None.

    Entries that are not strictly older than one year before today are
    skipped, so the input need not be pre-filtered.
    """
    cutoff = one_year_before(today)
    signature = month_day(to_local(today, tz))
    for entry in entries:
        if entry.created_at >= cutoff:
            continue
        if month_day(to_local(entry.created_at, tz)) == signature:
            return entry
    return None

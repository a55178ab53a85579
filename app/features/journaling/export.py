"""
Yearly export ("life story") composition.

compose_export() builds a renderer-independent ExportDocument: a header block
followed by one chapter per calendar month, in ascending date order. A
DocumentRenderer turns that document into its final form; the HTML renderer
produces a printable page that the browser converts to PDF.
"""

import html
import logging
from abc import ABC, abstractmethod
from datetime import datetime, tzinfo
from typing import List, Optional, Sequence

from app.features.journaling.analytics import to_local
from app.features.journaling.models import (
    Entry,
    ExportChapter,
    ExportDocument,
    ExportEntry,
)
from app.shared.constants import DEFAULT_EXPORT_HEADING, EXPORT_SUBTITLE

logger = logging.getLogger("Journal.Export")

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
WEEKDAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


def year_bounds(year: int, tz: Optional[tzinfo] = None) -> tuple[datetime, datetime]:
    """First and last second of a calendar year in the journal's timezone."""
    return (
        datetime(year, 1, 1, 0, 0, 0, tzinfo=tz),
        datetime(year, 12, 31, 23, 59, 59, tzinfo=tz),
    )


def long_date(moment: datetime) -> str:
    """e.g. 'Friday, March 15, 2024'."""
    return f"{WEEKDAY_NAMES[moment.weekday()]}, {MONTH_NAMES[moment.month - 1]} {moment.day}, {moment.year}"


def export_title(year: int, title: Optional[str] = None) -> str:
    return title or f"{DEFAULT_EXPORT_HEADING} - {year}"


def compose_export(
    entries: Sequence[Entry],
    year: int,
    title: Optional[str] = None,
    tz: Optional[tzinfo] = None,
) -> ExportDocument:
    """
    Group a year's entries (oldest first) into monthly chapters.

    A chapter starts at the first entry and at every entry whose calendar
    month differs from the previous entry's.
    """
    chapters: List[ExportChapter] = []
    previous_month = None
    for entry in entries:
        written = to_local(entry.created_at, tz)
        current_month = (written.year, written.month)
        if current_month != previous_month:
            chapters.append(ExportChapter(
                month=written.month,
                heading=f"{MONTH_NAMES[written.month - 1]} {year}",
            ))
            previous_month = current_month
        chapters[-1].entries.append(ExportEntry(
            date=entry.created_at,
            date_label=long_date(written),
            title=entry.title,
            content=entry.content,
        ))

    return ExportDocument(
        title=export_title(year, title),
        heading=title or DEFAULT_EXPORT_HEADING,
        subtitle=EXPORT_SUBTITLE.format(year=year),
        year=year,
        total_entries=len(entries),
        chapters=chapters,
    )


class DocumentRenderer(ABC):
    """Turns an ExportDocument into a deliverable string."""

    @abstractmethod
    def render(self, document: ExportDocument) -> str:
        ...


_STYLE = """
      body { font-family: 'Georgia', serif; line-height: 1.6; color: #333; max-width: 800px; margin: 0 auto; padding: 40px 20px; }
      .header { text-align: center; margin-bottom: 60px; border-bottom: 2px solid #10b981; padding-bottom: 20px; }
      .title { font-size: 36px; color: #10b981; margin-bottom: 10px; }
      .subtitle { font-size: 18px; color: #666; }
      .entry { margin-bottom: 40px; page-break-inside: avoid; }
      .entry-date { font-size: 14px; color: #10b981; font-weight: bold; margin-bottom: 10px; }
      .entry-title { font-size: 24px; color: #333; margin-bottom: 15px; }
      .entry-content { font-size: 16px; line-height: 1.8; }
      .chapter { page-break-before: always; margin-top: 60px; }
      .chapter-title { font-size: 28px; color: #10b981; text-align: center; margin-bottom: 40px; border-bottom: 1px solid #ddd; padding-bottom: 20px; }
"""


class HtmlDocumentRenderer(DocumentRenderer):
    """Printable HTML page; entry text is escaped and newlines become <br>."""

    def render(self, document: ExportDocument) -> str:
        parts = [
            "<!DOCTYPE html>",
            "<html>",
            "  <head>",
            '    <meta charset="utf-8">',
            f"    <title>{html.escape(document.title)}</title>",
            f"    <style>{_STYLE}    </style>",
            "  </head>",
            "  <body>",
            '    <div class="header">',
            f'      <h1 class="title">{html.escape(document.heading)}</h1>',
            f'      <p class="subtitle">{html.escape(document.subtitle)}</p>',
            "    </div>",
        ]
        for chapter in document.chapters:
            parts.append(f'    <div class="chapter"><h2 class="chapter-title">{html.escape(chapter.heading)}</h2></div>')
            for entry in chapter.entries:
                parts.extend([
                    '    <div class="entry">',
                    f'      <div class="entry-date">{html.escape(entry.date_label)}</div>',
                    f'      <h3 class="entry-title">{html.escape(entry.title)}</h3>',
                    f'      <div class="entry-content">{self._paragraphs(entry.content)}</div>',
                    "    </div>",
                ])
        parts.extend(["  </body>", "</html>"])
        return "\n".join(parts)

    @staticmethod
    def _paragraphs(content: str) -> str:
        return html.escape(content).replace("\n", "<br>")

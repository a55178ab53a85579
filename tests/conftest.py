import itertools
from datetime import datetime, timezone

import pytest

from app.features.journaling.models import Entry, SentimentAnalysis
from app.features.journaling.service import JournalService

NOW = datetime(2024, 3, 15, 12, 0, tzinfo=timezone.utc)
OWNER = "owner-1"
OTHER_OWNER = "owner-2"

_ids = itertools.count(1)


def make_entry(
    created_at,
    content="A quiet day.",
    title="Untitled",
    score=0.0,
    label="neutral",
    owner=OWNER,
    word_count=None,
):
    return Entry(
        id=f"entry-{next(_ids)}",
        user_id=owner,
        title=title,
        content=content,
        sentiment_score=score,
        sentiment_label=label,
        word_count=len(content.split()) if word_count is None else word_count,
        created_at=created_at,
    )


class FakeEntriesRepository:
    """In-memory stand-in for EntriesRepository with the same filter semantics."""

    def __init__(self, entries=None, clock=lambda: NOW):
        self.entries = list(entries or [])
        self.clock = clock
        self.fetch_calls = []
        self.inserted = []

    def fetch(self, owner_id, after=None, before=None, before_exclusive=None, query=None, ascending=False, limit=None):
        self.fetch_calls.append({
            "owner_id": owner_id,
            "after": after,
            "before": before,
            "before_exclusive": before_exclusive,
            "query": query,
            "ascending": ascending,
            "limit": limit,
        })
        rows = [e for e in self.entries if e.user_id == owner_id]
        if after is not None:
            rows = [e for e in rows if e.created_at >= after]
        if before is not None:
            rows = [e for e in rows if e.created_at <= before]
        if before_exclusive is not None:
            rows = [e for e in rows if e.created_at < before_exclusive]
        if query:
            needle = query.lower()
            rows = [e for e in rows if needle in e.title.lower() or needle in e.content.lower()]
        rows.sort(key=lambda e: e.created_at, reverse=not ascending)
        if limit is not None:
            rows = rows[:limit]
        return rows

    def insert(self, owner_id, payload):
        entry = Entry(id=f"entry-{next(_ids)}", user_id=owner_id, created_at=self.clock(), **payload)
        self.inserted.append(entry)
        self.entries.append(entry)
        return entry


class FakeLanguageModel:
    """Deterministic classifier / summarizer / prompt generator."""

    def __init__(self, sentiment=None, summary="A month of small wins.", prompt="What surprised you today?"):
        self.sentiment = sentiment or SentimentAnalysis(score=0.6, label="positive", confidence=0.9)
        self.summary = summary
        self.prompt = prompt
        self.classified = []
        self.summarize_calls = []

    async def classify(self, text):
        self.classified.append(text)
        return self.sentiment

    async def summarize(self, texts, period):
        self.summarize_calls.append((list(texts), period))
        return self.summary

    async def generate_prompt(self):
        return self.prompt


@pytest.fixture
def repository():
    return FakeEntriesRepository()


@pytest.fixture
def language_model():
    return FakeLanguageModel()


@pytest.fixture
def service(repository, language_model):
    return JournalService(
        entries=repository,
        classifier=language_model,
        summarizer=language_model,
        tz=timezone.utc,
        sentiment_mode="running",
        clock=lambda: NOW,
    )

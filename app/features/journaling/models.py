"""
Journal domain models.

Entry mirrors a row of the `entries` table and keeps its snake_case column
names. Derived views (analytics, export) are CamelModels so the JSON handed
to the web client uses the camelCase keys it already expects.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Serialises field names as camelCase, accepts either form on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# ENTRIES
# =============================================================================

class Entry(BaseModel):
    """One journal record as stored in Supabase."""

    model_config = ConfigDict(extra="allow")

    id: str
    user_id: str
    title: str
    content: str
    sentiment_score: float = 0.0
    sentiment_label: Optional[str] = None
    word_count: int = 0
    created_at: datetime
    updated_at: Optional[datetime] = None

    @field_validator("id", "user_id", mode="before")
    @classmethod
    def _stringify_ids(cls, value):
        return str(value) if value is not None else value

    @field_validator("sentiment_score", "word_count", mode="before")
    @classmethod
    def _null_as_zero(cls, value):
        return 0 if value is None else value


class SearchResult(Entry):
    """An entry matched by search, with its highlighted excerpt."""

    highlight: str


class SentimentAnalysis(BaseModel):
    """Classifier output for one piece of text."""

    score: float
    label: str
    confidence: float


# =============================================================================
# ANALYTICS
# =============================================================================

class SentimentDistribution(CamelModel):
    positive: int = 0
    negative: int = 0
    neutral: int = 0

    @property
    def total(self) -> int:
        return self.positive + self.negative + self.neutral


class MonthlyPoint(CamelModel):
    month: str
    entries: int
    words: int
    avg_sentiment: float


class WeeklyPoint(CamelModel):
    day: str
    entries: int
    sentiment: float


class WordCount(CamelModel):
    word: str
    count: int


class AnalyticsBundle(CamelModel):
    """Per-request analytics view over one owner's entries. Never persisted."""

    total_entries: int = 0
    total_words: int = 0
    average_words_per_entry: int = 0
    sentiment_distribution: SentimentDistribution = Field(default_factory=SentimentDistribution)
    monthly_data: List[MonthlyPoint] = Field(default_factory=list)
    weekly_data: List[WeeklyPoint] = Field(default_factory=list)
    top_words: List[WordCount] = Field(default_factory=list)
    summary: str = ""


# =============================================================================
# EXPORT
# =============================================================================

class ExportEntry(CamelModel):
    date: datetime
    date_label: str
    title: str
    content: str


class ExportChapter(CamelModel):
    month: int
    heading: str
    entries: List[ExportEntry] = Field(default_factory=list)


class ExportDocument(CamelModel):
    """Renderer-independent structure of a yearly export."""

    title: str
    heading: str
    subtitle: str
    year: int
    total_entries: int = 0
    chapters: List[ExportChapter] = Field(default_factory=list)


class ExportResult(CamelModel):
    title: str
    total_entries: int
    html: str
    document: ExportDocument


class ReflectionPrompt(BaseModel):
    prompt: str

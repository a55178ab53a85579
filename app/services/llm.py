"""LLM-backed sentiment scoring, period summaries and reflection prompts."""

from __future__ import annotations

import json
import logging
import re
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Protocol, Sequence

from app.core.config import settings
from app.core.logging_utils import describe_text
from app.features.journaling.models import SentimentAnalysis
from app.shared.constants import (
    FALLBACK_PROMPT,
    FALLBACK_SENTIMENT,
    FALLBACK_SUMMARY,
    SENTIMENT_LABELS,
)

logger = logging.getLogger("Journal.LLM")

SENTIMENT_SYSTEM_PROMPT = (
    "You are a sentiment analysis expert. Analyze the sentiment of the given text and respond "
    "with a JSON object containing: score (number between -1 and 1), label (positive/negative/neutral), "
    "and confidence (0-1)."
)

SUMMARY_SYSTEM_PROMPT = (
    "You are a thoughtful life story writer. Create a beautiful, reflective summary of the user's "
    "journal entries for {period}. Focus on growth, insights, patterns, and meaningful moments. "
    "Write in a warm, encouraging tone as if you're helping them see their life story unfold."
)

REFLECTION_SYSTEM_PROMPT = (
    "Generate a thoughtful, inspiring journal prompt that encourages deep reflection. "
    "Make it personal and engaging. Return only the prompt text."
)

ENTRY_SEPARATOR = "\n\n---\n\n"

SENTIMENT = "sentiment"
SUMMARY = "summary"
REFLECTION = "reflection"


class SentimentClassifier(Protocol):
    async def classify(self, text: str) -> SentimentAnalysis: ...


class Summarizer(Protocol):
    async def summarize(self, texts: Sequence[str], period: str) -> str: ...


class PromptGenerator(Protocol):
    async def generate_prompt(self) -> str: ...


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _strip_code_fence(text: str) -> str:
    text = text.strip()
    if text.startswith("```"):
        text = re.sub(r"^```(?:json)?\n?", "", text)
        text = re.sub(r"\n?```$", "", text)
    return text


def parse_sentiment(raw: str) -> SentimentAnalysis:
    """
    Parse the classifier's JSON reply.

    Missing or zero fields take the neutral defaults; an unknown label
    becomes "neutral" and score/confidence are clamped into range.

    Raises:
        ValueError: If the reply is not a JSON object with numeric fields
    """
    result = json.loads(_strip_code_fence(raw) or "{}")
    if not isinstance(result, dict):
        raise ValueError("Sentiment reply is not a JSON object")

    score = float(result.get("score") or 0)
    confidence = float(result.get("confidence") or 0.5)
    label = str(result.get("label") or "neutral").strip().lower()
    if label not in SENTIMENT_LABELS:
        logger.warning(f"Classifier returned unknown label '{label}', filing as neutral")
        label = "neutral"

    return SentimentAnalysis(
        score=_clamp(score, -1.0, 1.0),
        label=label,
        confidence=_clamp(confidence, 0.0, 1.0),
    )


class JournalLanguageModel(ABC):
    """
    Sentiment classifier, summarizer and prompt generator over one provider.

    None of the public methods raise: any provider failure is logged and the
    documented fallback value is returned instead.
    """

    provider = "unknown"

    async def classify(self, text: str) -> SentimentAnalysis:
        try:
            raw = await self._complete(SENTIMENT_SYSTEM_PROMPT, text, SENTIMENT, max_tokens=100, temperature=0.1)
            analysis = parse_sentiment(raw)
            logger.info(
                "Sentiment scored",
                extra={"provider": self.provider, "label": analysis.label, "text": describe_text(text)},
            )
            return analysis
        except Exception as exc:  # pylint: disable=broad-except
            logger.error(f"Sentiment analysis failed ({self.provider}): {type(exc).__name__}: {exc}")
            return SentimentAnalysis(**FALLBACK_SENTIMENT)

    async def summarize(self, texts: Sequence[str], period: str) -> str:
        try:
            system = SUMMARY_SYSTEM_PROMPT.format(period=period)
            summary = await self._complete(system, ENTRY_SEPARATOR.join(texts), SUMMARY, max_tokens=500, temperature=0.7)
            logger.info(f"Summary generated for {len(texts)} entries ({period})")
            return summary or ""
        except Exception as exc:  # pylint: disable=broad-except
            logger.error(f"Summary generation failed ({self.provider}): {type(exc).__name__}: {exc}")
            return FALLBACK_SUMMARY

    async def generate_prompt(self) -> str:
        try:
            prompt = await self._complete(
                REFLECTION_SYSTEM_PROMPT,
                "Generate a reflection prompt for today.",
                REFLECTION,
                max_tokens=100,
                temperature=0.8,
            )
            return prompt.strip() or FALLBACK_PROMPT
        except Exception as exc:  # pylint: disable=broad-except
            logger.error(f"Prompt generation failed ({self.provider}): {type(exc).__name__}: {exc}")
            return FALLBACK_PROMPT

    @abstractmethod
    async def _complete(
        self,
        system: str,
        user: str,
        purpose: str,
        max_tokens: int,
        temperature: float,
    ) -> str:
        """Run one completion and return its text; raise on any failure."""


class OpenAIJournalModel(JournalLanguageModel):
    """Chat-completions backend, one configured model per purpose."""

    provider = "openai"

    def __init__(self, client=None, models: Optional[Dict[str, str]] = None) -> None:
        if client is None:
            from app.services.model_clients import get_openai_client
            client = get_openai_client()
        self.client = client
        self.models = {
            SENTIMENT: settings.OPENAI_SENTIMENT_MODEL,
            SUMMARY: settings.OPENAI_SUMMARY_MODEL,
            REFLECTION: settings.OPENAI_PROMPT_MODEL,
        }
        self.models.update(models or {})
        logger.info("OpenAI journal model initialized: %s", self.models)

    async def _complete(self, system, user, purpose, max_tokens, temperature) -> str:
        response = await self.client.chat.completions.create(
            model=self.models[purpose],
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            max_tokens=max_tokens,
            temperature=temperature,
        )
        return response.choices[0].message.content or ""


class ClaudeJournalModel(JournalLanguageModel):
    """Anthropic messages backend that walks the configured model list until one answers."""

    provider = "anthropic"

    def __init__(self, client=None, models: Optional[List[str]] = None) -> None:
        if client is None:
            from app.services.model_clients import get_anthropic_client
            client = get_anthropic_client()
        self.client = client

        self.model_candidates: List[str] = []
        for candidate in models or settings.CLAUDE_MODEL_OPTIONS:
            if candidate and candidate not in self.model_candidates:
                self.model_candidates.append(candidate)

        logger.info(
            "Claude journal model initialized with models: %s",
            ", ".join(self.model_candidates),
        )

    async def _complete(self, system, user, purpose, max_tokens, temperature) -> str:
        last_error: Optional[Exception] = None

        for model_name in self.model_candidates:
            try:
                response = await self.client.messages.create(
                    model=model_name,
                    system=system,
                    messages=[{"role": "user", "content": user}],
                    max_tokens=max_tokens,
                    temperature=temperature,
                )
                if not response.content:
                    raise ValueError(f"Model {model_name} returned empty content")
                block = response.content[0]
                return (block.text if hasattr(block, "text") else str(block)).strip()
            except Exception as exc:  # pylint: disable=broad-except
                logger.warning("Model %s failed for %s: %s", model_name, purpose, exc)
                last_error = exc

        raise last_error or RuntimeError("No Claude models configured")


def create_language_model(provider: Optional[str] = None) -> JournalLanguageModel:
    """Build the language model for the configured provider."""
    provider = (provider or settings.LLM_PROVIDER).lower()
    if provider == "anthropic":
        return ClaudeJournalModel()
    if provider == "openai":
        return OpenAIJournalModel()
    raise ValueError(f"Unsupported LLM_PROVIDER '{provider}' (expected 'openai' or 'anthropic')")

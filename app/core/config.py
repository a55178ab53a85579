import os

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

_SUPABASE_URL = os.getenv('SUPABASE_URL')
_SUPABASE_KEY = os.getenv('SUPABASE_KEY') or os.getenv('SUPABASE_ANON_KEY')

_LLM_PROVIDER = os.getenv('LLM_PROVIDER', 'openai').strip().lower()

_OPENAI_API_KEY = os.getenv('OPENAI_API_KEY')
_OPENAI_SENTIMENT_MODEL = os.getenv('OPENAI_SENTIMENT_MODEL', 'gpt-3.5-turbo')
_OPENAI_SUMMARY_MODEL = os.getenv('OPENAI_SUMMARY_MODEL', 'gpt-4')
_OPENAI_PROMPT_MODEL = os.getenv('OPENAI_PROMPT_MODEL', 'gpt-3.5-turbo')

_ANTHROPIC_API_KEY = os.getenv('ANTHROPIC_API_KEY') or os.getenv('CLAUDE_API_KEY')

_CLAUDE_MODEL_PRIMARY = os.getenv('CLAUDE_MODEL_PRIMARY') or os.getenv('CLAUDE_MODEL', 'claude-sonnet-4-5-20250929')
_CLAUDE_MODEL_FALLBACKS = [
    model.strip()
    for model in os.getenv('CLAUDE_MODEL_FALLBACKS', 'claude-3-5-haiku-20241022').split(',')
    if model.strip()
]
_CLAUDE_MODEL_OPTIONS = [_CLAUDE_MODEL_PRIMARY] + [m for m in _CLAUDE_MODEL_FALLBACKS if m and m != _CLAUDE_MODEL_PRIMARY]

_LLM_TIMEOUT_SECONDS = float(os.getenv('LLM_TIMEOUT_SECONDS', '30'))

# "running" keeps the pairwise (prev + score) / 2 recurrence, "mean" is the arithmetic mean
_MONTHLY_SENTIMENT_MODE = os.getenv('MONTHLY_SENTIMENT_MODE', 'running').strip().lower()

_JOURNAL_TIMEZONE = os.getenv('JOURNAL_TIMEZONE', 'UTC')

_SERVICE_NAME = os.getenv('SERVICE_NAME', 'life-journal-service')


class Config:
    """Central configuration for the journal service."""

    SUPABASE_URL = _SUPABASE_URL
    SUPABASE_KEY = _SUPABASE_KEY

    LLM_PROVIDER = _LLM_PROVIDER

    OPENAI_API_KEY = _OPENAI_API_KEY
    OPENAI_SENTIMENT_MODEL = _OPENAI_SENTIMENT_MODEL
    OPENAI_SUMMARY_MODEL = _OPENAI_SUMMARY_MODEL
    OPENAI_PROMPT_MODEL = _OPENAI_PROMPT_MODEL

    ANTHROPIC_API_KEY = _ANTHROPIC_API_KEY

    CLAUDE_MODEL_PRIMARY = _CLAUDE_MODEL_PRIMARY
    CLAUDE_MODEL_FALLBACKS = _CLAUDE_MODEL_FALLBACKS
    CLAUDE_MODEL_OPTIONS = _CLAUDE_MODEL_OPTIONS

    LLM_TIMEOUT_SECONDS = _LLM_TIMEOUT_SECONDS

    MONTHLY_SENTIMENT_MODE = _MONTHLY_SENTIMENT_MODE
    JOURNAL_TIMEZONE = _JOURNAL_TIMEZONE

    SERVICE_NAME = _SERVICE_NAME


settings = Config()

import re
from datetime import datetime, timezone
from types import SimpleNamespace

import pytest

from app.features.auth.identity import SupabaseIdentityResolver, extract_bearer_token
from app.features.database.repositories.entries import EntriesRepository, _ilike_pattern
from app.features.journaling.service import JournalService
from app.shared.errors import UnauthorizedError, UpstreamError

from conftest import NOW, FakeLanguageModel

ROW = {
    "id": "e1",
    "user_id": "owner-1",
    "title": "Hello",
    "content": "First entry",
    "sentiment_score": 0.2,
    "sentiment_label": "positive",
    "word_count": 2,
    "created_at": "2024-03-15T08:00:00+00:00",
    "updated_at": None,
}


class FakeQuery:
    """Records the PostgREST builder chain and returns canned rows."""

    def __init__(self, rows=None, error=None):
        self.rows = rows or []
        self.error = error
        self.calls = []

    def __getattr__(self, name):
        def method(*args, **kwargs):
            self.calls.append((name, args, kwargs))
            return self
        return method

    def execute(self):
        if self.error:
            raise self.error
        return SimpleNamespace(data=self.rows)


class FakeSupabase:
    def __init__(self, query):
        self.query = query
        self.tables = []

    def table(self, name):
        self.tables.append(name)
        return self.query


def test_fetch_always_filters_on_owner():
    query = FakeQuery([ROW])
    repo = EntriesRepository(FakeSupabase(query))

    [entry] = repo.fetch("owner-1")

    assert query.calls[0] == ("select", ("*",), {})
    assert query.calls[1] == ("eq", ("user_id", "owner-1"), {})
    assert ("order", ("created_at",), {"desc": True}) in query.calls
    assert entry.created_at == datetime(2024, 3, 15, 8, tzinfo=timezone.utc)


def test_fetch_applies_range_query_and_limit():
    query = FakeQuery()
    repo = EntriesRepository(FakeSupabase(query))
    start = datetime(2024, 1, 1, tzinfo=timezone.utc)
    end = datetime(2024, 12, 31, 23, 59, 59, tzinfo=timezone.utc)

    repo.fetch("owner-1", after=start, before=end, query='say "hi"', ascending=True, limit=20)

    names = [name for name, _, _ in query.calls]
    assert names == ["select", "eq", "gte", "lte", "or_", "order", "limit"]
    assert query.calls[2][1] == ("created_at", start.isoformat())
    assert query.calls[4][1] == ('title.ilike."%say \\"hi\\"%",content.ilike."%say \\"hi\\"%"',)
    assert query.calls[5][2] == {"desc": False}


def test_fetch_requires_owner():
    with pytest.raises(ValueError):
        EntriesRepository(FakeSupabase(FakeQuery())).fetch("")


def test_store_failure_surfaces_as_upstream_error():
    repo = EntriesRepository(FakeSupabase(FakeQuery(error=RuntimeError("connection reset"))))

    with pytest.raises(UpstreamError) as excinfo:
        repo.fetch("owner-1")

    assert excinfo.value.details == {"service": "supabase", "operation": "select"}


def test_insert_sets_owner_and_returns_row():
    query = FakeQuery([ROW])
    supabase = FakeSupabase(query)

    entry = EntriesRepository(supabase).insert("owner-1", {"title": "Hello", "user_id": "spoofed"})

    assert supabase.tables == ["entries"]
    assert query.calls[0][0] == "insert"
    assert query.calls[0][1][0]["user_id"] == "owner-1"
    assert entry.id == "e1"


def test_insert_without_returned_row_fails():
    with pytest.raises(UpstreamError):
        EntriesRepository(FakeSupabase(FakeQuery([]))).insert("owner-1", {"title": "x"})


class FakeAuth:
    def __init__(self, user=None, error=None):
        self.user = user
        self.error = error
        self.tokens = []

    def get_user(self, token):
        self.tokens.append(token)
        if self.error:
            raise self.error
        return SimpleNamespace(user=self.user)


def test_resolver_returns_user_id():
    auth = FakeAuth(user=SimpleNamespace(id="owner-1"))
    resolver = SupabaseIdentityResolver(SimpleNamespace(auth=auth))

    assert resolver.resolve("token-abc") == "owner-1"
    assert auth.tokens == ["token-abc"]


@pytest.mark.parametrize("auth", [FakeAuth(user=None), FakeAuth(error=RuntimeError("invalid JWT"))])
def test_resolver_rejects_bad_tokens(auth):
    resolver = SupabaseIdentityResolver(SimpleNamespace(auth=auth))

    with pytest.raises(UnauthorizedError):
        resolver.resolve("token-abc")


@pytest.mark.parametrize("header", [None, "", "Bearer ", "Bearer    "])
def test_missing_bearer_token(header):
    with pytest.raises(UnauthorizedError):
        extract_bearer_token(header)


def test_bearer_prefix_is_stripped():
    assert extract_bearer_token("Bearer abc.def") == "abc.def"


def test_ilike_pattern_escapes_like_wildcards():
    assert _ilike_pattern("50%") == '"%50\\\\%%"'
    assert _ilike_pattern("snake_case") == '"%snake\\\\_case%"'
    assert _ilike_pattern("a\\b") == '"%a\\\\\\\\b%"'


class LikeFilteringQuery(FakeQuery):
    """Applies or_ ilike filters and limit roughly the way PostgREST does."""

    _TITLE_FILTER = re.compile(r'title\.ilike\."((?:[^"\\]|\\.)*)"')

    def execute(self):
        rows = list(self.rows)
        for name, args, _ in self.calls:
            if name == "or_":
                quoted = self._TITLE_FILTER.search(args[0]).group(1)
                matcher = _like_to_regex(re.sub(r"\\(.)", r"\1", quoted))
                rows = [r for r in rows if matcher.fullmatch(r["title"]) or matcher.fullmatch(r["content"])]
            elif name == "limit":
                rows = rows[:args[0]]
        return SimpleNamespace(data=rows)


def _like_to_regex(pattern):
    parts = []
    chars = iter(pattern)
    for char in chars:
        if char == "\\":
            parts.append(re.escape(next(chars)))
        elif char == "%":
            parts.append(".*")
        elif char == "_":
            parts.append(".")
        else:
            parts.append(re.escape(char))
    return re.compile("".join(parts), re.IGNORECASE | re.DOTALL)


def test_percent_query_finds_match_behind_many_near_misses():
    newer = [
        dict(ROW, id=f"n{i}", title="Game", content=f"scored 50 points in round {i}",
             created_at=f"2024-03-{i + 2:02d}T08:00:00+00:00")
        for i in range(25)
    ]
    older = dict(ROW, id="literal", title="Budget", content="saved 50% today",
                 created_at="2024-01-01T08:00:00+00:00")
    rows = list(reversed(newer)) + [older]
    service = JournalService(
        entries=EntriesRepository(FakeSupabase(LikeFilteringQuery(rows))),
        classifier=FakeLanguageModel(),
        summarizer=FakeLanguageModel(),
        tz=timezone.utc,
        clock=lambda: NOW,
    )

    results = service.search("owner-1", "50%")

    assert [r.id for r in results] == ["literal"]
    assert results[0].highlight == "saved <mark>50%</mark> today"

from datetime import datetime, timedelta, timezone

import pytest

from app.features.journaling.analytics import (
    RUNNING_AVERAGE,
    TRUE_MEAN,
    compute_analytics,
    monthly_series,
    period_window,
    resolve_sentiment_mode,
    round_half_up,
    sentiment_distribution,
    tokenize_words,
    top_words,
    weekly_series,
)
from app.shared.errors import DataIntegrityError

from conftest import NOW, make_entry


def at(day, hour=9, month=3, year=2024):
    return datetime(year, month, day, hour, tzinfo=timezone.utc)


def test_empty_entries_give_zero_bundle():
    bundle = compute_analytics([], NOW)

    assert bundle.total_entries == 0
    assert bundle.total_words == 0
    assert bundle.average_words_per_entry == 0
    assert bundle.sentiment_distribution.total == 0
    assert bundle.monthly_data == []
    assert bundle.weekly_data == []
    assert bundle.top_words == []
    assert bundle.summary == ""


def test_empty_bundle_serializes_with_camel_case_keys():
    payload = compute_analytics([], NOW).model_dump(by_alias=True)

    assert payload == {
        "totalEntries": 0,
        "totalWords": 0,
        "averageWordsPerEntry": 0,
        "sentimentDistribution": {"positive": 0, "negative": 0, "neutral": 0},
        "monthlyData": [],
        "weeklyData": [],
        "topWords": [],
        "summary": "",
    }


def test_distribution_sums_to_total_entries():
    entries = [
        make_entry(at(14), label="positive", score=0.8),
        make_entry(at(13), label="negative", score=-0.4),
        make_entry(at(12), label="neutral"),
        make_entry(at(11), label="positive", score=0.3),
    ]

    bundle = compute_analytics(entries, NOW)

    distribution = bundle.sentiment_distribution
    assert (distribution.positive, distribution.negative, distribution.neutral) == (2, 1, 1)
    assert distribution.total == bundle.total_entries == 4


def test_unknown_label_fails_fast():
    entries = [make_entry(at(14), label="ecstatic")]

    with pytest.raises(DataIntegrityError):
        sentiment_distribution(entries)


def test_average_words_rounds_half_up():
    entries = [
        make_entry(at(14), word_count=2),
        make_entry(at(13), word_count=3),
    ]

    bundle = compute_analytics(entries, NOW)

    assert bundle.total_words == 5
    assert bundle.average_words_per_entry == 3
    assert round_half_up(2.4) == 2
    assert round_half_up(7 / 3) == 2


def test_monthly_running_average_is_pairwise_not_mean():
    entries = [
        make_entry(at(14), score=1.0, label="positive"),
        make_entry(at(13), score=0.0, label="neutral"),
        make_entry(at(12), score=1.0, label="positive"),
    ]

    [march] = monthly_series(entries, mode=RUNNING_AVERAGE)

    assert march.month == "Mar 2024"
    assert march.entries == 3
    assert march.avg_sentiment == pytest.approx(0.625)


def test_monthly_mean_mode_gives_arithmetic_mean():
    entries = [
        make_entry(at(14), score=1.0, label="positive"),
        make_entry(at(13), score=0.0, label="neutral"),
        make_entry(at(12), score=1.0, label="positive"),
    ]

    [march] = monthly_series(entries, mode=TRUE_MEAN)

    assert march.avg_sentiment == pytest.approx(2 / 3)


def test_monthly_groups_in_first_seen_order():
    entries = [
        make_entry(at(2), content="one two", score=0.5, label="positive"),
        make_entry(at(20, month=2), content="three four five", score=-0.5, label="negative"),
        make_entry(at(1), content="six", score=0.1, label="neutral"),
    ]

    series = monthly_series(entries)

    assert [(p.month, p.entries, p.words) for p in series] == [
        ("Mar 2024", 2, 3),
        ("Feb 2024", 1, 3),
    ]
    assert series[0].model_dump(by_alias=True)["avgSentiment"] == pytest.approx(0.3)


def test_weekly_series_covers_last_seven_days_oldest_first():
    entries = [
        make_entry(at(15, hour=8), score=0.5, label="positive"),
        make_entry(at(15, hour=7), score=-0.1, label="negative"),
        make_entry(at(10), score=0.2, label="positive"),
        make_entry(at(1), score=0.9, label="positive"),
    ]

    series = weekly_series(entries, NOW)

    # 2024-03-15 is a Friday
    assert [p.day for p in series] == ["Sat", "Sun", "Mon", "Tue", "Wed", "Thu", "Fri"]
    assert [p.entries for p in series] == [0, 1, 0, 0, 0, 0, 2]
    assert series[1].sentiment == pytest.approx(0.2)
    assert series[-1].sentiment == pytest.approx(0.2)
    assert series[0].sentiment == 0


def test_top_words_drop_short_and_stop_words():
    content = "the quick brown fox jumps over the lazy dog"
    entries = [make_entry(at(14 - i), content=content) for i in range(3)]

    ranked = {w.word: w.count for w in top_words(entries)}

    assert ranked["quick"] == 3
    assert ranked["brown"] == 3
    assert ranked["jumps"] == 3
    assert ranked["lazy"] == 3
    for excluded in ("the", "fox", "dog", "over"):
        assert excluded not in ranked


def test_top_words_strip_punctuation_and_cap_at_twenty():
    words = [f"word{chr(97 + i)}" for i in range(25)]
    entries = [
        make_entry(at(14), content="Family, family! FAMILY... " + " ".join(words)),
        make_entry(at(13), content="This would have been their time with family."),
    ]

    ranked = top_words(entries)

    assert ranked[0].word == "family"
    assert ranked[0].count == 4
    assert len(ranked) == 20
    assert tokenize_words("This would have been their time") == []


def test_top_words_strip_non_ascii_letters():
    assert tokenize_words("café naïve") == ["nave"]
    assert tokenize_words("Crème brûlée night") == ["crme", "brle", "night"]


def test_period_window_defaults_and_widths():
    assert period_window(None, NOW) == ("last30days", NOW - timedelta(days=30), NOW)
    assert period_window("last7days", NOW)[1] == NOW - timedelta(days=7)
    assert period_window("last3months", NOW)[1] == NOW - timedelta(days=90)
    assert period_window("last6months", NOW)[1] == NOW - timedelta(days=180)
    assert period_window("lastyear", NOW)[1] == NOW - timedelta(days=365)
    assert period_window("fortnight", NOW)[0] == "last30days"


def test_grouping_uses_journal_timezone():
    from zoneinfo import ZoneInfo

    # 2024-04-01 02:00 UTC is still March 31 in New York
    entries = [make_entry(datetime(2024, 4, 1, 2, tzinfo=timezone.utc))]

    [point] = monthly_series(entries, tz=ZoneInfo("America/New_York"))

    assert point.month == "Mar 2024"


def test_sentiment_mode_resolution(caplog):
    assert resolve_sentiment_mode(None) == RUNNING_AVERAGE
    assert resolve_sentiment_mode(" Mean ") == TRUE_MEAN

    with caplog.at_level("WARNING", logger="Journal.Analytics"):
        assert resolve_sentiment_mode("median") == RUNNING_AVERAGE

    assert "Unknown monthly sentiment mode 'median'" in caplog.text

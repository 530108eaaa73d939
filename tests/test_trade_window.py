from datetime import datetime, timedelta, timezone

from dex_telegram_bot.trade_window import (
    TradeWindowState,
    calendar_time,
    describe_trade_window,
    relative_time,
    trade_window_state,
)

NOW = datetime(2026, 3, 11, 12, 0, tzinfo=timezone.utc)  # a Wednesday


def test_future_valid_from_adds_tradable_line() -> None:
    text = describe_trade_window(NOW + timedelta(hours=3), NOW + timedelta(days=2), NOW)
    lines = text.splitlines()
    assert len(lines) == 2
    assert lines[0] == "  - *Tradable*: `Today at 3:00 PM GMT`, `in 3 hours`"
    assert lines[1] == "  - *Expires*: `Friday at 12:00 PM GMT`, `in 2 days`"


def test_started_window_only_has_expires_line() -> None:
    past = describe_trade_window(NOW - timedelta(minutes=10), NOW + timedelta(days=1), NOW)
    assert "Tradable" not in past
    assert past == "  - *Expires*: `Tomorrow at 12:00 PM GMT`, `in a day`"

    starting_now = describe_trade_window(NOW, NOW + timedelta(days=1), NOW)
    assert "Tradable" not in starting_now
    assert "Expires" in starting_now


def test_state() -> None:
    assert trade_window_state(NOW + timedelta(seconds=1), NOW) is TradeWindowState.NOT_YET_ACTIVE
    assert trade_window_state(NOW, NOW) is TradeWindowState.ACTIVE


def test_calendar_time_buckets() -> None:
    assert calendar_time(NOW - timedelta(hours=13), NOW) == "Yesterday at 11:00 PM"
    assert calendar_time(NOW - timedelta(days=3), NOW) == "Last Sunday at 12:00 PM"
    assert calendar_time(NOW + timedelta(days=5), NOW) == "Monday at 12:00 PM"
    assert calendar_time(NOW + timedelta(days=30), NOW) == "04/10/2026"
    assert calendar_time(NOW - timedelta(days=30), NOW) == "02/09/2026"


def test_calendar_time_ignores_source_timezone() -> None:
    plus_two = timezone(timedelta(hours=2))
    local = datetime(2026, 3, 11, 16, 30, tzinfo=plus_two)
    assert calendar_time(local, NOW) == "Today at 2:30 PM"


def test_relative_time() -> None:
    assert relative_time(NOW + timedelta(seconds=10), NOW) == "in a few seconds"
    assert relative_time(NOW - timedelta(minutes=5), NOW) == "5 minutes ago"
    assert relative_time(NOW + timedelta(minutes=50), NOW) == "in an hour"
    assert relative_time(NOW - timedelta(days=40), NOW) == "a month ago"
    assert relative_time(NOW + timedelta(days=800), NOW) == "in 2 years"

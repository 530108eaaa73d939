from __future__ import annotations

from datetime import datetime, timedelta, timezone
from enum import Enum

_WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

_DAYS_PER_MONTH = 30.436875
_DAYS_PER_YEAR = 365.2425


class TradeWindowState(Enum):
    NOT_YET_ACTIVE = "not_yet_active"
    ACTIVE = "active"


def as_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def trade_window_state(valid_from: datetime, now: datetime) -> TradeWindowState:
    if as_utc(valid_from) > as_utc(now):
        return TradeWindowState.NOT_YET_ACTIVE
    return TradeWindowState.ACTIVE


def _clock(dt: datetime) -> str:
    hour = dt.hour % 12 or 12
    suffix = "AM" if dt.hour < 12 else "PM"
    return f"{hour}:{dt.minute:02d} {suffix}"


def calendar_time(dt: datetime, now: datetime) -> str:
    """Calendar text relative to today, e.g. "Tomorrow at 9:05 AM"."""
    dt = as_utc(dt)
    now = as_utc(now)
    start_of_today = now.replace(hour=0, minute=0, second=0, microsecond=0)
    diff = (dt - start_of_today) / timedelta(days=1)

    weekday = _WEEKDAYS[dt.weekday()]
    if diff < -6:
        return dt.strftime("%m/%d/%Y")
    if diff < -1:
        return f"Last {weekday} at {_clock(dt)}"
    if diff < 0:
        return f"Yesterday at {_clock(dt)}"
    if diff < 1:
        return f"Today at {_clock(dt)}"
    if diff < 2:
        return f"Tomorrow at {_clock(dt)}"
    if diff < 7:
        return f"{weekday} at {_clock(dt)}"
    return dt.strftime("%m/%d/%Y")


def _round(value: float) -> int:
    return int(value + 0.5)


def _humanize(seconds: float) -> str:
    minutes = seconds / 60
    hours = minutes / 60
    days = hours / 24

    if _round(seconds) < 45:
        return "a few seconds"
    if _round(minutes) <= 1:
        return "a minute"
    if _round(minutes) < 45:
        return f"{_round(minutes)} minutes"
    if _round(hours) <= 1:
        return "an hour"
    if _round(hours) < 22:
        return f"{_round(hours)} hours"
    if _round(days) <= 1:
        return "a day"
    if _round(days) < 26:
        return f"{_round(days)} days"

    months = _round(days / _DAYS_PER_MONTH)
    if months <= 1:
        return "a month"
    if months < 11:
        return f"{months} months"

    years = _round(days / _DAYS_PER_YEAR)
    if years <= 1:
        return "a year"
    return f"{years} years"


def relative_time(dt: datetime, now: datetime) -> str:
    delta = (as_utc(dt) - as_utc(now)).total_seconds()
    text = _humanize(abs(delta))
    return f"in {text}" if delta > 0 else f"{text} ago"


def _describe(label: str, dt: datetime, now: datetime) -> str:
    return f"  - *{label}*: `{calendar_time(dt, now)} GMT`, `{relative_time(dt, now)}`"


def describe_trade_window(valid_from: datetime, valid_until: datetime, now: datetime) -> str:
    """Markdown lines describing when an order becomes tradable and when it expires.

    The "Tradable" line only appears while the window has not started yet.
    """
    lines: list[str] = []
    if trade_window_state(valid_from, now) is TradeWindowState.NOT_YET_ACTIVE:
        lines.append(_describe("Tradable", valid_from, now))
    lines.append(_describe("Expires", valid_until, now))
    return "\n".join(lines)

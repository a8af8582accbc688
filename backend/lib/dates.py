"""Natural-language reservation dates ("tomorrow", "next Friday", "Jan 30th").

Resolution is a small dispatch table of ``(pattern, handler)`` pairs tried in
priority order. The first pattern that matches decides the outcome; a handler
returning ``None`` (e.g. "2/30") yields the unresolved result instead of
trying later patterns.
"""

import re
from datetime import date, timedelta
from typing import Callable, Optional

from models.dates import ResolvedDate

WEEKDAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

_WEEKDAYS = {name.lower(): index for index, name in enumerate(WEEKDAY_NAMES)}

_MONTHS = {name.lower(): index for index, name in enumerate(MONTH_NAMES, start=1)}
_MONTHS.update({
    "jan": 1, "feb": 2, "mar": 3, "apr": 4, "jun": 6, "jul": 7,
    "aug": 8, "sep": 9, "sept": 9, "oct": 10, "nov": 11, "dec": 12,
})

_WEEKDAY_RE = "|".join(_WEEKDAYS)
# Longest names first so "september" is not cut short at "sep"
_MONTH_RE = "|".join(sorted(_MONTHS, key=len, reverse=True))

Handler = Callable[[re.Match, date], Optional[date]]


def ordinal(n: int) -> str:
    """1 -> '1st', 12 -> '12th', 22 -> '22nd'."""
    if 11 <= n % 100 <= 13:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


def format_date(value: date) -> str:
    """Render a date the way it is read out on a call: 'Friday, January 30th'."""
    return f"{WEEKDAY_NAMES[value.weekday()]}, {MONTH_NAMES[value.month - 1]} {ordinal(value.day)}"


def _days_until(weekday: int, today: date) -> int:
    return (weekday - today.weekday()) % 7


def _upcoming_weekday(match: re.Match, today: date) -> date:
    days = _days_until(_WEEKDAYS[match.group(2)], today) or 7
    if match.group(1):
        # "next friday" skips the coming friday
        days += 7
    return today + timedelta(days=days)


def _this_weekday(match: re.Match, today: date) -> date:
    return today + timedelta(days=_days_until(_WEEKDAYS[match.group(1)], today))


def _month_day(month: int, day: int, today: date) -> Optional[date]:
    try:
        target = date(today.year, month, day)
    except ValueError:
        return None
    if target < today:
        try:
            target = target.replace(year=today.year + 1)
        except ValueError:
            return None
    return target


def _named_month_day(match: re.Match, today: date) -> Optional[date]:
    return _month_day(_MONTHS[match.group(1)], int(match.group(2)), today)


def _numeric_month_day(match: re.Match, today: date) -> Optional[date]:
    return _month_day(int(match.group(1)), int(match.group(2)), today)


_RULES: list[tuple[re.Pattern, Handler]] = [
    (re.compile(r"today", re.ASCII), lambda m, today: today),
    (re.compile(r"tomorrow", re.ASCII), lambda m, today: today + timedelta(days=1)),
    (re.compile(r"day after tomorrow", re.ASCII), lambda m, today: today + timedelta(days=2)),
    (re.compile(rf"(next\s+)?({_WEEKDAY_RE})", re.ASCII), _upcoming_weekday),
    (re.compile(rf"this\s+({_WEEKDAY_RE})", re.ASCII), _this_weekday),
    (re.compile(rf"({_MONTH_RE})\s+(\d{{1,2}})(?:st|nd|rd|th)?", re.ASCII), _named_month_day),
    (re.compile(r"(\d{1,2})[/-](\d{1,2})", re.ASCII), _numeric_month_day),
]


def resolve_date(expression: str, today: Optional[date] = None) -> ResolvedDate:
    """
    Resolve a free-text date expression to a calendar date.

    Never raises: anything that is not recognised comes back with
    ``is_valid=False`` and the input echoed in ``formatted``.

    Args:
        expression: Date as the user said it (e.g. "tomorrow", "next Friday", "1/30")
        today: Reference day. Defaults to the system date, read once per call.

    Returns:
        ResolvedDate with the date, weekday and spoken form
    """
    if today is None:
        today = date.today()

    expression = expression or ""
    text = expression.strip().lower()
    for pattern, handler in _RULES:
        match = pattern.fullmatch(text)
        if match is None:
            continue
        target = handler(match, today)
        if target is None:
            break
        return ResolvedDate(
            original=expression,
            formatted=format_date(target),
            date=target,
            day_of_week=WEEKDAY_NAMES[target.weekday()],
            is_valid=True,
        )

    return ResolvedDate.unresolved(expression)

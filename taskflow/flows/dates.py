"""Resolution of due-date expressions against a reference date.

Handles absolute dates (``YYYY-MM-DD`` or ISO datetimes) and the relative
expressions people type into Quick Add: ``today``, ``tomorrow``,
``yesterday``, ``next week``, ``in N days/weeks`` and qualified weekday
names (``on Friday``, ``by Friday``, ``due Friday``, ``this Friday``,
``next Friday``). A weekday always resolves to its nearest occurrence
strictly after the reference date.
"""

import logging
import re
from datetime import date, datetime, timedelta
from typing import Optional

logger = logging.getLogger(__name__)

WEEKDAYS = {
    "monday": 0,
    "tuesday": 1,
    "wednesday": 2,
    "thursday": 3,
    "friday": 4,
    "saturday": 5,
    "sunday": 6,
}

MONTHS = (
    "jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|june?|july?"
    "|aug(?:ust)?|sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?"
)

NUMBER_WORDS = {
    "a": 1,
    "an": 1,
    "one": 1,
    "two": 2,
    "three": 3,
    "four": 4,
    "five": 5,
    "six": 6,
    "seven": 7,
    "eight": 8,
    "nine": 9,
    "ten": 10,
}


def _relative_pattern(weekday_qualifier: str) -> "re.Pattern[str]":
    return re.compile(
        r"\b(?:"
        r"(?P<day_after>day after tomorrow)"
        r"|(?P<simple>today|tonight|tomorrow|yesterday)"
        r"|(?P<next_week>next week)"
        r"|in\s+(?P<count>\d+|" + "|".join(NUMBER_WORDS) + r")\s+(?P<unit>days?|weeks?)"
        r"|" + weekday_qualifier + r"(?P<weekday>" + "|".join(WEEKDAYS) + r")"
        r")\b",
        re.IGNORECASE,
    )


# Free text needs a qualifier before a weekday name: "Monday standup" is not a date
_RELATIVE = _relative_pattern(r"(?:(?:next|this|on|by|due(?:\s+(?:on|by))?)\s+)")
_RELATIVE_VALUE = _relative_pattern(r"(?:(?:next|this|on|by|due)\s+)?")

_ABSOLUTE = re.compile(
    r"\b(?:\d{4}-\d{1,2}-\d{1,2}"
    r"|\d{1,2}/\d{1,2}(?:/\d{2,4})?"
    r"|(?:" + MONTHS + r")\.?\s+\d{1,2}(?:st|nd|rd|th)?"
    r"|\d{1,2}(?:st|nd|rd|th)?\s+(?:of\s+)?(?:" + MONTHS + r"))\b",
    re.IGNORECASE,
)


def next_weekday(current: date, weekday: int) -> date:
    """Nearest date strictly after ``current`` falling on ``weekday`` (Monday=0)."""
    days_ahead = (weekday - current.weekday()) % 7 or 7
    return current + timedelta(days=days_ahead)


def _resolve_match(match: "re.Match[str]", current: date) -> date:
    if match.group("day_after"):
        return current + timedelta(days=2)
    simple = match.group("simple")
    if simple:
        offset = {"today": 0, "tonight": 0, "tomorrow": 1, "yesterday": -1}[simple.lower()]
        return current + timedelta(days=offset)
    if match.group("next_week"):
        return current + timedelta(weeks=1)
    count = match.group("count")
    if count:
        n = int(count) if count.isdigit() else NUMBER_WORDS[count.lower()]
        unit = match.group("unit").lower()
        return current + (timedelta(weeks=n) if unit.startswith("week") else timedelta(days=n))
    return next_weekday(current, WEEKDAYS[match.group("weekday").lower()])


def has_absolute_date(text: str) -> bool:
    """True if ``text`` names a calendar date such as "June 20", "20 June" or "6/20"."""
    return _ABSOLUTE.search(text) is not None


def find_relative_date(text: str, current: date) -> Optional[date]:
    """Resolve the first relative date expression found in free text."""
    match = _RELATIVE.search(text)
    return _resolve_match(match, current) if match else None


def parse_date_value(value: str, current: date) -> Optional[date]:
    """Parse a single date value: absolute ISO form or a relative expression.

    Returns:
        The resolved date, or None if the value cannot be understood
    """
    value = value.strip()
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    except ValueError:
        pass
    match = _RELATIVE_VALUE.fullmatch(value)
    if match is None:
        # "next Friday." or "by tomorrow" still carry a usable expression
        match = _RELATIVE_VALUE.search(value)
    return _resolve_match(match, current) if match else None


def resolve_due_date(value: Optional[str], current: date, text: Optional[str] = None) -> Optional[date]:
    """Determine a task's due date.

    A relative expression in the user's ``text`` is resolved locally and
    wins over the model's ``value``, unless the text also names an absolute
    calendar date; otherwise ``value`` is parsed. An unresolvable date
    yields None.
    """
    if text and not (value and has_absolute_date(text)):
        local = find_relative_date(text, current)
        if local is not None:
            return local
    if value:
        parsed = parse_date_value(value, current)
        if parsed is None:
            logger.warning(f"Dropping unresolvable due date: {value!r}")
        return parsed
    return None

"""Ledger period parsing."""
import re
from datetime import date
from typing import Optional

from pledger_graph.utils.exceptions import ConfigError

PERIOD_PATTERN = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")

MONTH_MAP = {
    "jan": 1,
    "january": 1,
    "feb": 2,
    "february": 2,
    "mar": 3,
    "march": 3,
    "apr": 4,
    "april": 4,
    "may": 5,
    "jun": 6,
    "june": 6,
    "jul": 7,
    "july": 7,
    "aug": 8,
    "august": 8,
    "sep": 9,
    "september": 9,
    "oct": 10,
    "october": 10,
    "nov": 11,
    "november": 11,
    "dec": 12,
    "december": 12,
}


def parse_period(text: str, today: Optional[date] = None) -> str:
    """
    Normalize a user supplied month into a YYYY-MM period.

    Accepts a full period ("2020-01"), a month name or abbreviation
    ("january", "jan") or a month number ("1", "01"). The last two are
    taken to be in the current year.
    """
    text = text.strip()
    if PERIOD_PATTERN.match(text):
        return text

    year = (today or date.today()).year

    month = MONTH_MAP.get(text.lower())
    if month is not None:
        return f"{year}-{month:02d}"

    if text.isdigit():
        month = int(text)
        if 1 <= month <= 12:
            return f"{year}-{month:02d}"
        raise ConfigError(f"month out of range: {month}")

    raise ConfigError(f"failed to parse supplied date: {text}")

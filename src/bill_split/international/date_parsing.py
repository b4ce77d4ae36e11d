"""Billing-period date scanning for Greek electricity bills."""
from __future__ import annotations
from datetime import date
import re

from .text_normalization import normalize_text

GREEK_MONTHS = ("ιαν", "φεβ", "μαρ", "απρ", "μαι", "ιουν", "ιουλ", "αυγ", "σεπ", "οκτ", "νοε", "δεκ")

# Short month names used for history titles ("Ιούν 2025")
GREEK_MONTH_TITLES = ("Ιαν", "Φεβ", "Μαρ", "Απρ", "Μάι", "Ιούν", "Ιούλ", "Αύγ", "Σεπ", "Οκτ", "Νοε", "Δεκ")

# Ordered: every numeric match is collected before any month-name match.
PERIOD_DATE_PATTERNS = [
    # 01/06/2025, 1-6-2025, 01.06.2025
    re.compile(r'(\d{1,2})[/\-.](\d{1,2})[/\-.](\d{4})'),
    # 1 Ιουνίου 2025
    re.compile(
        r'(\d{1,2})\s+(' + '|'.join(GREEK_MONTHS) + r')[\u0370-\u03ff]*\s+(\d{4})',
        re.IGNORECASE,
    ),
]

_NUMERIC_DATE = re.compile(r'^(\d{1,2})[/\-.](\d{1,2})[/\-.](\d{4})$')
_MONTH_NAME_DATE = re.compile(r'^(\d{1,2})\s+([^\s\d]+)\s+(\d{4})$')


def find_period_dates(text: str) -> list[str]:
    """Return date-shaped strings from *text*, pattern by pattern, as written."""
    dates: list[str] = []
    for pattern in PERIOD_DATE_PATTERNS:
        dates.extend(match.group(0) for match in pattern.finditer(text))
    return dates


def parse_period_date(raw_string: str) -> date:
    """Convert a raw period string (``DD/MM/YYYY`` or ``D Month YYYY``) to a date.

    Greek bills write the day first, so numeric dates are always read as
    day/month/year.
    """
    s = raw_string.strip()

    numeric = _NUMERIC_DATE.match(s)
    if numeric:
        day, month, year = int(numeric.group(1)), int(numeric.group(2)), int(numeric.group(3))
        return date(year, month, day)

    named = _MONTH_NAME_DATE.match(s)
    if named:
        month_word = normalize_text(named.group(2))
        for prefix in GREEK_MONTHS:
            if month_word.startswith(prefix):
                month = GREEK_MONTHS.index(prefix) + 1
                return date(int(named.group(3)), month, int(named.group(1)))

    raise ValueError(f"Cannot parse period date: {raw_string}")


def month_title(value: date) -> str:
    """Short Greek month and year, e.g. ``"Ιούν 2025"``."""
    return f"{GREEK_MONTH_TITLES[value.month - 1]} {value.year}"


def validate_billing_period(start: date, end: date) -> tuple[bool, str | None]:
    """Validate billing period sanity. Returns (is_valid, warning_or_error)."""
    days = (end - start).days
    if days < 0:
        return False, f"Billing period is negative: {days} days (start={start}, end={end})"
    if days > 400:
        return False, f"Billing period exceeds 400 days: {days} days"
    if days < 15:
        return True, f"Unusually short billing period: {days} days"
    if days > 95:
        return True, f"Unusually long billing period: {days} days"
    return True, None

"""European number parsing for Greek electricity bills."""
from __future__ import annotations
import re

EU_FORMAT = "1.234,56"
US_FORMAT = "1,234.56"

# A currency amount always carries exactly two decimals: 8,50 / 1.234,56 / 45.20
AMOUNT_PATTERN = re.compile(r'(\d{1,3}(?:[.,]\d{3})*(?:[.,]\d{2}))\s*€?')

_THOUSANDS_ONLY = re.compile(r'^\d{1,3}(?:\.\d{3})+$')


def parse_amount(raw_string: str, number_format: str = EU_FORMAT) -> float:
    """Parse a monetary amount string to float.

    Handles:
    - EU format: "1.234,56" → 1234.56
    - US format: "1,234.56" → 1234.56
    - Currency symbol: "8,50 €", "€ 8,50"
    - Negative: "-7,88", "(7,88)", "7,88-"
    - Spaces as thousands separator: "1 234,56"
    """
    if not raw_string or not raw_string.strip():
        raise ValueError("Empty amount string")

    cleaned = raw_string.strip()

    negative = False
    if cleaned.startswith("(") and cleaned.endswith(")"):
        negative = True
        cleaned = cleaned[1:-1].strip()
    elif cleaned.startswith("-"):
        negative = True
        cleaned = cleaned.lstrip("- ")
    elif cleaned.endswith("-"):
        negative = True
        cleaned = cleaned[:-1].strip()

    cleaned = re.sub(r'[€\s]', '', cleaned)
    cleaned = re.sub(r'EUR', '', cleaned)

    if not cleaned:
        raise ValueError(f"No numeric content in: {raw_string}")

    if number_format == EU_FORMAT:
        cleaned = cleaned.replace('.', '')
        cleaned = cleaned.replace(',', '.')
    else:
        cleaned = cleaned.replace(',', '')

    result = float(cleaned)
    return -result if negative else result


def parse_european_number(text: str) -> float | None:
    """Lenient parse of a number token found in bill text.

    A comma marks the EU convention (dots are thousands). Without a comma,
    dot-grouped thousands such as ``"1.234"`` are read as 1234, and anything
    else (``"45.20"``, ``"250"``) as a plain decimal. Returns ``None`` when
    the token is not a number.
    """
    cleaned = re.sub(r'\s', '', text.strip())
    if not cleaned:
        return None

    if ',' in cleaned or _THOUSANDS_ONLY.match(cleaned):
        number_format = EU_FORMAT
    else:
        number_format = US_FORMAT

    try:
        return parse_amount(cleaned, number_format)
    except ValueError:
        return None


def find_amounts(line: str) -> list[str]:
    """Return every currency-amount token on *line*, left to right."""
    return AMOUNT_PATTERN.findall(line)

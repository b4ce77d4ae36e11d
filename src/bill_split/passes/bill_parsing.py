"""Bill text parsing: rule-based extraction of charges from raw bill text."""
from __future__ import annotations

import re
from dataclasses import dataclass

import structlog

from ..international.charge_taxonomies import CHARGE_RULES, ChargeRule, match_phrase
from ..international.date_parsing import find_period_dates
from ..international.number_parsing import AMOUNT_PATTERN, find_amounts, parse_european_number
from ..international.text_normalization import normalize_text
from ..models.extraction import (
    ConfidenceLevel,
    ExtractedField,
    ExtractionResult,
    UnresolvedLine,
)

logger = structlog.get_logger(__name__)

KWH_PATTERNS = [
    re.compile(r'(\d+[.,]?\d*)\s*kwh', re.IGNORECASE),
    re.compile(r'κατανάλωση[:\s]*(\d+[.,]?\d*)', re.IGNORECASE),
    re.compile(r'συνολική κατανάλωση[:\s]*(\d+[.,]?\d*)', re.IGNORECASE),
]

MAX_UNRESOLVED_LINES = 10
MIN_UNRESOLVED_LINE_LENGTH = 5
UNRESOLVED_AMOUNT_RANGE = (0.5, 10000.0)

# A matched phrase longer than this is treated as specific
SPECIFIC_PHRASE_LENGTH = 5


@dataclass
class _Candidate:
    value: float
    raw_match: str
    phrase: str
    line_index: int


def confidence_for_phrase(phrase: str) -> ConfidenceLevel:
    """Longer keyword phrases are more specific, so more trustworthy."""
    if len(phrase) > SPECIFIC_PHRASE_LENGTH:
        return ConfidenceLevel.HIGH
    return ConfidenceLevel.MEDIUM


def extract_total_kwh(text: str) -> float | None:
    """Return the first consumption figure found, trying each pattern in turn."""
    for pattern in KWH_PATTERNS:
        match = pattern.search(text)
        if match:
            value = parse_european_number(match.group(1))
            if value is not None:
                return value
    return None


def _best_candidate(rule: ChargeRule, lines: list[str], normalized: list[str]) -> _Candidate | None:
    """Pick the matching line whose last amount is largest; ties keep the earlier line."""
    best: _Candidate | None = None
    for index, (line, folded) in enumerate(zip(lines, normalized)):
        phrase = match_phrase(rule, folded)
        if phrase is None:
            continue
        amounts = find_amounts(line)
        if not amounts:
            continue
        # The last amount on a line is usually its total
        value = parse_european_number(amounts[-1])
        if value is None:
            continue
        if best is None or value > best.value:
            best = _Candidate(value=value, raw_match=line.strip(), phrase=phrase, line_index=index)
    return best


def _unresolved_amount(line: str) -> float | None:
    match = AMOUNT_PATTERN.search(line)
    if not match:
        return None
    amount = parse_european_number(match.group(1))
    low, high = UNRESOLVED_AMOUNT_RANGE
    if amount is None or not low < amount < high:
        return None
    return amount


def parse_bill_text(text: str) -> ExtractionResult:
    """Extract period, consumption and charge amounts from raw bill text.

    Never raises: text without anything recognisable gives an empty result.
    The period is the first two date-shaped strings found, kept as written.
    Each charge category keeps at most one line, and lines with an amount
    that no category claimed are returned for manual assignment.
    """
    lines = [line for line in text.splitlines() if line.strip()]
    normalized = [normalize_text(line) for line in lines]

    period_from: str | None = None
    period_to: str | None = None
    dates = find_period_dates(text)
    if len(dates) >= 2:
        period_from, period_to = dates[0], dates[1]

    fields: list[ExtractedField] = []
    claimed: set[int] = set()
    for rule in CHARGE_RULES:
        best = _best_candidate(rule, lines, normalized)
        if best is None:
            continue
        fields.append(ExtractedField(
            key=rule.key,
            label=rule.label,
            value=best.value,
            raw_match=best.raw_match,
            confidence=confidence_for_phrase(best.phrase),
        ))
        claimed.add(best.line_index)

    unresolved: list[UnresolvedLine] = []
    for index, line in enumerate(lines):
        if index in claimed:
            continue
        stripped = line.strip()
        if len(stripped) < MIN_UNRESOLVED_LINE_LENGTH:
            continue
        amount = _unresolved_amount(stripped)
        if amount is not None:
            unresolved.append(UnresolvedLine(text=stripped, potential_amount=amount))

    result = ExtractionResult(
        period_from=period_from,
        period_to=period_to,
        total_kwh=extract_total_kwh(text),
        fields=fields,
        unresolved_lines=unresolved[:MAX_UNRESOLVED_LINES],
        raw_text=text,
    )

    logger.info(
        "bill_text_parsed",
        line_count=len(lines),
        fields_found=len(result.fields),
        unresolved=len(result.unresolved_lines),
        period_found=period_from is not None,
        total_kwh=result.total_kwh,
    )
    return result

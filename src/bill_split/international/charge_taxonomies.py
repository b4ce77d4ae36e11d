"""Greek electricity bill charge taxonomy.

Each category lists the keyword phrases that identify it on a bill line, in
already-normalized form (lower-case, no accents). Phrase order matters: the
first phrase found on a line decides the match and its confidence. Adding a
wording variant is a data change here, not a parser change.
"""
from __future__ import annotations

from dataclasses import dataclass

from ..models.schema import ChargeKey


@dataclass(frozen=True)
class ChargeRule:
    key: ChargeKey
    label: str
    patterns: tuple[str, ...]


CHARGE_RULES: tuple[ChargeRule, ...] = (
    ChargeRule(
        ChargeKey.ENERGY_SUPPLY, "Προμήθεια/Χρέωση ενέργειας",
        ("χρεωση ενεργειας", "προμηθεια ενεργειας", "ενεργειακη χρεωση", "χρεωση προμηθειας", "προμηθεια"),
    ),
    ChargeRule(
        ChargeKey.FIXED_FEE, "Πάγιο",
        ("παγιο", "παγια χρεωση", "σταθερη χρεωση"),
    ),
    ChargeRule(
        ChargeKey.REGULATED, "Ρυθμιζόμενες χρεώσεις",
        ("ρυθμιζομενες", "ρυθμιζομενη χρεωση", "χρεωσεις χρησης δικτυου",
         "υπηρεσιες κοινης ωφελειας", "χρησης συστηματος"),
    ),
    ChargeRule(
        ChargeKey.MISC, "Διάφορα/Λοιπές",
        ("διαφορα", "λοιπες χρεωσεις", "λοιπα", "αλλες χρεωσεις"),
    ),
    ChargeRule(
        ChargeKey.MUNICIPAL_FEES_DT, "Δημοτικά Τέλη (ΔΤ)",
        ("δημοτικα τελη", "δ.τ.", "δτ"),
    ),
    ChargeRule(
        ChargeKey.MUNICIPAL_TAX_DF, "Δημοτικός Φόρος (ΔΦ)",
        ("δημοτικος φορος", "δ.φ.", "δφ"),
    ),
    ChargeRule(
        ChargeKey.TAP, "ΤΑΠ",
        ("τ.α.π.", "ταπ", "τελος ακινητης περιουσιας"),
    ),
    ChargeRule(
        ChargeKey.ERT, "ΕΡΤ",
        ("ε.ρ.τ.", "ερτ", "ανταποδοτικο τελος ερτ", "ραδιοτηλεοραση"),
    ),
    ChargeRule(
        ChargeKey.VAT, "ΦΠΑ",
        ("φ.π.α.", "φπα", "φορος προστιθεμενης αξιας"),
    ),
)

CATEGORY_LABELS: dict[ChargeKey, str] = {rule.key: rule.label for rule in CHARGE_RULES}
CATEGORY_LABELS[ChargeKey.CREDIT] = "Έκπτωση/Πίστωση"


def get_label(key: ChargeKey | str) -> str:
    """Human label for a category key, falling back to the key itself."""
    try:
        return CATEGORY_LABELS[ChargeKey(key)]
    except ValueError:
        return str(key)


def match_phrase(rule: ChargeRule, normalized_line: str) -> str | None:
    """Return the first phrase of *rule* contained in the line, if any.

    *normalized_line* must already be folded with ``normalize_text``.
    """
    for phrase in rule.patterns:
        if phrase in normalized_line:
            return phrase
    return None

"""Accent and case folding used for keyword matching on bill text."""
from __future__ import annotations
import unicodedata


def normalize_text(text: str) -> str:
    """Fold accented and diaeresis characters to their base letter and lower-case.

    ``"Δημοτικός Φόρος"`` becomes ``"δημοτικος φορος"`` and ``"ΐ"`` becomes
    ``"ι"``. ``str.lower`` keeps the Greek final sigma, so keyword phrases
    ending in ``ς`` still match. Only used for matching; callers keep the
    original text for anything they store.
    """
    decomposed = unicodedata.normalize("NFD", text)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return unicodedata.normalize("NFC", stripped).lower()

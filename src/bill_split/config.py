"""Application configuration via environment variables with BILLSPLIT_ prefix."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Bill splitter configuration.

    All settings are read from environment variables prefixed with
    ``BILLSPLIT_``. The calculation and parsing engines take no settings;
    these only feed the pipeline, the scripts and the history store.
    """

    model_config = SettingsConfigDict(env_prefix="BILLSPLIT_")

    # ── Occupants ──────────────────────────────────────────────────────────
    occupant_a_name: str = "Occupant A"
    occupant_b_name: str = "Occupant B"
    default_sqm_a: float = Field(default=53.0, gt=0.0)
    default_sqm_b: float = Field(default=207.0, gt=0.0)

    # ── Text extraction ────────────────────────────────────────────────────
    # Below this many characters the document is treated as image-only
    min_text_chars: int = Field(default=50, ge=1)

    # ── Local Storage ──────────────────────────────────────────────────────
    history_path: str = "./data/history.json"

    # ── Logging ────────────────────────────────────────────────────────────
    log_level: str = "INFO"

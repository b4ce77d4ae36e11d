"""Validation of externally supplied bill descriptions -- pure code."""
from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

import structlog
from pydantic import ValidationError

from ..errors import BillValidationError
from ..models.extraction import ValidationReport
from ..models.schema import BillDescription, VatMode

logger = structlog.get_logger(__name__)

INVALID_JSON = "Invalid JSON syntax"
NOT_AN_OBJECT = "Bill data must be a JSON object"
PERIOD_REQUIRED = "Billing period (from/to) is required"
KWH_REQUIRED = "kWh for both occupants (occupantA/occupantB) is required"
KWH_NOT_NUMERIC = "kWh values must be numbers"
KWH_ZERO = "Total kWh cannot be zero"
CHARGES_REQUIRED = "Charges are required"
VAT_MODE_INVALID = 'VAT mode must be "amount" or "rate"'


def _get(obj: Any, key: str) -> Any:
    return obj.get(key) if isinstance(obj, Mapping) else None


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_bill_data(candidate: Any) -> ValidationReport:
    """Structural check of a bill description before calculation.

    Checks the period bounds, both kWh values and their sum, the presence of
    the charges and the VAT mode. Individual charge amounts are not
    type-checked here; ``load_bill`` does that when building the model.
    """
    if not isinstance(candidate, Mapping):
        return ValidationReport(valid=False, errors=[NOT_AN_OBJECT])

    errors: list[str] = []

    period = _get(candidate, "period")
    if not _get(period, "from") or not _get(period, "to"):
        errors.append(PERIOD_REQUIRED)

    kwh = _get(candidate, "kwh")
    kwh_a, kwh_b = _get(kwh, "occupantA"), _get(kwh, "occupantB")
    if kwh_a is None or kwh_b is None:
        errors.append(KWH_REQUIRED)
    elif not (_is_number(kwh_a) and _is_number(kwh_b)):
        errors.append(KWH_NOT_NUMERIC)
    elif kwh_a + kwh_b == 0:
        errors.append(KWH_ZERO)

    charges = _get(candidate, "charges")
    if not isinstance(charges, Mapping):
        errors.append(CHARGES_REQUIRED)
    elif _get(_get(charges, "vat"), "mode") not in (VatMode.AMOUNT.value, VatMode.RATE.value):
        errors.append(VAT_MODE_INVALID)

    return ValidationReport(valid=not errors, errors=errors)


def _format_pydantic_error(error: dict) -> str:
    location = ".".join(str(part) for part in error.get("loc", ()))
    return f"{location}: {error.get('msg', 'invalid value')}" if location else error.get("msg", "invalid value")


def format_validation_errors(exc: ValidationError) -> list[str]:
    """Render a pydantic error as ``"loc.parts: msg"`` messages."""
    return [_format_pydantic_error(error) for error in exc.errors()]


def load_bill(candidate: Any) -> BillDescription:
    """Validate *candidate* and build a ``BillDescription`` from it.

    Raises:
        BillValidationError: structural check failed or a field has the wrong type.
    """
    report = validate_bill_data(candidate)
    if not report.valid:
        logger.info("bill_validation_failed", errors=report.errors)
        raise BillValidationError(report.errors)

    try:
        return BillDescription.model_validate(candidate)
    except ValidationError as exc:
        errors = format_validation_errors(exc)
        logger.info("bill_validation_failed", errors=errors)
        raise BillValidationError(errors) from exc


def load_bill_json(text: str) -> BillDescription:
    """Parse JSON text into a ``BillDescription``; bad syntax is a validation error."""
    try:
        candidate = json.loads(text)
    except json.JSONDecodeError as exc:
        raise BillValidationError([INVALID_JSON]) from exc
    return load_bill(candidate)

"""Bill completion: merge parsed bill text with the inputs only a person can give.

The parser never knows how the metered kWh divide between the occupants, and
it may miss charges. This step takes the reviewed extraction, the two kWh
readings and any manual assignments of leftover lines, and builds the
``BillDescription`` the calculator consumes.
"""
from __future__ import annotations

from collections.abc import Mapping

import structlog
from pydantic import ValidationError

from ..errors import BillValidationError
from ..international.date_parsing import parse_period_date, validate_billing_period
from ..models.extraction import CompletedBill, ExtractionResult
from ..models.schema import (
    AreaSplit,
    BillDescription,
    BillingPeriod,
    ChargeKey,
    ChargeSet,
    ConsumptionSplit,
    CreditSpec,
    VatInclusionMask,
    VatMode,
    VatSpec,
)
from .validation import format_validation_errors

logger = structlog.get_logger(__name__)

# Difference tolerated between the bill's total kWh and the two readings
KWH_TOTAL_TOLERANCE = 0.5


def resolve_charge(
    extraction: ExtractionResult,
    key: ChargeKey,
    assignments: Mapping[int, ChargeKey | str],
) -> float:
    """Parsed value for *key*, else the first unresolved line assigned to it, else 0."""
    parsed = extraction.field(key)
    if parsed is not None and parsed.value is not None:
        return parsed.value

    for index in sorted(assignments):
        if assignments[index] != key or not 0 <= index < len(extraction.unresolved_lines):
            continue
        amount = extraction.unresolved_lines[index].potential_amount
        if amount is not None:
            return amount
    return 0.0


def _resolve_period(extraction: ExtractionResult, period: BillingPeriod | None) -> BillingPeriod:
    if period is not None:
        return period
    if not extraction.period_from or not extraction.period_to:
        raise BillValidationError(["Billing period (from/to) is required"])
    try:
        return BillingPeriod(
            period_from=parse_period_date(extraction.period_from),
            period_to=parse_period_date(extraction.period_to),
        )
    except ValueError as exc:
        raise BillValidationError([f"Billing period could not be read: {exc}"]) from exc


def complete_bill(
    extraction: ExtractionResult,
    kwh_a: float,
    kwh_b: float,
    assignments: Mapping[int, ChargeKey | str] | None = None,
    period: BillingPeriod | None = None,
    sqm: AreaSplit | None = None,
    occupant_names: tuple[str, str] = ("Occupant A", "Occupant B"),
) -> CompletedBill:
    """Build a bill description from a parsed bill and the per-occupant kWh.

    *assignments* maps an index of ``extraction.unresolved_lines`` to the
    category its amount belongs to. VAT is taken as a stated amount and the
    credit is left disabled; both can be changed afterwards by editing the
    returned bill.

    Raises:
        BillValidationError: no usable period, negative kWh, both kWh zero or a
            value that is not a finite number.
    """
    assignments = assignments or {}

    if kwh_a < 0 or kwh_b < 0:
        raise BillValidationError(["kWh cannot be negative"])
    if kwh_a == 0 and kwh_b == 0:
        raise BillValidationError(["At least one occupant must have kWh greater than 0"])

    warnings: list[str] = []
    for name, value in zip(occupant_names, (kwh_a, kwh_b)):
        if value == 0:
            warnings.append(f"{name} has 0 kWh")

    if extraction.total_kwh is not None and abs(extraction.total_kwh - (kwh_a + kwh_b)) > KWH_TOTAL_TOLERANCE:
        warnings.append(
            f"Entered kWh ({kwh_a + kwh_b:g}) differ from the bill total ({extraction.total_kwh:g})"
        )

    billing_period = _resolve_period(extraction, period)
    _, period_message = validate_billing_period(billing_period.period_from, billing_period.period_to)
    if period_message:
        warnings.append(period_message)

    vat_value = resolve_charge(extraction, ChargeKey.VAT, assignments)
    if vat_value == 0:
        warnings.append("VAT not found; calculating without VAT")

    try:
        charges = ChargeSet(
            energy_supply=resolve_charge(extraction, ChargeKey.ENERGY_SUPPLY, assignments),
            fixed_fee=resolve_charge(extraction, ChargeKey.FIXED_FEE, assignments),
            regulated=resolve_charge(extraction, ChargeKey.REGULATED, assignments),
            misc=resolve_charge(extraction, ChargeKey.MISC, assignments),
            municipal_fees_dt=resolve_charge(extraction, ChargeKey.MUNICIPAL_FEES_DT, assignments),
            municipal_tax_df=resolve_charge(extraction, ChargeKey.MUNICIPAL_TAX_DF, assignments),
            tap=resolve_charge(extraction, ChargeKey.TAP, assignments),
            ert=resolve_charge(extraction, ChargeKey.ERT, assignments),
            vat=VatSpec(mode=VatMode.AMOUNT, value=vat_value),
            credit=CreditSpec(enabled=False),
        )
        bill = BillDescription(
            period=billing_period,
            kwh=ConsumptionSplit(occupant_a=kwh_a, occupant_b=kwh_b),
            sqm=sqm or AreaSplit(),
            charges=charges,
            vat_includes=VatInclusionMask(),
        )
    except ValidationError as exc:
        raise BillValidationError(format_validation_errors(exc)) from exc

    logger.info(
        "bill_completed",
        parsed_fields=len(extraction.fields),
        assignments=len(assignments),
        warnings=len(warnings),
    )
    return CompletedBill(bill=bill, warnings=warnings)

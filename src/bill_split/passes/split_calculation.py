"""Split calculation: allocate every charge of a bill between the two occupants."""
from __future__ import annotations

from functools import reduce

import structlog

from ..errors import ZeroConsumptionError
from ..international.charge_taxonomies import get_label
from ..international.rounding_rules import round_currency
from ..international.vat import compute_vat_amount
from ..models.schema import (
    AllocationBasis,
    AllocationLine,
    BillDescription,
    CalculationResult,
    ChargeKey,
    CreditSplit,
    SplitTotals,
)

logger = structlog.get_logger(__name__)

HALF = (0.5, 0.5)


def build_line(
    key: ChargeKey,
    total: float,
    basis: AllocationBasis,
    ratios: tuple[float, float],
) -> AllocationLine:
    """Build one breakdown line.

    Total and both shares are rounded independently from the unrounded
    amount, so the shares can miss the rounded total by a cent.
    """
    ratio_a, ratio_b = ratios
    return AllocationLine(
        category_key=key,
        label=get_label(key),
        total=round_currency(total),
        occupant_a=round_currency(total * ratio_a),
        occupant_b=round_currency(total * ratio_b),
        basis=basis,
    )


def _accumulate(totals: SplitTotals, line: AllocationLine) -> SplitTotals:
    return SplitTotals(
        occupant_a=totals.occupant_a + line.occupant_a,
        occupant_b=totals.occupant_b + line.occupant_b,
        total=totals.total + line.total,
    )


def sum_lines(lines: tuple[AllocationLine, ...]) -> SplitTotals:
    """Fold the rounded line amounts into grand totals, rounded again to cents."""
    folded = reduce(_accumulate, lines, SplitTotals())
    return SplitTotals(
        occupant_a=round_currency(folded.occupant_a),
        occupant_b=round_currency(folded.occupant_b),
        total=round_currency(folded.total),
    )


def calculate_split(bill: BillDescription) -> CalculationResult:
    """Split *bill* between occupant A and occupant B.

    Order of the breakdown:
    1. energy supply, fixed fee, regulated, misc by kWh
    2. municipal fees and municipal tax by area
    3. TAP, entirely on occupant B
    4. ERT, half each
    5. VAT by kWh, whatever fed its base
    6. credit (always negative) by kWh or half each

    Lines with a zero total are left out, except the credit line.

    Raises:
        ZeroConsumptionError: the two kWh values sum to zero.
    """
    kwh, sqm, charges = bill.kwh, bill.sqm, bill.charges

    total_kwh = kwh.total
    if total_kwh == 0:
        raise ZeroConsumptionError()

    kwh_ratios = (kwh.occupant_a / total_kwh, kwh.occupant_b / total_kwh)
    sqm_ratios = (sqm.occupant_a / sqm.total, sqm.occupant_b / sqm.total)

    lines: list[AllocationLine] = []

    def add(key: ChargeKey, total: float, basis: AllocationBasis, ratios: tuple[float, float]) -> None:
        if total == 0 and key != ChargeKey.CREDIT:
            return
        lines.append(build_line(key, total, basis, ratios))

    # A. kWh-proportional
    add(ChargeKey.ENERGY_SUPPLY, charges.energy_supply, AllocationBasis.KWH, kwh_ratios)
    add(ChargeKey.FIXED_FEE, charges.fixed_fee, AllocationBasis.KWH, kwh_ratios)
    add(ChargeKey.REGULATED, charges.regulated, AllocationBasis.KWH, kwh_ratios)
    add(ChargeKey.MISC, charges.misc, AllocationBasis.KWH, kwh_ratios)

    # B. area-proportional
    add(ChargeKey.MUNICIPAL_FEES_DT, charges.municipal_fees_dt, AllocationBasis.AREA, sqm_ratios)
    add(ChargeKey.MUNICIPAL_TAX_DF, charges.municipal_tax_df, AllocationBasis.AREA, sqm_ratios)

    # C. TAP
    if charges.tap > 0:
        lines.append(build_line(ChargeKey.TAP, charges.tap, AllocationBasis.FIXED_TO_B, (0.0, 1.0)))

    # D. ERT
    add(ChargeKey.ERT, charges.ert, AllocationBasis.EVEN_HALF, HALF)

    # E. VAT
    add(ChargeKey.VAT, compute_vat_amount(charges, bill.vat_includes), AllocationBasis.KWH, kwh_ratios)

    # F. credit
    credit = charges.credit
    if credit.enabled and credit.amount != 0:
        credit_amount = -abs(credit.amount)
        if credit.split == CreditSplit.HALF:
            add(ChargeKey.CREDIT, credit_amount, AllocationBasis.EVEN_HALF, HALF)
        else:
            add(ChargeKey.CREDIT, credit_amount, AllocationBasis.KWH, kwh_ratios)

    breakdown = tuple(lines)
    totals = sum_lines(breakdown)

    logger.info(
        "split_calculated",
        lines=len(breakdown),
        total=totals.total,
        occupant_a=totals.occupant_a,
        occupant_b=totals.occupant_b,
    )

    return CalculationResult(
        breakdown=breakdown,
        totals=totals,
        period=bill.period,
        kwh=bill.kwh,
    )

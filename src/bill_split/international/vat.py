"""VAT (ΦΠΑ) amount for a bill: stated amount or rate over a taxable base."""
from __future__ import annotations

from ..models.schema import ChargeKey, ChargeSet, VatInclusionMask, VatMode


def taxable_base_table(charges: ChargeSet, mask: VatInclusionMask) -> tuple[tuple[ChargeKey, bool, float], ...]:
    """Fixed ``(charge, included, amount)`` table; VAT and credit never appear."""
    return (
        (ChargeKey.ENERGY_SUPPLY, mask.energy_supply, charges.energy_supply),
        (ChargeKey.FIXED_FEE, mask.fixed_fee, charges.fixed_fee),
        (ChargeKey.REGULATED, mask.regulated, charges.regulated),
        (ChargeKey.MISC, mask.misc, charges.misc),
        (ChargeKey.MUNICIPAL_FEES_DT, mask.municipal_fees_dt, charges.municipal_fees_dt),
        (ChargeKey.MUNICIPAL_TAX_DF, mask.municipal_tax_df, charges.municipal_tax_df),
        (ChargeKey.TAP, mask.tap, charges.tap),
        (ChargeKey.ERT, mask.ert, charges.ert),
    )


def compute_taxable_base(charges: ChargeSet, mask: VatInclusionMask) -> float:
    """Sum of the charges whose inclusion flag is set."""
    return sum(amount for _, included, amount in taxable_base_table(charges, mask) if included)


def compute_vat_amount(charges: ChargeSet, mask: VatInclusionMask) -> float:
    """Unrounded VAT for the bill.

    In ``amount`` mode the stated value is returned verbatim; in ``rate`` mode
    the value is a percentage applied to the taxable base.
    """
    if charges.vat.mode == VatMode.AMOUNT:
        return charges.vat.value
    return compute_taxable_base(charges, mask) * (charges.vat.value / 100)

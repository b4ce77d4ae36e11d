"""Bill description and calculation result schema.

The JSON field names (``from``, ``billNumber``, ``occupantA`` ...) are the
boundary contract shared with the form, the JSON editor and the history file,
so every model accepts and emits those aliases while the Python attributes use
snake_case.
"""

from __future__ import annotations

from datetime import date
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, allow_inf_nan=False)


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class ChargeKey(StrEnum):
    ENERGY_SUPPLY = "energy_supply"
    FIXED_FEE = "fixed_fee"
    REGULATED = "regulated"
    MISC = "misc"
    MUNICIPAL_FEES_DT = "municipal_fees_dt"
    MUNICIPAL_TAX_DF = "municipal_tax_df"
    TAP = "tap"
    ERT = "ert"
    VAT = "vat"
    CREDIT = "credit"


class VatMode(StrEnum):
    AMOUNT = "amount"
    RATE = "rate"


class CreditSplit(StrEnum):
    KWH = "kwh"
    HALF = "half"


class AllocationBasis(StrEnum):
    KWH = "kwh"
    AREA = "area"
    EVEN_HALF = "even_half"
    FIXED_TO_B = "fixed_to_b"


# ---------------------------------------------------------------------------
# Bill description (calculator input)
# ---------------------------------------------------------------------------


class BillingPeriod(_Frozen):
    """Inclusive billing period with an optional supplier bill reference."""

    period_from: date = Field(alias="from")
    period_to: date = Field(alias="to")
    bill_number: str | None = Field(default=None, alias="billNumber")


class ConsumptionSplit(_Frozen):
    """Metered kWh per occupant."""

    occupant_a: float = Field(ge=0.0, alias="occupantA")
    occupant_b: float = Field(ge=0.0, alias="occupantB")

    @property
    def total(self) -> float:
        return self.occupant_a + self.occupant_b


class AreaSplit(_Frozen):
    """Fixed living-area weights used for the municipal charges."""

    occupant_a: float = Field(default=53.0, gt=0.0, alias="occupantA")
    occupant_b: float = Field(default=207.0, gt=0.0, alias="occupantB")

    @property
    def total(self) -> float:
        return self.occupant_a + self.occupant_b


class VatSpec(_Frozen):
    """VAT either as a stated amount or as a percentage rate."""

    mode: VatMode = VatMode.AMOUNT
    value: float = 0.0


class CreditSpec(_Frozen):
    """Discount/credit line. The amount is a magnitude; sign is ignored."""

    enabled: bool = False
    amount: float = 0.0
    split: CreditSplit = CreditSplit.KWH


class ChargeSet(_Frozen):
    energy_supply: float = Field(default=0.0, ge=0.0)
    fixed_fee: float = Field(default=0.0, ge=0.0)
    regulated: float = Field(default=0.0, ge=0.0)
    misc: float = Field(default=0.0, ge=0.0)
    municipal_fees_dt: float = Field(default=0.0, ge=0.0)
    municipal_tax_df: float = Field(default=0.0, ge=0.0)
    tap: float = Field(default=0.0, ge=0.0)
    ert: float = Field(default=0.0, ge=0.0)
    vat: VatSpec = Field(default_factory=VatSpec)
    credit: CreditSpec = Field(default_factory=CreditSpec)


class VatInclusionMask(_Frozen):
    """Which charges feed the taxable base when VAT is given as a rate."""

    energy_supply: bool = True
    fixed_fee: bool = True
    regulated: bool = True
    misc: bool = True
    municipal_fees_dt: bool = False
    municipal_tax_df: bool = False
    tap: bool = False
    ert: bool = False


class BillDescription(_Frozen):
    """Everything the split calculator needs for one bill."""

    period: BillingPeriod
    kwh: ConsumptionSplit
    sqm: AreaSplit = Field(default_factory=AreaSplit)
    charges: ChargeSet
    vat_includes: VatInclusionMask = Field(default_factory=VatInclusionMask)

    def to_json_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


# ---------------------------------------------------------------------------
# Calculation result
# ---------------------------------------------------------------------------


class AllocationLine(_Frozen):
    """One charge category split between the two occupants."""

    category_key: ChargeKey = Field(alias="categoryKey")
    label: str
    total: float
    occupant_a: float = Field(alias="occupantA")
    occupant_b: float = Field(alias="occupantB")
    basis: AllocationBasis


class SplitTotals(_Frozen):
    occupant_a: float = Field(default=0.0, alias="occupantA")
    occupant_b: float = Field(default=0.0, alias="occupantB")
    total: float = 0.0


class CalculationResult(_Frozen):
    """Breakdown in computation order plus grand totals."""

    breakdown: tuple[AllocationLine, ...]
    totals: SplitTotals
    period: BillingPeriod
    kwh: ConsumptionSplit

    def line(self, key: ChargeKey | str) -> AllocationLine | None:
        """Return the breakdown line for *key*, or ``None`` if it was not emitted."""
        for item in self.breakdown:
            if item.category_key == key:
                return item
        return None

    def consumption_shares(self) -> tuple[float, float]:
        """Percentage of the metered kWh per occupant, one decimal place."""
        total = self.kwh.total
        if total == 0:
            return 0.0, 0.0
        return (
            round(self.kwh.occupant_a / total * 100, 1),
            round(self.kwh.occupant_b / total * 100, 1),
        )

    def to_json_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)

"""Demo bill and sample bill text for trying the splitter without a real PDF."""

from __future__ import annotations

from bill_split.models.schema import BillDescription

DEMO_BILL_DATA: dict = {
    "period": {"from": "2025-06-01", "to": "2025-06-30", "billNumber": "DEI-2025-06-001"},
    "kwh": {"occupantA": 85, "occupantB": 165},
    "sqm": {"occupantA": 53, "occupantB": 207},
    "charges": {
        "energy_supply": 45.20,
        "fixed_fee": 8.50,
        "regulated": 12.30,
        "misc": 3.80,
        "municipal_fees_dt": 15.60,
        "municipal_tax_df": 8.40,
        "tap": 12.50,
        "ert": 3.00,
        "vat": {"mode": "amount", "value": 15.82},
        "credit": {"enabled": True, "amount": 7.88, "split": "kwh"},
    },
    "vat_includes": {
        "energy_supply": True,
        "fixed_fee": True,
        "regulated": True,
        "misc": True,
        "municipal_fees_dt": False,
        "municipal_tax_df": False,
        "tap": False,
        "ert": False,
    },
}

DEMO_BILL_TEXT = """
ΛΟΓΑΡΙΑΣΜΟΣ ΗΛΕΚΤΡΙΚΟΥ ΡΕΥΜΑΤΟΣ
Περίοδος κατανάλωσης: 01/06/2025 - 30/06/2025
Αριθμός Λογαριασμού: DEI-2025-06-001

ΣΤΟΙΧΕΙΑ ΚΑΤΑΝΑΛΩΣΗΣ
Κατανάλωση περιόδου: 250 kWh

ΑΝΑΛΥΣΗ ΧΡΕΩΣΕΩΝ

Χρέωση Ενέργειας                    45,20 €
Πάγιο                                8,50 €
Ρυθμιζόμενες Χρεώσεις              12,30 €
Διάφορα/Λοιπές                       3,80 €

ΦΟΡΟΙ & ΤΕΛΗ
Δημοτικά Τέλη (Δ.Τ.)               15,60 €
Δημοτικός Φόρος (Δ.Φ.)              8,40 €
Τ.Α.Π.                             12,50 €
Ε.Ρ.Τ.                              3,00 €

Φ.Π.Α. 6%                          15,82 €

Έκπτωση συνεπούς πελάτη            -7,88 €

ΣΥΝΟΛΟ ΠΛΗΡΩΜΗΣ                   117,24 €
"""


def demo_bill() -> BillDescription:
    return BillDescription.model_validate(DEMO_BILL_DATA)

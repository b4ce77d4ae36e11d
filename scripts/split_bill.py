#!/usr/bin/env python3
"""Split a bill described in a JSON file and print the breakdown."""
import sys
from pathlib import Path

# Load .env file
from dotenv import load_dotenv
load_dotenv()

from bill_split.config import Settings
from bill_split.demo import DEMO_BILL_DATA
from bill_split.errors import BillValidationError, HistoryUnreadableError, ZeroConsumptionError
from bill_split.pipeline import SplitPipeline
from bill_split.utils.logging import setup_logging


def main(argv: list[str]) -> int:
    settings = Settings()
    setup_logging(settings.log_level)
    pipeline = SplitPipeline(settings)
    save = "--save" in argv
    args = [a for a in argv if a != "--save"]
    if len(args) != 1:
        print("Usage: python scripts/split_bill.py <bill.json | --demo> [--save]")
        return 1

    try:
        if args[0] == "--demo":
            bill, result = pipeline.calculate_data(DEMO_BILL_DATA)
        else:
            path = Path(args[0])
            if not path.exists():
                print(f"Error: File not found: {path}")
                return 1
            bill, result = pipeline.calculate_json(path.read_text(encoding="utf-8"))
    except BillValidationError as e:
        print("Invalid bill:")
        for error in e.errors:
            print(f"  - {error}")
        return 1
    except ZeroConsumptionError as e:
        print(f"Error: {e}")
        return 1

    share_a, share_b = result.consumption_shares()
    name_a, name_b = settings.occupant_a_name, settings.occupant_b_name

    print(f"Period: {bill.period.period_from} - {bill.period.period_to}")
    print(f"{name_a}: {bill.kwh.occupant_a:g} kWh ({share_a}%)")
    print(f"{name_b}: {bill.kwh.occupant_b:g} kWh ({share_b}%)")
    print("-" * 72)
    print(f"{'Category':<30}{'Total':>10}{name_a:>12}{name_b:>12}  Basis")
    for line in result.breakdown:
        print(f"{line.label:<30}{line.total:>10.2f}{line.occupant_a:>12.2f}{line.occupant_b:>12.2f}  {line.basis}")
    print("-" * 72)
    totals = result.totals
    print(f"{'Total':<30}{totals.total:>10.2f}{totals.occupant_a:>12.2f}{totals.occupant_b:>12.2f}")

    if save:
        try:
            stored = pipeline.save(bill, result)
        except HistoryUnreadableError as e:
            print(f"Error: {e}")
            return 1
        print(f"\nSaved to history as '{stored.title}' ({stored.id})")
    return 0


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python scripts/split_bill.py <bill.json | --demo> [--save]")
        sys.exit(1)

    sys.exit(main(sys.argv[1:]))

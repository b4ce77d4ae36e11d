#!/usr/bin/env python3
"""Parse a bill PDF (or the demo bill text) and print what was found."""
import json
import sys
from pathlib import Path

# Load .env file
from dotenv import load_dotenv
load_dotenv()

from bill_split.config import Settings
from bill_split.demo import DEMO_BILL_TEXT
from bill_split.errors import ExtractionFailure
from bill_split.pipeline import SplitPipeline
from bill_split.utils.logging import setup_logging


def main(target: str) -> int:
    settings = Settings()
    setup_logging(settings.log_level)
    pipeline = SplitPipeline(settings)

    if target == "--demo":
        extraction = pipeline.read_text(DEMO_BILL_TEXT)
    else:
        path = Path(target)
        if not path.exists():
            print(f"Error: File not found: {target}")
            return 1
        try:
            extraction = pipeline.read_document(path.read_bytes())
        except ExtractionFailure as e:
            print(f"Error: {e}")
            return 1

    output = extraction.model_dump(mode="json", exclude={"raw_text"})
    print(json.dumps(output, ensure_ascii=False, indent=2))

    if extraction.needs_manual_assignment:
        print("\nFew charges recognised; assign the unresolved lines manually.", file=sys.stderr)
    return 0


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python scripts/parse_bill.py <bill.pdf | --demo>")
        sys.exit(1)

    sys.exit(main(sys.argv[1]))

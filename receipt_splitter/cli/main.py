#!/usr/bin/env python3
"""
Main CLI entrypoint for receipt splitting.
"""

import argparse
import sys
from pathlib import Path

from receipt_splitter.core.config import load_settings, charge_config_from_settings
from receipt_splitter.core.models import DistributionMode
from receipt_splitter.core.ocr import OCRError
from receipt_splitter.core.processor import SplitProcessor, load_assignments

MODES = [m.value for m in DistributionMode]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="receipt-split",
        description="OCR a receipt, extract line items and split the bill between people",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Split every item evenly between three people
  receipt-split receipt.jpg --people Alice Bob Carol --even

  # Use per-item percentages and an equal tip
  receipt-split receipt.jpg --people Alice Bob --assignments shares.json --tip-mode equal

  # Already have the OCR text? Pass a .txt file
  receipt-split receipt.txt --people Alice Bob --even --csv split.csv --pdf split.pdf
        """
    )
    parser.add_argument("receipt",
                        help="Receipt image, searchable PDF, or .txt file with OCR text")
    parser.add_argument("--people", nargs="+", required=True,
                        help="Names of the people splitting the bill")
    parser.add_argument("--assignments",
                        help='JSON file mapping item name to {"person": percent}')
    parser.add_argument("--even", action="store_true",
                        help="Split every item evenly between all people")
    parser.add_argument("--settings", default="./split_settings.json",
                        help="Settings JSON for charges and thresholds (default: ./split_settings.json)")
    parser.add_argument("--tax", type=float, help="Tax percent (overrides settings)")
    parser.add_argument("--service", type=float, help="Service charge percent (overrides settings)")
    parser.add_argument("--tip", type=float, help="Tip percent (overrides settings)")
    parser.add_argument("--tax-mode", choices=MODES,
                        help="How tax and service are shared (default from settings)")
    parser.add_argument("--tip-mode", choices=MODES,
                        help="How the tip is shared (default from settings)")
    parser.add_argument("--csv", help="Write per-person totals to this CSV file")
    parser.add_argument("--pdf", help="Write a PDF summary to this file")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Show detailed parsing information for debugging")
    return parser


def main(argv=None):
    """Main CLI entrypoint."""
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings(Path(args.settings))
        charge_config = charge_config_from_settings(
            settings,
            tax_percent=args.tax,
            service_percent=args.service,
            tip_percent=args.tip,
            tax_distribution=args.tax_mode,
            tip_distribution=args.tip_mode,
        )
        processor = SplitProcessor(
            people=args.people,
            charge_config=charge_config,
            confidence_threshold=settings["confidence_threshold"],
            max_processing_seconds=settings["max_processing_seconds"],
            max_people=settings["max_people"],
            tesseract_cmd=settings["tesseract_cmd"],
            verbose=args.verbose,
        )
    except ValueError as e:
        print(f"[ERROR] Invalid configuration: {e}")
        return 1

    if args.verbose:
        print(f"  [DEBUG] Charges: tax {charge_config.tax_percent:g}% / service "
              f"{charge_config.service_percent:g}% ({charge_config.tax_distribution.value}), "
              f"tip {charge_config.tip_percent:g}% ({charge_config.tip_distribution.value})")

    try:
        result = processor.process_receipt(Path(args.receipt))
    except OCRError as e:
        print(f"[ERROR] {e}")
        return 1

    items = result.items
    if not items:
        print("[WARN] Nothing to split. Add items manually or try a clearer image.")
        return 0

    try:
        if args.assignments:
            items = processor.apply_assignments(items, load_assignments(Path(args.assignments)))
        elif args.even:
            items = processor.split_all_evenly(items)
    except (OSError, ValueError) as e:
        print(f"[ERROR] Could not apply assignments: {e}")
        return 1

    processor.check_assignments(items)
    processor.generate_reports(
        items,
        out_csv=Path(args.csv) if args.csv else None,
        out_pdf=Path(args.pdf) if args.pdf else None,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())

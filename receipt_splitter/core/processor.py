"""
Orchestration: receipt file -> items -> assignments -> per-person totals.
"""

import json
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from .allocation import allocate, reconciles, unassigned_items, item_assignment_total
from .editing import add_person, split_item_evenly, update_assignment
from .models import ChargeConfig, OCRResult, Person, PersonTotal, ReceiptItem
from .ocr import run_ocr
from .reporting import build_summary_pdf, format_summary, write_csv
from .utils import MAX_PEOPLE, money_fmt
from .validation import (DEFAULT_CONFIDENCE_THRESHOLD, DEFAULT_MAX_PROCESSING_SECONDS,
                         validate_extraction)


def load_assignments(path: Path) -> Dict[str, Dict[str, float]]:
    """
    Load item assignments from JSON, keyed by item name.

    Example:
        {"Margherita Pizza": {"Alice": 50, "Bob": 50}, "Craft Beer": {"Bob": 100}}
    """
    with path.open("r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict) or not all(isinstance(v, dict) for v in data.values()):
        raise ValueError(f"Assignments file {path} must map item names to {{person: percent}} objects")
    return data


class SplitProcessor:
    """Runs one receipt through extraction, assignment and allocation."""

    def __init__(self, people: Sequence[str], charge_config: ChargeConfig,
                 confidence_threshold: float = DEFAULT_CONFIDENCE_THRESHOLD,
                 max_processing_seconds: float = DEFAULT_MAX_PROCESSING_SECONDS,
                 max_people: int = MAX_PEOPLE,
                 tesseract_cmd: Optional[str] = None,
                 verbose: bool = False):
        """
        Initialize split processor.

        Args:
            people: Names of the people splitting the bill
            charge_config: Tax/service/tip percentages and distribution modes
            confidence_threshold: OCR confidence (0-100) below which a warning is shown
            max_processing_seconds: OCR time above which a suggestion is shown
            max_people: Upper bound on people per bill
            tesseract_cmd: Path to the tesseract binary (optional)
            verbose: Whether to show verbose debugging output

        Raises:
            ValueError: empty, duplicate or too many people
        """
        self.people: List[Person] = []
        for name in people:
            self.people = add_person(self.people, name, max_people=max_people)
        self.charge_config = charge_config
        self.confidence_threshold = confidence_threshold
        self.max_processing_seconds = max_processing_seconds
        self.tesseract_cmd = tesseract_cmd
        self.verbose = verbose

    def process_receipt(self, path: Path) -> OCRResult:
        """OCR a receipt, extract its items and report advisory issues."""
        print(f"[INFO] Processing {Path(path).name}")
        result = run_ocr(path, tesseract_cmd=self.tesseract_cmd, verbose=self.verbose)

        report = validate_extraction(result, self.confidence_threshold, self.max_processing_seconds)
        for issue in report.issues:
            print(f"[WARN] {issue}")
        for suggestion in report.suggestions:
            print(f"       → {suggestion}")

        print(f"[INFO] Extracted {len(result.items)} item(s)")
        if self.verbose:
            for item in result.items:
                print(f"  [DEBUG] {item.name}: {money_fmt(item.price)} ({item.source_rule})")
            if not result.items:
                print(f"  [DEBUG] First 5 lines of OCR text:")
                for i, line in enumerate(result.text.splitlines()[:5], 1):
                    print(f"    {i}: {line[:80]}")
        return result

    def apply_assignments(self, items: Sequence[ReceiptItem],
                          assignments: Dict[str, Dict[str, float]]) -> List[ReceiptItem]:
        """Apply {item name: {person: percent}} to every item with that name."""
        updated = list(items)
        known = {item.name for item in items}
        for item_name in assignments:
            if item_name not in known:
                print(f"[WARN] No extracted item named '{item_name}'; assignment ignored")

        for item in items:
            for person_name, pct in assignments.get(item.name, {}).items():
                updated = update_assignment(updated, self.people, item.id, person_name, pct)
        return updated

    def split_all_evenly(self, items: Sequence[ReceiptItem]) -> List[ReceiptItem]:
        updated = list(items)
        for item in items:
            updated = split_item_evenly(updated, self.people, item.id)
        return updated

    def check_assignments(self, items: Sequence[ReceiptItem]) -> bool:
        """Warn about items whose shares do not add up to 100%; True if all are complete."""
        incomplete = unassigned_items(items)
        for item in incomplete:
            print(f"[WARN] '{item.name}' is {item_assignment_total(item):g}% assigned")
        if incomplete:
            print(f"[WARN] {len(incomplete)} item(s) not fully assigned; totals will not add up to the bill")
        elif not reconciles(items, self.people, self.charge_config):
            print(f"[WARN] Per-person totals do not add up to the bill")
            return False
        return not incomplete

    def split(self, items: Sequence[ReceiptItem]) -> Dict[str, PersonTotal]:
        return allocate(items, self.people, self.charge_config)

    def generate_reports(self, items: Sequence[ReceiptItem],
                         out_csv: Optional[Path] = None,
                         out_pdf: Optional[Path] = None) -> str:
        """Print the summary and write the optional CSV and PDF reports."""
        summary = format_summary(items, self.people, self.charge_config)
        print(summary)

        if out_csv:
            write_csv(self.split(items), out_csv)
            print(f"[OK] Wrote {out_csv}")

        if out_pdf:
            build_summary_pdf(items, self.people, self.charge_config, out_pdf)
            print(f"[OK] Wrote {out_pdf}")

        return summary

"""
Parsers for extracting priced line items from receipt text.
"""

import math
import re
from collections import Counter
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .models import ReceiptItem
from .utils import (
    ITEM_RULES, STRUCTURAL_SKIP_PATTERNS, KEYWORD_SKIP_PATTERNS, NON_NAME_PATTERN, PRICE_DIGITS_PATTERN,
    MIN_LINE_LENGTH, MIN_NAME_LENGTH, MAX_NAME_LENGTH, MIN_PRICE, MAX_PRICE,
    MIN_QUANTITY, MAX_QUANTITY, NAME_TRAILING_SEPARATORS, normalize_price, new_item_id,
)


@dataclass(frozen=True)
class ItemRule:
    """A line pattern plus the role of each capture group."""
    name: str
    pattern: re.Pattern
    groups: Tuple[str, ...]

    def match(self, line: str) -> Optional[Dict[str, str]]:
        m = self.pattern.match(line)
        if not m:
            return None
        return dict(zip(self.groups, m.groups()))


RULES = [ItemRule(name, re.compile(pat, re.IGNORECASE), groups)
         for name, pat, groups in ITEM_RULES]

_STRUCTURAL = [re.compile(p, re.IGNORECASE) for p in STRUCTURAL_SKIP_PATTERNS]
_KEYWORDS = [re.compile(p, re.IGNORECASE) for p in KEYWORD_SKIP_PATTERNS]
_NON_NAME = re.compile(NON_NAME_PATTERN)
_PRICE_DIGITS = re.compile(PRICE_DIGITS_PATTERN)


def split_lines(text: str) -> List[str]:
    """Split text on any newline sequence, dropping blank lines."""
    return [ln.strip() for ln in re.split(r"[\r\n]+", text or "") if ln.strip()]


def matches_skip_pattern(text: str) -> bool:
    """True if text is a receipt structure line (totals, headers) or mentions a non-item keyword."""
    if any(p.search(text) for p in _STRUCTURAL):
        return True
    return any(p.search(text) for p in _KEYWORDS)


def should_skip_line(line: str) -> bool:
    return len(line) < MIN_LINE_LENGTH or matches_skip_pattern(line)


def is_valid_item_name(name: str) -> bool:
    name = (name or "").strip()
    return (MIN_NAME_LENGTH <= len(name) <= MAX_NAME_LENGTH
            and not _NON_NAME.match(name)
            and not matches_skip_pattern(name))


def is_valid_price(price: Optional[float]) -> bool:
    """Finite, within bounds, and at most two fractional digits once parsed."""
    return (price is not None and math.isfinite(price)
            and MIN_PRICE <= price <= MAX_PRICE
            and bool(_PRICE_DIGITS.match(str(price))))


def parse_quantity(s: Optional[str]) -> Optional[int]:
    """Parse a quantity token; None if absent or outside the allowed range."""
    if s is None:
        return 1
    try:
        qty = int(s)
    except ValueError:
        return None
    return qty if MIN_QUANTITY <= qty <= MAX_QUANTITY else None


def match_line(line: str, rules: Optional[List[ItemRule]] = None) -> Optional[Tuple[ItemRule, str, float, int]]:
    """
    Try each rule in order on a single trimmed line.

    The first rule whose captures pass validation wins. Returns
    (rule, name, price, quantity) or None when nothing acceptable matched.
    """
    for rule in rules or RULES:
        captured = rule.match(line)
        if captured is None:
            continue
        name = captured["name"].strip().rstrip(NAME_TRAILING_SEPARATORS).strip()
        price = normalize_price(captured["price"])
        quantity = parse_quantity(captured.get("quantity"))
        if quantity is None:
            continue
        if is_valid_item_name(name) and is_valid_price(price):
            return rule, name, price, quantity
    return None


def extract_with_stats(text: str, verbose: bool = False) -> Tuple[List[ReceiptItem], Dict[str, int]]:
    """
    Extract items and count how many lines each rule accepted.

    Args:
        text: Raw OCR text
        verbose: Print per-line decisions

    Returns:
        Tuple of (items, rule match counts)
    """
    items = []
    rule_counts = Counter()

    for ln in split_lines(text):
        if should_skip_line(ln):
            if verbose:
                print(f"  [DEBUG] Skipped: {ln[:80]}")
            continue

        result = match_line(ln)
        if result is None:
            if verbose:
                print(f"  [DEBUG] No match: {ln[:80]}")
            continue

        rule, name, price, quantity = result
        items.append(ReceiptItem(
            id=new_item_id(),
            name=name,
            price=price,
            assignments={},
            quantity=quantity,
            source_rule=rule.name,
        ))
        rule_counts[rule.name] += 1
        if verbose:
            print(f"  [DEBUG] {rule.name}: '{name}' ${price:.2f}")

    return items, dict(rule_counts)


def extract(text: str) -> List[ReceiptItem]:
    """Extract candidate receipt items from raw multi-line text (best effort)."""
    items, _ = extract_with_stats(text)
    return items

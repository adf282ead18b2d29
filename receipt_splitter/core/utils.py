"""
Utility functions and constants for receipt parsing and splitting.
"""

import re
import uuid
from typing import Optional

# File type constants
IMAGE_EXTS = {".png", ".jpg", ".jpeg", ".tif", ".tiff", ".bmp", ".webp"}
PDF_EXTS = {".pdf"}
TEXT_EXTS = {".txt"}

# OCR settings
OCR_LANGUAGE = "eng"
OCR_CHAR_WHITELIST = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz$.,@: "
OCR_PAGESEG_MODE = 6  # uniform block of text
OCR_CONTRAST = 1.5

# Extraction bounds
MIN_LINE_LENGTH = 4
MIN_NAME_LENGTH = 2
MAX_NAME_LENGTH = 100
MIN_PRICE = 0.01
MAX_PRICE = 1000.0
MIN_QUANTITY = 1
MAX_QUANTITY = 99

MAX_PEOPLE = 8

# Whole-line patterns for receipt structure (totals, headers, footers)
STRUCTURAL_SKIP_PATTERNS = [
    r"^total\s*:?\s*\$?\d+[.,]?\d*$",
    r"^subtotal\s*:?\s*\$?\d+[.,]?\d*$",
    r"^tax\s*:?\s*\$?\d+[.,]?\d*$",
    r"^tip\s*:?\s*\$?\d+[.,]?\d*$",
    r"^gratuity\s*:?\s*\$?\d+[.,]?\d*$",
    r"^service\s*charge\s*:?\s*\$?\d+[.,]?\d*$",
    r"^discount\s*:?\s*\$?\d+[.,]?\d*$",
    r"^thank\s+you",
    r"^visit\s+again",
    r"^receipt\s+#\d+",
    r"^date\s*:?\s*\d+",
    r"^time\s*:?\s*\d+",
    r"^server\s*:?\s*\w+",
    r"^table\s*:?\s*\d+",
]

# Topical keywords, matched anywhere in the line
KEYWORD_SKIP_PATTERNS = [
    r"\bsub\s*total\b",
    r"\bgrand\s+total\b",
    r"\bbalance\s+due\b",
    r"\bamount\s+due\b",
    r"\bchange\s+due\b",
    r"\bcash\s+tendered\b",
    r"\bgratuity\b",
    r"\bservice\s+charge\b",
    r"\btotal\b",
    r"\btax\b(?!\s*\))",  # "(incl. tax)" marks a priced item
    r"\btip\b",
    r"\bdiscount\b",
]

# Item rules in priority order: (rule name, pattern, capture-group roles).
# Leading counts are taken before the standard forms; trailing counts only as a
# last resort, since names often end in a number ("Route 66", "Pizza 12").
ITEM_RULES = [
    ("Quantity prefix", r"^(\d+)\s+(.+?)\s+\$(\d+\.?\d*)$", ("quantity", "name", "price")),
    ("Quantity prefix with comma", r"^(\d+)\s+(.+?)\s+(\d+,\d{2})$", ("quantity", "name", "price")),
    ("Tax inclusive", r"^(.+?)\s+\$(\d+\.?\d*)\s*\(incl\.\s*tax\)$", ("name", "price")),
    ("Standard with $", r"^(.+?)\s+\$(\d+\.?\d*)$", ("name", "price")),
    ("Standard decimal", r"^(.+?)\s+(\d+\.\d{2})$", ("name", "price")),
    ("No space with $", r"^(.+?)\s*\$(\d+\.?\d*)$", ("name", "price")),
    ("Standard decimal with comma", r"^(.+?)\s+(\d+,\d{2})$", ("name", "price")),
    ("Dollar with comma", r"^(.+?)\s*\$(\d+,\d{2})$", ("name", "price")),
    ("USD currency", r"^(.+?)\s+USD\s*(\d+\.?\d*)$", ("name", "price")),
    ("Colon separator", r"^(.+?)\s*:\s*\$?(\d+\.?\d*)$", ("name", "price")),
    ("At symbol", r"^(.+?)\s+@\s*\$?(\d+\.?\d*)$", ("name", "price")),
    ("Trailing space", r"^(.+?)\s+(\d+\.\d{2})\s*$", ("name", "price")),
    ("Dollar with cents", r"^(.+?)\s*\$(\d+\.\d{2})\s*$", ("name", "price")),
    ("USD suffix", r"^(.+?)\s*(\d+\.\d{2})\s*USD$", ("name", "price")),
    ("Optional dollar", r"^(.+?)\s*(\d+\.\d{2})\s*\$?$", ("name", "price")),
    ("Quantity suffix", r"^(.+?)\s+(\d+)\s+\$(\d+\.?\d*)$", ("name", "quantity", "price")),
    ("Quantity suffix with comma", r"^(.+?)\s+(\d+)\s+(\d+,\d{2})$", ("name", "quantity", "price")),
]

# Captured price text, after comma normalization
PRICE_TEXT_PATTERN = r"^\d+\.?\d*$"

# A parsed price, printed back, has at most two fractional digits (12.500 -> 12.5 passes)
PRICE_DIGITS_PATTERN = r"^\d+\.?\d{0,2}$"

# Separators left on a name when a looser rule wins ("Salmon: $24.99", "Tea @ 2.50")
NAME_TRAILING_SEPARATORS = ":@"

# Names with no letters at all (digits, punctuation, currency symbols)
NON_NAME_PATTERN = r"^[\W\d_]+$"


def normalize_price(s: str) -> Optional[float]:
    """
    Normalize captured price text to float.

    A comma decimal separator becomes a period. Returns None for text that
    does not parse.
    """
    if not s:
        return None
    s = s.strip().replace(",", ".")
    if not re.match(PRICE_TEXT_PATTERN, s):
        return None
    try:
        return float(s)
    except ValueError:
        return None


def new_item_id(prefix: str = "item") -> str:
    """Generate a unique item id."""
    return f"{prefix}-{uuid.uuid4().hex}"


def money_fmt(v: Optional[float]) -> str:
    """Format amount as currency."""
    return f"${v:,.2f}" if v is not None else ""


def pct_fmt(v: float) -> str:
    """Format a percentage without trailing zeros (8.5 -> '8.5%', 15.0 -> '15%')."""
    return f"{v:g}%"

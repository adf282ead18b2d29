"""
Receipt Splitter

Turns noisy receipt OCR text into priced line items and splits the bill
(items, tax, service, tip) between people by per-item percentages.
"""

__version__ = "1.0.0"
__author__ = "Receipt Splitter Contributors"

from receipt_splitter.core.allocation import allocate
from receipt_splitter.core.models import ChargeConfig, DistributionMode, Person, PersonTotal, ReceiptItem
from receipt_splitter.core.parsers import extract
from receipt_splitter.core.validation import validate_extraction

__all__ = [
    "ReceiptItem", "Person", "ChargeConfig", "DistributionMode", "PersonTotal",
    "extract", "allocate", "validate_extraction",
]

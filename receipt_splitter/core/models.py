"""
Data models for receipt items, people, charges and split results.
"""

import math
from dataclasses import dataclass, asdict, field
from enum import Enum
from typing import Dict, List, Optional


class DistributionMode(str, Enum):
    """How a bill-level charge is spread across people."""
    PROPORTIONAL = "proportional"
    EQUAL = "equal"


@dataclass
class ReceiptItem:
    """A priced line item with per-person percentage shares (0-100)."""
    id: str
    name: str
    price: float
    assignments: Dict[str, float] = field(default_factory=dict)
    quantity: int = 1
    source_rule: Optional[str] = None


@dataclass
class Person:
    name: str


@dataclass
class ChargeConfig:
    """
    Bill-level charges as percentages of the bill subtotal.

    Service shares the tax distribution mode.
    """
    tax_percent: float = 0.0
    service_percent: float = 0.0
    tip_percent: float = 0.0
    tax_distribution: DistributionMode = DistributionMode.PROPORTIONAL
    tip_distribution: DistributionMode = DistributionMode.PROPORTIONAL

    def __post_init__(self):
        for label in ("tax_percent", "service_percent", "tip_percent"):
            value = float(getattr(self, label))
            if not math.isfinite(value) or value < 0:
                raise ValueError(f"{label} must be a non-negative number, got {value}")
            setattr(self, label, value)
        self.tax_distribution = DistributionMode(self.tax_distribution)
        self.tip_distribution = DistributionMode(self.tip_distribution)


@dataclass
class PersonTotal:
    """What one person owes, broken down by component."""
    items: float = 0.0
    tax: float = 0.0
    service: float = 0.0
    tip: float = 0.0
    total: float = 0.0

    def to_dict(self):
        """Convert to dictionary."""
        return asdict(self)


@dataclass
class BillTotals:
    subtotal: float
    tax: float
    service: float
    tip: float
    total: float


@dataclass
class OCRResult:
    """Raw OCR output together with the items extracted from it."""
    text: str
    confidence: Optional[float]
    items: List[ReceiptItem]
    processing_time: float = 0.0
    source_file: Optional[str] = None


@dataclass
class ValidationReport:
    is_valid: bool
    issues: List[str] = field(default_factory=list)
    suggestions: List[str] = field(default_factory=list)

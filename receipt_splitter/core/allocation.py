"""
Allocation of a bill (items, tax, service, tip) across people.

Amounts are kept at full float precision; rounding to cents happens only
when results are rendered.
"""

import math
from typing import Dict, List, Sequence

from .models import BillTotals, ChargeConfig, DistributionMode, Person, PersonTotal, ReceiptItem


def bill_subtotal(items: Sequence[ReceiptItem]) -> float:
    """Sum of all item prices, assigned or not."""
    return sum(item.price for item in items)


def bill_totals(items: Sequence[ReceiptItem], config: ChargeConfig) -> BillTotals:
    subtotal = bill_subtotal(items)
    tax = subtotal * config.tax_percent / 100
    service = subtotal * config.service_percent / 100
    tip = subtotal * config.tip_percent / 100
    return BillTotals(subtotal=subtotal, tax=tax, service=service, tip=tip,
                      total=subtotal + tax + service + tip)


def item_assignment_total(item: ReceiptItem) -> float:
    return sum(item.assignments.values())


def is_fully_assigned(item: ReceiptItem) -> bool:
    return math.isclose(item_assignment_total(item), 100, abs_tol=1e-9)


def unassigned_items(items: Sequence[ReceiptItem]) -> List[ReceiptItem]:
    """Items whose assignment percentages do not add up to 100."""
    return [item for item in items if not is_fully_assigned(item)]


def person_item_subtotal(items: Sequence[ReceiptItem], person_name: str) -> float:
    return sum(item.price * item.assignments.get(person_name, 0) / 100 for item in items)


def _charge_share(charge_total: float, mode: DistributionMode, person_subtotal: float,
                  subtotal: float, headcount: int) -> float:
    if mode == DistributionMode.EQUAL:
        return charge_total / headcount if headcount else 0.0
    return charge_total * person_subtotal / subtotal if subtotal else 0.0


def allocate(items: Sequence[ReceiptItem], people: Sequence[Person],
             config: ChargeConfig) -> Dict[str, PersonTotal]:
    """
    Compute what each person owes.

    Item costs follow each item's percentage assignments. Tax and service are
    spread using config.tax_distribution, tip using config.tip_distribution.
    Charges are computed on the full bill subtotal, so partially assigned
    items leave part of the bill unallocated; the result is still returned
    for previews.

    Args:
        items: Current item snapshot
        people: Current people
        config: Charge percentages and distribution modes

    Returns:
        Dict mapping person name to PersonTotal, in the order of people
    """
    totals = bill_totals(items, config)
    headcount = len(people)
    results = {}

    for person in people:
        own = person_item_subtotal(items, person.name)
        tax = _charge_share(totals.tax, config.tax_distribution, own, totals.subtotal, headcount)
        service = _charge_share(totals.service, config.tax_distribution, own, totals.subtotal, headcount)
        tip = _charge_share(totals.tip, config.tip_distribution, own, totals.subtotal, headcount)
        results[person.name] = PersonTotal(items=own, tax=tax, service=service, tip=tip,
                                           total=own + tax + service + tip)

    return results


def reconciles(items: Sequence[ReceiptItem], people: Sequence[Person],
               config: ChargeConfig, tolerance: float = 1e-6) -> bool:
    """True if the per-person totals add up to the whole bill."""
    allocated = sum(t.total for t in allocate(items, people, config).values())
    return abs(allocated - bill_totals(items, config).total) <= tolerance

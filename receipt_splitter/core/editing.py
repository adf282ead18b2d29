"""
Editing operations for items and people.

Every function takes the current snapshot and returns a new one; inputs are
never mutated.
"""

from dataclasses import replace
from typing import List, Sequence, Tuple

from .models import Person, ReceiptItem
from .utils import MAX_PEOPLE, new_item_id


def _find_index(items: Sequence[ReceiptItem], item_id: str) -> int:
    for idx, item in enumerate(items):
        if item.id == item_id:
            return idx
    raise KeyError(f"No item with id {item_id!r}")


def _replace_item(items: Sequence[ReceiptItem], item_id: str, **changes) -> List[ReceiptItem]:
    idx = _find_index(items, item_id)
    updated = list(items)
    updated[idx] = replace(items[idx], assignments=dict(items[idx].assignments), **changes)
    return updated


def add_person(people: Sequence[Person], name: str, max_people: int = MAX_PEOPLE) -> List[Person]:
    name = (name or "").strip()
    if not name:
        raise ValueError("Person name must not be empty")
    if any(p.name == name for p in people):
        raise ValueError(f"{name!r} is already splitting this bill")
    if len(people) >= max_people:
        raise ValueError(f"At most {max_people} people can split a bill")
    return list(people) + [Person(name)]


def remove_person(items: Sequence[ReceiptItem], people: Sequence[Person],
                  name: str) -> Tuple[List[ReceiptItem], List[Person]]:
    """Drop a person and purge their share from every item."""
    remaining = [p for p in people if p.name != name]
    cleaned = [
        replace(item, assignments={k: v for k, v in item.assignments.items() if k != name})
        for item in items
    ]
    return cleaned, remaining


def add_manual_item(items: Sequence[ReceiptItem], name: str, price: float) -> List[ReceiptItem]:
    name = (name or "").strip()
    if not name:
        raise ValueError("Item name must not be empty")
    if not price or float(price) <= 0:
        raise ValueError(f"Item price must be positive, got {price}")
    item = ReceiptItem(id=new_item_id("manual"), name=name, price=float(price), assignments={})
    return list(items) + [item]


def update_item_name(items: Sequence[ReceiptItem], item_id: str, name: str) -> List[ReceiptItem]:
    name = (name or "").strip()
    if not name:
        raise ValueError("Item name must not be empty")
    return _replace_item(items, item_id, name=name)


def update_item_price(items: Sequence[ReceiptItem], item_id: str, price: float) -> List[ReceiptItem]:
    if float(price) <= 0:
        raise ValueError(f"Item price must be positive, got {price}")
    return _replace_item(items, item_id, price=float(price))


def remove_item(items: Sequence[ReceiptItem], item_id: str) -> List[ReceiptItem]:
    idx = _find_index(items, item_id)
    return list(items[:idx]) + list(items[idx + 1:])


def update_assignment(items: Sequence[ReceiptItem], people: Sequence[Person], item_id: str,
                      person_name: str, percentage: float) -> List[ReceiptItem]:
    """
    Set one person's share of an item.

    The percentage is clamped to 0-100; a share of 0 removes the person from
    the item's assignments.
    """
    if not any(p.name == person_name for p in people):
        raise ValueError(f"Unknown person {person_name!r}")
    idx = _find_index(items, item_id)
    percentage = min(100.0, max(0.0, float(percentage)))

    assignments = dict(items[idx].assignments)
    if percentage == 0:
        assignments.pop(person_name, None)
    else:
        assignments[person_name] = percentage

    updated = list(items)
    updated[idx] = replace(items[idx], assignments=assignments)
    return updated


def split_item_evenly(items: Sequence[ReceiptItem], people: Sequence[Person],
                      item_id: str) -> List[ReceiptItem]:
    """Assign an item in equal shares to all given people."""
    idx = _find_index(items, item_id)
    share = 100.0 / len(people) if people else 0.0
    updated = list(items)
    updated[idx] = replace(items[idx], assignments={p.name: share for p in people})
    return updated

"""
Summary text, CSV and PDF output for a bill split.
"""

import csv
import datetime as dt
from pathlib import Path
from typing import Dict, List, Sequence

from .allocation import allocate, bill_totals, is_fully_assigned
from .models import ChargeConfig, Person, PersonTotal, ReceiptItem
from .utils import money_fmt, pct_fmt

CSV_FIELDS = ["person", "items", "tax", "service", "tip", "total"]


def format_summary(items: Sequence[ReceiptItem], people: Sequence[Person],
                   config: ChargeConfig) -> str:
    """Plain-text split summary, suitable for pasting into a chat."""
    totals = bill_totals(items, config)
    lines = [
        "Bill Split Summary",
        "",
        f"Total Bill: {money_fmt(totals.total)}",
        f"Subtotal: {money_fmt(totals.subtotal)}",
        f"Tax ({pct_fmt(config.tax_percent)}): {money_fmt(totals.tax)}",
    ]
    if config.service_percent > 0:
        lines.append(f"Service ({pct_fmt(config.service_percent)}): {money_fmt(totals.service)}")
    lines.append(f"Tip ({pct_fmt(config.tip_percent)}): {money_fmt(totals.tip)}")
    lines.append("")

    for name, person_total in allocate(items, people, config).items():
        lines.append(f"{name}: {money_fmt(person_total.total)}")

    return "\n".join(lines) + "\n"


def write_csv(person_totals: Dict[str, PersonTotal], out_csv: Path):
    """Write per-person totals to CSV, rounded to cents."""
    with out_csv.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=CSV_FIELDS)
        w.writeheader()
        for r in summary_rows(person_totals):
            w.writerow({k: v if k == "person" else f"{v:.2f}" for k, v in r.items()})


def build_summary_pdf(items: Sequence[ReceiptItem], people: Sequence[Person],
                      config: ChargeConfig, out_pdf: Path,
                      title: str = "Bill Split Summary") -> None:
    """
    Build a one-document PDF with bill totals, per-person breakdown and the
    item list with assignment percentages.

    Args:
        items: Current items
        people: People splitting the bill
        config: Charge settings
        out_pdf: Output PDF path
        title: Report title
    """
    from reportlab.lib.pagesizes import letter
    from reportlab.pdfgen import canvas
    from reportlab.lib.units import inch
    from reportlab.lib.colors import red

    totals = bill_totals(items, config)
    person_totals = allocate(items, people, config)

    c = canvas.Canvas(out_pdf.as_posix(), pagesize=letter)
    width, height = letter

    def new_page_if_needed(y: float) -> float:
        if y < 0.8 * inch:
            c.showPage()
            c.setFont("Helvetica", 9)
            return height - 1 * inch
        return y

    y = height - 1 * inch
    c.setFont("Helvetica-Bold", 16)
    c.drawString(1 * inch, y, title)
    y -= 0.3 * inch
    c.setFont("Helvetica", 10)
    timestamp = dt.datetime.now().isoformat(timespec='seconds')
    c.drawString(1 * inch, y, f"Generated: {timestamp}")
    y -= 0.4 * inch

    # Bill totals
    c.setFont("Helvetica-Bold", 12)
    c.drawString(1 * inch, y, "Bill Totals")
    y -= 0.25 * inch
    c.setFont("Helvetica", 10)
    bill_lines = [
        ("Subtotal", totals.subtotal),
        (f"Tax ({pct_fmt(config.tax_percent)}, {config.tax_distribution.value})", totals.tax),
        (f"Service ({pct_fmt(config.service_percent)}, {config.tax_distribution.value})", totals.service),
        (f"Tip ({pct_fmt(config.tip_percent)}, {config.tip_distribution.value})", totals.tip),
        ("Total", totals.total),
    ]
    for label, amount in bill_lines:
        c.drawString(1.1 * inch, y, label)
        c.drawRightString(4.5 * inch, y, money_fmt(amount))
        y -= 0.2 * inch

    # Per-person breakdown
    y -= 0.2 * inch
    c.setFont("Helvetica-Bold", 12)
    c.drawString(1 * inch, y, "Per Person")
    y -= 0.25 * inch
    c.setFont("Helvetica-Bold", 9)
    columns = [("Items", 3.3), ("Tax", 4.3), ("Service", 5.3), ("Tip", 6.3), ("Total", 7.5)]
    c.drawString(1.0 * inch, y, "Name")
    for label, x in columns:
        c.drawRightString(x * inch, y, label)
    y -= 0.15 * inch
    c.line(1.0 * inch, y, 7.6 * inch, y)
    y -= 0.15 * inch

    c.setFont("Helvetica", 9)
    for name, t in person_totals.items():
        c.drawString(1.0 * inch, y, name[:30])
        for (_, x), amount in zip(columns, (t.items, t.tax, t.service, t.tip, t.total)):
            c.drawRightString(x * inch, y, money_fmt(amount))
        y = new_page_if_needed(y - 0.18 * inch)

    # Items with their assignments
    y = new_page_if_needed(y - 0.2 * inch)
    c.setFont("Helvetica-Bold", 12)
    c.drawString(1 * inch, y, "Items")
    y -= 0.25 * inch
    c.setFont("Helvetica", 9)
    for item in items:
        shares = ", ".join(f"{n} {pct_fmt(p)}" for n, p in item.assignments.items()) or "unassigned"
        c.drawString(1.0 * inch, y, item.name[:40])
        c.drawRightString(4.5 * inch, y, money_fmt(item.price))
        if not is_fully_assigned(item):
            c.setFillColor(red)
        c.drawString(4.7 * inch, y, shares[:50])
        c.setFillColor("black")
        y = new_page_if_needed(y - 0.18 * inch)

    c.showPage()
    c.save()


def summary_rows(person_totals: Dict[str, PersonTotal]) -> List[Dict]:
    """Per-person totals as plain dict rows."""
    return [dict(person=name, **t.to_dict()) for name, t in person_totals.items()]

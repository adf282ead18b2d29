import pytest

from receipt_splitter.core.parsers import (
    RULES, extract, extract_with_stats, is_valid_item_name, is_valid_price, match_line,
    should_skip_line, split_lines,
)

SAMPLE_RECEIPT = """The Corner Bistro
Date: 05/24/2025
Server: Maria

Spinach Artichoke Dip $12.99
Chicken Caesar Salad 14.99
Margherita Pizza $18.50
Grilled Salmon: $24.99
Coca Cola @ 3.99
Craft Beer 6.50
Subtotal $81.96
Tax $6.97
TOTAL $88.93
Thank you for dining with us!
"""


def names_and_prices(items):
    return [(i.name, i.price) for i in items]


def test_single_dollar_line():
    items = extract("Margherita Pizza $18.50")
    assert len(items) == 1
    assert items[0].name == "Margherita Pizza"
    assert items[0].price == pytest.approx(18.50)
    assert items[0].assignments == {}


def test_total_line_is_skipped():
    assert extract("TOTAL $88.93") == []


def test_quantity_prefix_with_comma_decimal():
    items = extract("2 Tacos 9,50")
    assert len(items) == 1
    assert items[0].name == "Tacos"
    assert items[0].price == pytest.approx(9.50)
    assert items[0].quantity == 2


def test_sample_receipt():
    items = extract(SAMPLE_RECEIPT)
    assert names_and_prices(items) == [
        ("Spinach Artichoke Dip", 12.99),
        ("Chicken Caesar Salad", 14.99),
        ("Margherita Pizza", 18.50),
        ("Grilled Salmon", 24.99),
        ("Coca Cola", 3.99),
        ("Craft Beer", 6.50),
    ]


def test_extract_is_repeatable():
    first = extract(SAMPLE_RECEIPT)
    second = extract(SAMPLE_RECEIPT)
    assert names_and_prices(first) == names_and_prices(second)


def test_item_ids_are_unique():
    items = extract(SAMPLE_RECEIPT)
    ids = [i.id for i in items]
    assert len(set(ids)) == len(ids)
    assert all(i.startswith("item-") for i in ids)


@pytest.mark.parametrize("line, rule, name, price, qty", [
    ("3 Sliders $12.00", "Quantity prefix", "Sliders", 12.00, 3),
    ("2 Tacos 9,50", "Quantity prefix with comma", "Tacos", 9.50, 2),
    ("Burger $12.00 (incl. tax)", "Tax inclusive", "Burger", 12.00, 1),
    ("Margherita Pizza $18.50", "Standard with $", "Margherita Pizza", 18.50, 1),
    ("Chicken Caesar Salad 14.99", "Standard decimal", "Chicken Caesar Salad", 14.99, 1),
    ("Nachos$9.99", "No space with $", "Nachos", 9.99, 1),
    ("Pommes 4,20", "Standard decimal with comma", "Pommes", 4.20, 1),
    ("Crepe$5,40", "Dollar with comma", "Crepe", 5.40, 1),
    ("Craft Beer USD 6.5", "USD currency", "Craft Beer", 6.50, 1),
    ("Soup: 4.5", "Colon separator", "Soup", 4.50, 1),
    ("Tea @ 2", "At symbol", "Tea", 2.00, 1),
    ("Wine 12.00 USD", "USD suffix", "Wine", 12.00, 1),
    ("Cake 6.00$", "Optional dollar", "Cake", 6.00, 1),
    ("Wine $12.500", "Standard with $", "Wine", 12.50, 1),
])
def test_rule_priority(line, rule, name, price, qty):
    matched_rule, matched_name, matched_price, matched_qty = match_line(line)
    assert matched_rule.name == rule
    assert matched_name == name
    assert matched_price == pytest.approx(price)
    assert matched_qty == qty


def test_rule_order_is_fixed():
    names = [r.name for r in RULES]
    assert names[:2] == ["Quantity prefix", "Quantity prefix with comma"]
    assert names.index("Standard with $") < names.index("Standard decimal") < names.index("USD currency")
    assert names[-3:] == ["Optional dollar", "Quantity suffix", "Quantity suffix with comma"]


def test_out_of_range_quantity_falls_through_to_next_rule():
    rule, name, price, qty = match_line("100 Main Street Burger $5.00")
    assert rule.name == "Standard with $"
    assert name == "100 Main Street Burger"
    assert qty == 1


@pytest.mark.parametrize("line, name", [
    ("Pizza 12 $18.00", "Pizza 12"),
    ("Route 66 $12.00", "Route 66"),
    ("Fries 2 7,50", "Fries 2"),
])
def test_trailing_number_stays_in_name(line, name):
    rule, matched_name, _, qty = match_line(line)
    assert not rule.name.startswith("Quantity")
    assert matched_name == name
    assert qty == 1


@pytest.mark.parametrize("line, rule_name, name, qty", [
    ("Burger 2 $10.00", "Quantity suffix", "Burger", 2),
    ("Fries 2 7,50", "Quantity suffix with comma", "Fries", 2),
])
def test_quantity_suffix_rules(line, rule_name, name, qty):
    rule = next(r for r in RULES if r.name == rule_name)
    _, matched_name, _, matched_qty = match_line(line, rules=[rule])
    assert (matched_name, matched_qty) == (name, qty)


def test_price_validation_uses_parsed_value():
    assert is_valid_price(12.5)
    assert is_valid_price(18.0)
    assert not is_valid_price(12.345)
    assert not is_valid_price(float("nan"))
    assert not is_valid_price(None)


@pytest.mark.parametrize("line", [
    "Lobster $1500.00",     # above the price ceiling
    "Fish $12.345",         # three decimals once parsed
    "Gum $0.00",            # below the price floor
    "12 $5.00",             # name has no letters
    "A $1",                 # name too short
    "Just a header line",   # no price at all
])
def test_invalid_matches_are_dropped(line):
    assert extract(line) == []


@pytest.mark.parametrize("line", [
    "TOTAL $88.93",
    "total: 88.93",
    "Subtotal $81.96",
    "Tax $6.97",
    "Tip: $12.00",
    "Gratuity 10.00",
    "Service Charge $5.00",
    "Discount $3.00",
    "Thank you for dining with us",
    "Visit again soon",
    "Receipt #10293",
    "Date: 05/24/2025",
    "Time 21:08",
    "Server: Maria",
    "Table 12",
    "Balance due 45.00",
    "Grand Total 99.00",
    "Sales Tax 6.97",
    "Tax 8.5% 6.97",
    "Tip (18%) 14.75",
    "TOTAL 88.93 USD",
    "Total Due 88.93",
    "Discount -10% 3.00",
    "x$1",
])
def test_skip_lines(line):
    assert should_skip_line(line)
    assert extract(line) == []


def test_item_lines_are_not_skipped():
    assert not should_skip_line("Tiramisu $7.00")
    assert not should_skip_line("Burger $12.00 (incl. tax)")
    assert not should_skip_line("Tipsy Punch $9.00")
    assert not should_skip_line("Taxi Burger 11.50")


def test_name_validation():
    assert is_valid_item_name("Fries")
    assert is_valid_item_name("  Iced Tea  ")
    assert not is_valid_item_name("x")
    assert not is_valid_item_name("$$ -- 12")
    assert not is_valid_item_name("Subtotal")
    assert not is_valid_item_name("a" * 101)


def test_split_lines_handles_any_newline():
    assert split_lines("Soup 4.50\r\n\r\nSalad 6.00\rBread 2.00\n  \n") == [
        "Soup 4.50", "Salad 6.00", "Bread 2.00",
    ]


def test_empty_text_yields_no_items():
    assert extract("") == []
    assert extract("\n\n   \n") == []


def test_extract_with_stats_counts_rules():
    items, counts = extract_with_stats(SAMPLE_RECEIPT)
    assert len(items) == 6
    assert counts == {"Standard with $": 3, "Standard decimal": 3}
    assert sum(counts.values()) == len(items)


def test_verbose_extraction_prints_decisions(capsys):
    extract_with_stats("TOTAL $88.93\nPizza $10.00\nno price here", verbose=True)
    out = capsys.readouterr().out
    assert "[DEBUG] Skipped: TOTAL $88.93" in out
    assert "[DEBUG] Standard with $: 'Pizza' $10.00" in out
    assert "[DEBUG] No match: no price here" in out

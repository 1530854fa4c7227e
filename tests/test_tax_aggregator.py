from decimal import Decimal

from invoice_engine.core.calculations.tax_aggregator import aggregate
from invoice_engine.core.models.document import LineItem


def test_single_item_keeps_full_precision():
    summary = aggregate([LineItem(description="Batterie", quantity=1, unit_price=129.99, tax_rate_percent=19)])

    assert len(summary.groups) == 1
    group = summary.groups[0]
    assert group.tax_rate_percent == Decimal("19")
    assert group.net_amount == Decimal("129.99")
    assert group.tax_amount == Decimal("24.6981")
    assert group.gross_amount == Decimal("154.6881")
    assert summary.gross.quantize(Decimal("0.01")) == Decimal("154.69")


def test_groups_sorted_by_descending_rate(items):
    summary = aggregate(items)

    assert summary.rates == [Decimal("19"), Decimal("7")]
    seven = summary.groups[1]
    assert seven.net_amount == Decimal("20.00")
    assert seven.tax_amount == Decimal("1.4")
    assert summary.gross == sum(g.gross_amount for g in summary.groups)
    assert summary.gross == summary.net + summary.tax


def test_same_rate_written_differently_is_one_group():
    summary = aggregate(
        [
            LineItem(description="a", quantity=1, unit_price=10, tax_rate_percent="19"),
            LineItem(description="b", quantity=1, unit_price=10, tax_rate_percent=19.0),
        ]
    )

    assert len(summary.groups) == 1
    assert summary.net == Decimal("20")


def test_blank_rows_are_ignored_and_empty_input_gives_zero_group():
    summary = aggregate([LineItem(description="  ", quantity=0, unit_price=50)])

    assert len(summary.groups) == 1
    assert summary.groups[0].tax_rate_percent == 0
    assert summary.net == summary.tax == summary.gross == 0


def test_negative_amounts_are_aggregated_as_given():
    summary = aggregate(
        [
            LineItem(description="Ware", quantity=2, unit_price=50, tax_rate_percent=19),
            LineItem(description="Gutschrift", quantity=-1, unit_price=20, tax_rate_percent=19),
        ]
    )

    assert summary.net == Decimal("80")
    assert summary.tax == Decimal("15.2")

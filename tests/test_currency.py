from decimal import Decimal

from invoice_engine.core.calculations.currency import (
    currency_locale,
    format_decimal,
    format_money,
    format_quantity,
    primary_currency,
    resolve_currency,
)
from invoice_engine.core.models.document import LineItem, Material, Party


def _party(code):
    return Party(name="P", company_code=code)


def test_explicit_currency_wins_over_material_and_company():
    item = LineItem(material_reference="M1", description="x", quantity=1, currency="usd")
    materials = [Material("M1", currency="GBP")]

    assert resolve_currency(item, _party("1000"), _party("3000"), materials=materials) == "USD"


def test_material_currency_beats_company_code():
    item = LineItem(material_reference="M1", description="x", quantity=1)
    materials = [Material("M1", currency="gbp")]

    assert resolve_currency(item, _party("1000"), _party("3000"), materials=materials) == "GBP"


def test_company_code_table():
    item = LineItem(description="x", quantity=1)

    assert resolve_currency(item, None, _party("2000")) == "GBP"
    assert resolve_currency(item, None, _party("3000")) == "CHF"
    assert resolve_currency(item, None, _party("1000")) == "EUR"
    assert resolve_currency(item, None, _party("9999")) == "EUR"
    assert resolve_currency(item, None, _party("")) == "EUR"
    assert resolve_currency(item, None, None) == "EUR"


def test_vendor_party_can_be_selected():
    item = LineItem(description="x", quantity=1)

    assert resolve_currency(item, _party("2000"), _party("3000"), party="vendor") == "GBP"


def test_custom_company_table():
    item = LineItem(description="x", quantity=1)

    assert resolve_currency(item, None, _party("4000"), company_currencies={"4000": "PLN"}) == "PLN"


def test_primary_currency_majority_and_ties():
    assert primary_currency(["EUR", "CHF", "CHF"]) == "CHF"
    assert primary_currency(["GBP", "EUR"]) == "GBP"
    assert primary_currency([]) == "EUR"


def test_locale_follows_currency():
    assert currency_locale("GBP") == "en"
    assert currency_locale("usd") == "en"
    assert currency_locale("EUR") == "de"
    assert currency_locale("CHF") == "de"


def test_format_money_rounds_half_up_with_locale_separators():
    assert format_money(Decimal("154.6881"), "EUR") == "154,69 EUR"
    assert format_money(Decimal("1234.565"), "EUR") == "1.234,57 EUR"
    assert format_money(Decimal("1234.565"), "GBP") == "1,234.57 GBP"
    assert format_money(0, "CHF") == "0,00 CHF"


def test_format_decimal_and_quantity():
    assert format_decimal("19", "de") == "19,00"
    assert format_quantity(Decimal("2"), "de") == "2"
    assert format_quantity(Decimal("1.50"), "de") == "1,5"
    assert format_quantity(Decimal("1.50"), "en") == "1.5"

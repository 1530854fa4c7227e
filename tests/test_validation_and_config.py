import json
from dataclasses import replace

import pytest

from invoice_engine.core.models.document import Address, LineItem, LogoConfig, to_decimal
from invoice_engine.core.services.company import company_language, load_company_currencies
from invoice_engine.core.services.labels import load_labels, make_translator, save_labels
from invoice_engine.core.services.validation import collect_problems, validate_document
from invoice_engine.errors import ValidationError


def test_valid_document_passes(document):
    assert validate_document(document) is document


def test_missing_recipient_street(document):
    broken = replace(document, recipient=replace(document.recipient, address=Address(zip="80331", city="München")))

    with pytest.raises(ValidationError) as excinfo:
        validate_document(broken)

    assert excinfo.value.problems == ["Recipient address information is incomplete (missing street)"]


def test_all_problems_are_collected(make_document):
    doc = make_document(mode="XX", invoice_number="", items=[LineItem()], logo_config=LogoConfig(max_height=0))

    problems = collect_problems(doc, known_templates=["classic"])

    assert "Valid mode (MM or FI) is required" in problems
    assert "Invoice number is required" in problems
    assert "At least one item is required" in problems
    assert any(p.startswith('Template "businessstandard" not found') for p in problems)
    assert "Logo max_height must be positive" in problems


def test_unusable_amounts_are_reported_per_item(make_document):
    doc = make_document(
        items=[
            LineItem(description="Kaputt", quantity="abc", unit_price=1),
            LineItem(description="Unendlich", quantity=1, unit_price=float("inf")),
            LineItem(description="Satz", quantity=1, unit_price="1", tax_rate_percent="n/a"),
            LineItem(description="Alles", quantity=float("nan"), unit_price="-Infinity", tax_rate_percent="sNaN"),
        ]
    )

    problems = collect_problems(doc)

    assert "Item 1 has an invalid quantity" in problems
    assert "Item 2 has an invalid unit price" in problems
    assert "Item 3 has an invalid tax rate" in problems
    assert "Item 4 has an invalid quantity, unit price, tax rate" in problems


def test_blank_amounts_still_default_to_zero():
    item = LineItem(description="Leer", quantity="", unit_price=None)

    assert item.quantity == 0
    assert item.unit_price == 0
    assert to_decimal("abc") == 0


def test_mode_strings_are_coerced(make_document):
    assert make_document(mode="fi").is_mm is False
    assert make_document(mode="MM").is_mm is True


def test_translator_precedence():
    t = make_translator("en", translate=lambda key: "Custom" if key == "pdf.invoice" else key)

    assert t("pdf.invoice") == "Custom"
    assert t("pdf.page") == "Page"
    assert t("unknown.key") == "unknown.key"
    assert make_translator("fr")("pdf.page") == "Seite"


def test_label_overrides_round_trip(tmp_path):
    path = tmp_path / "labels.json"
    save_labels({"de": {"pdf.invoice": "Faktura"}}, path)

    labels = load_labels(path)

    assert labels["de"]["pdf.invoice"] == "Faktura"
    assert labels["de"]["pdf.page"] == "Seite"
    assert labels["en"]["pdf.invoice"] == "Invoice"


def test_data_dir_env_override(tmp_path, monkeypatch):
    (tmp_path / "company_codes.json").write_text(json.dumps({"currencies": {"4000": "usd"}}), encoding="utf-8")
    monkeypatch.setenv("INVOICE_ENGINE_DATA_DIR", str(tmp_path))

    table = load_company_currencies()

    assert table["4000"] == "USD"
    assert table["2000"] == "GBP"


def test_unreadable_company_table_falls_back(tmp_path):
    path = tmp_path / "company_codes.json"
    path.write_text("{not json", encoding="utf-8")

    assert load_company_currencies(path)["3000"] == "CHF"


def test_company_language():
    assert company_language("2000") == "en"
    assert company_language("1000") == "de"
    assert company_language(None) == "de"

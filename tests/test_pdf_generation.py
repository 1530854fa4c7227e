import asyncio
import logging
import re
from dataclasses import replace

import pytest

from invoice_engine.core.models.document import LineItem, LogoConfig
from invoice_engine.core.services.invoice import generate, preview, render_document, save_pdf, save_pdf_async
from invoice_engine.errors import RenderError, ValidationError
from invoice_engine.utils.pdf.core.flow import Block, paginate
from invoice_engine.utils.pdf.core.fonts import text_width
from invoice_engine.utils.pdf.core.layout_common import CONTENT_BOTTOM
from invoice_engine.utils.pdf.exports.invoice import export_invoice_pdf
from invoice_engine.utils.pdf.sections.items_table import column_layout
from invoice_engine.utils.pdf.templates.business_standard import BusinessStandardRenderer
from invoice_engine.utils.pdf.templates.registry import TEMPLATES, TemplateName, get_renderer, template_names


def page_count(pdf: bytes) -> int:
    marker = b"/Type /Pages /Count "
    start = pdf.index(marker) + len(marker)
    return int(pdf[start : pdf.index(b" ", start)])


def assert_valid_pdf(pdf: bytes) -> None:
    assert pdf.startswith(b"%PDF-1.4")
    assert pdf.rstrip().endswith(b"%%EOF")
    startxref = int(pdf.split(b"startxref\n")[1].split(b"\n")[0])
    assert pdf[startxref : startxref + 4] == b"xref"


def text_runs(page: str, pattern: str = r"[^)]*") -> list[tuple[str, float, float, float, str]]:
    """(font, size, x, baseline, text) of every text run whose text matches pattern."""
    runs = re.findall(rf"BT (/F\d) ([\d.]+) Tf ([-\d.]+) ([-\d.]+) Td \(({pattern})\) Tj", page)
    return [(font, float(size), float(x), float(y), text) for font, size, x, y, text in runs]


def test_registry_covers_every_template():
    assert template_names() == ["businessstandard", "classic", "professional", "businessgreen", "allrauer2"]
    assert set(TEMPLATES) == set(TemplateName)
    assert get_renderer("Classic").name == "classic"
    with pytest.raises(ValidationError):
        get_renderer("fancy")


@pytest.mark.parametrize("template", template_names())
def test_every_template_renders_one_page(document, template):
    pdf = generate(document, template)

    assert_valid_pdf(pdf)
    assert page_count(pdf) == 1
    assert b"(Seite 1 von 1) Tj" in pdf
    assert b"176,09 EUR" in pdf
    assert b"Hauptstra\\337e" in pdf


def test_scenario_single_item_totals(make_document, items):
    rendered = render_document(make_document(items=items[:1]), "professional")

    assert rendered.currency == "EUR"
    assert rendered.page_count == 1
    assert str(rendered.summary.groups[0].tax_amount) == "24.6981"
    assert b"154,69 EUR" in rendered.pdf_bytes
    assert b"24,70 EUR" in rendered.pdf_bytes


def test_allrauer_tax_table_pads_rows_and_prints_payment_sentence(document):
    rendered = render_document(document, TemplateName.ALLRAUER2)
    page = rendered.pages[0]

    assert "(19,00) Tj" in page
    assert "(7,00) Tj" in page
    # two groups + one currency-only row: net, tax and gross cells
    assert page.count("(EUR) Tj") == 3
    assert "(Gesamt) Tj" in page
    assert "176,09 EUR auf eins der unten angegebenen Konten." in page
    assert "(USTID DE123456789) Tj" in page


def test_recipient_company_code_selects_currency_and_language(make_document, recipient):
    swiss = make_document(recipient=replace(recipient, company_code="3000"))
    rendered = render_document(swiss, "classic")
    assert rendered.currency == "CHF"
    assert b"176,09 CHF" in rendered.pdf_bytes

    british = make_document(recipient=replace(recipient, company_code="2000"))
    rendered = render_document(british, "classic")
    assert rendered.language == "en"
    assert b"176.09 GBP" in rendered.pdf_bytes
    assert b"(Page 1 of 1) Tj" in rendered.pdf_bytes


def test_translate_callback_overrides_labels(document):
    pdf = generate(document, "classic", translate=lambda key: "Faktura" if key == "pdf.invoice" else key)

    assert b"(Faktura) Tj" in pdf


def test_validation_happens_before_rendering(make_document, recipient, monkeypatch):
    def fail(*args, **kwargs):
        raise AssertionError("renderer must not be called")

    monkeypatch.setattr(BusinessStandardRenderer, "render", fail)
    broken = make_document(recipient=replace(recipient, address=replace(recipient.address, street="")))

    with pytest.raises(ValidationError) as excinfo:
        generate(broken)

    assert "missing street" in str(excinfo.value)


@pytest.mark.parametrize("overrides", [dict(unit_price=float("inf")), dict(quantity="abc")])
def test_non_numeric_amounts_fail_validation_before_rendering(make_document, monkeypatch, overrides):
    def fail(*args, **kwargs):
        raise AssertionError("renderer must not be called")

    monkeypatch.setattr(BusinessStandardRenderer, "render", fail)
    item = LineItem(**{**dict(description="Defekt", quantity=1, unit_price=10), **overrides})

    with pytest.raises(ValidationError, match="Item 1 has an invalid"):
        generate(make_document(items=[item]))


def test_unknown_template_is_a_validation_error(document):
    with pytest.raises(ValidationError, match="Available templates"):
        generate(document, "fancy")


def test_many_items_paginate_with_repeated_table_header(make_document):
    items = [LineItem(description=f"Artikel {n:03d} mit einer etwas längeren Beschreibung", quantity=n, unit_price="9.99") for n in range(1, 91)]
    rendered = render_document(make_document(items=items), "businessstandard")

    assert rendered.page_count >= 3
    assert page_count(rendered.pdf_bytes) == rendered.page_count
    for number, page in enumerate(rendered.pages, start=1):
        assert f"(Seite {number} von {rendered.page_count}) Tj" in page
        if "(Artikel" in page:
            assert "(Bezeichnung) Tj" in page
    assert "(Artikel 090" in "".join(rendered.pages)


def test_long_description_wraps_into_taller_row(make_document):
    text = "Wartung " * 60
    rendered = render_document(make_document(items=[LineItem(description=text, quantity=1, unit_price=5)]), "classic")

    assert rendered.pages[0].count("(Wartung Wartung") >= 3


def test_description_taller_than_a_page_continues_on_next_pages(make_document):
    text = "Wartung " * 900
    rendered = render_document(make_document(items=[LineItem(description=text, quantity=1, unit_price=5)]), "classic")

    assert rendered.page_count > 2
    words = 0
    for page in rendered.pages:
        runs = text_runs(page, r"Wartung[^)]*")
        if runs:
            assert "(Bezeichnung) Tj" in page
        for _font, _size, _x, baseline, line in runs:
            assert baseline >= CONTENT_BOTTOM
            words += len(line.split())
    assert words == 900
    # unit and price cells belong to the first part of the row only
    assert "".join(rendered.pages).count("(ST) Tj") == 1


def test_large_amounts_stay_inside_their_cells(make_document):
    item = LineItem(description="Anlage", quantity="100000", unit_price="99999999.99")
    renderer = get_renderer("classic")
    rendered = render_document(make_document(items=[item]), "classic")
    ctx = renderer.build_context(make_document(items=[item]))
    style = ctx.style
    layout = {column.key: (left, w) for column, left, w in column_layout(style.columns, ctx.x, ctx.width)}
    page = rendered.pages[0]

    [(_font, _size, _x, row_y, _text)] = text_runs(page, re.escape("99.999.999,99 EUR"))
    for key, text in (("unit_price", "99.999.999,99 EUR"), ("total", "9.999.999.999.000,00 EUR"), ("quantity", "100000")):
        left, w = layout[key]
        [(font, size, x, _y, _text)] = [run for run in text_runs(page, re.escape(text)) if run[3] == row_y]
        assert x >= left + style.row_padding - 0.01
        assert x + text_width(text, font, size) <= left + w - style.row_padding + 0.01
        if key == "total":
            assert size < style.table_size


def test_oversized_block_is_logged(caplog):
    tall = Block(height=2000, draw=lambda top: "x", name="poster")

    with caplog.at_level(logging.WARNING, logger="invoice_engine"):
        pages = paginate([tall])

    assert pages == [["x"]]
    assert "Block poster" in caplog.text


def test_rendering_is_deterministic(document, png_logo):
    doc = replace(document, logo=png_logo, payment_qr=True)

    first = generate(doc, "businessgreen")
    second = generate(doc, "businessgreen")

    assert first == second


def test_input_document_is_not_mutated(document):
    before = repr(document)
    generate(document, "allrauer2")
    assert repr(document) == before


def test_logo_is_embedded_with_alpha_mask(document, png_logo):
    pdf = generate(replace(document, logo=png_logo, logo_config=LogoConfig.for_template("classic")), "classic")

    assert b"/Im1 Do" in pdf
    assert b"/SMask" in pdf
    # 800x200 logo fitted to 240x60
    assert b"q 240.00 0 0 60.00 " in pdf


def test_logo_accepts_data_uri(document, png_logo):
    import base64

    uri = "data:image/png;base64," + base64.b64encode(png_logo).decode("ascii")
    assert b"/Im1 Do" in generate(replace(document, logo=uri), "allrauer2")


def test_undecodable_logo_raises_render_error(document):
    with pytest.raises(RenderError) as excinfo:
        generate(replace(document, logo=b"definitely not an image"))

    assert excinfo.value.__cause__ is not None
    assert "PDF generation failed" in str(excinfo.value)


def test_backend_failures_are_wrapped(document, monkeypatch):
    def boom(*args, **kwargs):
        raise KeyError("font")

    monkeypatch.setattr("invoice_engine.core.services.invoice.build_pdf_bytes", boom)

    with pytest.raises(RenderError, match=r"PDF generation failed \(businessstandard\)") as excinfo:
        generate(document)
    assert isinstance(excinfo.value.__cause__, KeyError)


def test_mixed_currencies_are_summed_and_logged(make_document, caplog):
    items = [
        LineItem(description="Euro", quantity=1, unit_price=100, currency="EUR"),
        LineItem(description="Pfund", quantity=1, unit_price=100, currency="GBP"),
        LineItem(description="Euro 2", quantity=1, unit_price=100, currency="EUR"),
    ]

    with caplog.at_level(logging.WARNING, logger="invoice_engine"):
        rendered = render_document(make_document(items=items))

    assert rendered.currency == "EUR"
    assert "mixes currencies EUR, GBP" in caplog.text
    assert b"357,00 EUR" in rendered.pdf_bytes
    assert b"100.00 GBP" in rendered.pdf_bytes


def test_payment_qr_only_for_eur(document, recipient):
    assert b"Zahlen per QR-Code" in generate(replace(document, payment_qr=True), "classic")

    gbp = replace(document, payment_qr=True, recipient=replace(recipient, company_code="2000"))
    assert b"Scan to pay" not in generate(gbp, "classic")


def test_generic_payment_terms_use_default_sentence(make_document):
    pdf = generate(make_document(payment_terms="Zahlbar innerhalb 30 Tagen netto"), "professional")
    assert b"Bitte \\374berweisen Sie den Rechnungsbetrag" in pdf

    pdf = generate(make_document(payment_terms="Sofort ohne Abzug"), "professional")
    assert b"(Sofort ohne Abzug) Tj" in pdf


def test_financial_documents_skip_order_fields(make_document):
    pdf = generate(make_document(mode="FI"), "classic")

    assert b"(Finanzrechnung) Tj" in pdf
    assert b"Bestellnr." not in pdf


def test_preview_matches_generate_except_title(document):
    assert preview(document).split(b"/Title")[0] == generate(document).split(b"/Title")[0]


def test_save_pdf_into_directory(tmp_path, document):
    path = save_pdf(tmp_path, document)

    assert path == tmp_path / "RE-2024-001.pdf"
    assert_valid_pdf(path.read_bytes())


def test_export_and_async_save(tmp_path, document):
    exported = export_invoice_pdf(tmp_path / "out" / "invoice.pdf", document, "classic")
    saved = asyncio.run(save_pdf_async(tmp_path / "async.pdf", document, "classic"))

    assert exported.read_bytes() == saved.read_bytes()


def test_failed_render_writes_nothing(tmp_path, document):
    with pytest.raises(RenderError):
        save_pdf(tmp_path / "broken.pdf", replace(document, logo=b"junk"))

    assert not (tmp_path / "broken.pdf").exists()

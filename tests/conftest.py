import io
import sys
from pathlib import Path

import pytest

# Ensure `src` is importable when running tests from repo root.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


@pytest.fixture
def vendor():
    from invoice_engine.core.models.document import Address, Party

    return Party(
        name="Muster GmbH",
        address=Address(street="Hauptstraße 1", zip="10115", city="Berlin", country="Deutschland"),
        company_code="1000",
        iban="DE89370400440532013000",
        bic="COBADEFFXXX",
        bank_name="Commerzbank",
        vat_number="DE123456789",
        tax_number="12/345/67890",
        phone="+49 30 123456",
        email="info@muster.example",
        url="www.muster.example",
    )


@pytest.fixture
def recipient():
    from invoice_engine.core.models.document import Address, Party

    return Party(
        name="Kunde AG",
        address=Address(street="Marktplatz 5", zip="80331", city="München"),
        company_code="1000",
    )


@pytest.fixture
def items():
    from invoice_engine.core.models.document import LineItem

    return [
        LineItem(material_reference="MAT-1", description="Batterie AGM 80Ah", quantity=1, unit_price="129.99", tax_rate_percent=19),
        LineItem(material_reference="MAT-2", description="Fachbuch", quantity=2, unit_price="10.00", tax_rate_percent=7),
    ]


@pytest.fixture
def make_document(vendor, recipient, items):
    from invoice_engine.core.models.document import Document, DocumentMode

    def _make(**overrides):
        data = dict(
            mode=DocumentMode.MM,
            invoice_number="RE-2024-001",
            invoice_date="2024-05-02",
            vendor=vendor,
            recipient=recipient,
            items=items,
            customer_number="236744",
            processor="Max Mustermann",
            order_number="PO-77",
            order_date="2024-04-20",
            delivery_note_number="LS-20200094",
            delivery_date="2024-04-30",
        )
        data.update(overrides)
        return Document(**data)

    return _make


@pytest.fixture
def document(make_document):
    return make_document()


@pytest.fixture
def png_logo():
    """800x200 RGBA PNG with a transparent stripe."""
    from PIL import Image

    img = Image.new("RGBA", (800, 200), (30, 58, 138, 255))
    img.paste((0, 0, 0, 0), (0, 0, 800, 20))
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


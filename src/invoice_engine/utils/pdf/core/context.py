from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Callable, Optional, Sequence

from invoice_engine.core.calculations.currency import (
    currency_locale,
    format_decimal,
    format_money,
    format_quantity,
    format_rate,
)
from invoice_engine.core.calculations.tax_aggregator import TaxSummary
from invoice_engine.core.models.document import Document, LineItem, LogoConfig
from invoice_engine.utils.pdf.core.images import PdfImage
from invoice_engine.utils.pdf.core.layout_common import CONTENT_W, MARGIN_X, TemplateStyle


def format_date(value: date | str | None) -> str:
    """yyyy-MM-dd; strings that do not parse as ISO dates are printed as given."""
    if value is None or value == "":
        return ""
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    text = str(value).strip()
    try:
        return date.fromisoformat(text[:10]).isoformat()
    except ValueError:
        return text


@dataclass
class RenderContext:
    """Everything one render call needs; built per call and never shared."""

    document: Document
    t: Callable[[str], str]
    language: str
    style: TemplateStyle
    summary: TaxSummary
    currency: str
    items: Sequence[LineItem]
    item_currencies: Sequence[str]
    logo: Optional[PdfImage] = None
    logo_config: Optional[LogoConfig] = None
    qr_matrix: Optional[Sequence[Sequence[bool]]] = None
    x: float = MARGIN_X
    width: float = CONTENT_W

    @property
    def locale(self) -> str:
        return currency_locale(self.currency)

    def money(self, amount, currency: str | None = None) -> str:
        return format_money(amount, currency or self.currency)

    def number(self, amount) -> str:
        return format_decimal(amount, self.locale)

    def quantity(self, value: Decimal) -> str:
        return format_quantity(value, self.locale)

    def rate(self, value: Decimal) -> str:
        return format_rate(value, self.locale)

    def date(self, value) -> str:
        return format_date(value)

    def or_placeholder(self, value, placeholder: str = "-") -> str:
        text = str(value or "").strip()
        return text or placeholder

    @property
    def right(self) -> float:
        return self.x + self.width

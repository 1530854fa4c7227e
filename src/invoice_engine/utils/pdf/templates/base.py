"""
Template renderer base: builds the per-call render context, lets the concrete
template produce its measured blocks and paginates them.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import ClassVar, Iterable, Mapping, Optional, Sequence

from invoice_engine.core.calculations.currency import primary_currency, resolve_currency
from invoice_engine.core.calculations.tax_aggregator import TaxSummary, aggregate
from invoice_engine.core.models.document import Document, LogoConfig
from invoice_engine.core.services.company import company_language
from invoice_engine.core.services.labels import Translate, make_translator
from invoice_engine.utils.pdf.core.context import RenderContext
from invoice_engine.utils.pdf.core.flow import Block, paginate
from invoice_engine.utils.pdf.core.images import PdfImage, load_logo
from invoice_engine.utils.pdf.core.layout_common import TemplateStyle
from invoice_engine.utils.pdf.sections.footer import footer_ops
from invoice_engine.utils.qr import payment_qr_matrix

logger = logging.getLogger(__name__)


@dataclass
class RenderedDocument:
    template: str
    pages: list[str]
    images: tuple[PdfImage, ...]
    summary: TaxSummary
    currency: str
    language: str
    pdf_bytes: bytes = field(default=b"", repr=False)

    @property
    def page_count(self) -> int:
        return len(self.pages)


class TemplateRenderer(ABC):
    name: ClassVar[str] = ""
    style: ClassVar[TemplateStyle] = TemplateStyle()
    position_column: ClassVar[bool] = False

    def render(
        self,
        document: Document,
        translate: Optional[Translate] = None,
        *,
        labels: Optional[dict] = None,
        company_currencies: Optional[Mapping[str, str]] = None,
        item_currencies: Optional[Sequence[str]] = None,
        summary: Optional[TaxSummary] = None,
    ) -> RenderedDocument:
        ctx = self.build_context(document, translate, labels, company_currencies, item_currencies, summary)
        blocks = [block for block in self.blocks(ctx) if block is not None]
        placed = paginate(blocks)
        page_count = len(placed)
        pages = ["".join(parts) + self.footer(ctx, index + 1, page_count) for index, parts in enumerate(placed)]
        logger.debug("Rendered %s: %d block(s) on %d page(s)", self.name, len(blocks), page_count)
        images = (ctx.logo,) if ctx.logo is not None else ()
        return RenderedDocument(
            template=self.name,
            pages=pages,
            images=images,
            summary=ctx.summary,
            currency=ctx.currency,
            language=ctx.language,
        )

    def build_context(
        self,
        document: Document,
        translate: Optional[Translate] = None,
        labels: Optional[dict] = None,
        company_currencies: Optional[Mapping[str, str]] = None,
        item_currencies: Optional[Sequence[str]] = None,
        summary: Optional[TaxSummary] = None,
    ) -> RenderContext:
        language = (document.language or company_language(document.recipient.company_code)).lower()
        items = document.usable_items
        if item_currencies is None:
            item_currencies = [
                resolve_currency(item, document.vendor, document.recipient, company_currencies, document.materials)
                for item in items
            ]
        currency = primary_currency(item_currencies)
        logo = load_logo(document.logo) if document.logo else None
        logo_config = document.logo_config or LogoConfig.for_template(self.name)
        ctx = RenderContext(
            document=document,
            t=make_translator(language, translate, labels),
            language=language,
            style=self.style,
            summary=summary if summary is not None else aggregate(items),
            currency=currency,
            items=items,
            item_currencies=list(item_currencies),
            logo=logo,
            logo_config=logo_config,
        )
        if document.payment_qr:
            ctx.qr_matrix = payment_qr_matrix(document.vendor, ctx.summary.gross, document.invoice_number, currency)
            if ctx.qr_matrix is None:
                logger.warning("Payment QR skipped for invoice %s: needs vendor name, IBAN and a positive EUR total", document.invoice_number)
        return ctx

    @abstractmethod
    def blocks(self, ctx: RenderContext) -> Iterable[Optional[Block]]:
        """Measured blocks top-down; None entries are skipped."""

    def footer(self, ctx: RenderContext, page_no: int, page_count: int) -> str:
        return footer_ops(ctx, page_no, page_count)

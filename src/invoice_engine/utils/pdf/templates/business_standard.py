from __future__ import annotations

from invoice_engine.utils.pdf.core.context import RenderContext
from invoice_engine.utils.pdf.core.layout_common import TemplateStyle, hex_color
from invoice_engine.utils.pdf.sections.billing import build_detail_rows, document_title
from invoice_engine.utils.pdf.sections.header import header_block
from invoice_engine.utils.pdf.sections.items_table import items_table_blocks
from invoice_engine.utils.pdf.sections.letter import (
    address_window_block,
    closing_block,
    date_line_block,
    detail_grid_block,
    paragraph_block,
    subject_block,
)
from invoice_engine.utils.pdf.sections.payment import payment_terms_text
from invoice_engine.utils.pdf.sections.summary import summary_block
from invoice_engine.utils.pdf.templates.base import TemplateRenderer


class BusinessStandardRenderer(TemplateRenderer):
    """DIN-style business letter: letterhead, address window, subject, salutation, table, closing."""

    name = "businessstandard"
    style = TemplateStyle(
        text=hex_color("#333333"),
        muted=hex_color("#666666"),
        accent=hex_color("#000000"),
        header_bg=hex_color("#E8E8E8"),
        row_alt=hex_color("#F8F8F8"),
        border=hex_color("#DDDDDD"),
        box_bg=hex_color("#F5F5F5"),
        box_border=hex_color("#CCCCCC"),
    )
    position_column = True

    def blocks(self, ctx: RenderContext):
        rows = build_detail_rows(ctx, include_customer=True)
        half = (len(rows) + 1) // 2
        yield header_block(ctx)
        yield address_window_block(ctx, with_sender=True)
        yield date_line_block(ctx)
        yield subject_block(ctx, document_title(ctx))
        yield paragraph_block(ctx, [ctx.t("pdf.salutation")], gap=4)
        yield paragraph_block(ctx, [ctx.t("pdf.introText")])
        yield detail_grid_block(ctx, rows[:half], rows[half:])
        yield from items_table_blocks(ctx, position_column=self.position_column)
        yield summary_block(ctx)
        yield paragraph_block(ctx, [payment_terms_text(ctx)])
        yield closing_block(ctx)

from __future__ import annotations

from invoice_engine.utils.pdf.core.context import RenderContext
from invoice_engine.utils.pdf.core.layout_common import WHITE, TemplateStyle, hex_color
from invoice_engine.utils.pdf.sections.billing import billing_block
from invoice_engine.utils.pdf.sections.header import header_block
from invoice_engine.utils.pdf.sections.items_table import items_table_blocks
from invoice_engine.utils.pdf.sections.letter import contact_strip_block, paragraph_block
from invoice_engine.utils.pdf.sections.payment import info_banner_block
from invoice_engine.utils.pdf.sections.summary import summary_block
from invoice_engine.utils.pdf.templates.base import TemplateRenderer


class BusinessGreenRenderer(TemplateRenderer):
    name = "businessgreen"
    style = TemplateStyle(
        text=hex_color("#1E293B"),
        muted=hex_color("#64748B"),
        accent=hex_color("#059669"),
        header_bg=hex_color("#059669"),
        header_text=WHITE,
        row_alt=hex_color("#F3F4F6"),
        border=hex_color("#D1D5DB"),
        box_bg=hex_color("#F0FDF4"),
        box_border=hex_color("#BBF7D0"),
        table_border=False,
    )

    def blocks(self, ctx: RenderContext):
        yield header_block(ctx, rule=False)
        yield contact_strip_block(ctx)
        yield billing_block(ctx)
        yield from items_table_blocks(ctx)
        yield summary_block(ctx, boxed=True)
        yield info_banner_block(ctx)
        yield paragraph_block(ctx, [f"{ctx.t('pdf.thankYouOrder')}."], color=ctx.style.muted)

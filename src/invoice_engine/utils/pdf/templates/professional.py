from __future__ import annotations

from invoice_engine.utils.pdf.core.context import RenderContext
from invoice_engine.utils.pdf.core.layout_common import WHITE, TemplateStyle, hex_color
from invoice_engine.utils.pdf.sections.billing import billing_block
from invoice_engine.utils.pdf.sections.header import header_block
from invoice_engine.utils.pdf.sections.items_table import items_table_blocks
from invoice_engine.utils.pdf.sections.payment import payment_block
from invoice_engine.utils.pdf.sections.summary import summary_block
from invoice_engine.utils.pdf.templates.base import TemplateRenderer


class ProfessionalRenderer(TemplateRenderer):
    """Navy accents, white-on-navy table header, borderless zebra rows."""

    name = "professional"
    style = TemplateStyle(
        text=hex_color("#1E293B"),
        muted=hex_color("#64748B"),
        accent=hex_color("#1E3A8A"),
        header_bg=hex_color("#1E3A8A"),
        header_text=WHITE,
        row_alt=hex_color("#F8FAFC"),
        border=hex_color("#E5E7EB"),
        box_bg=hex_color("#EFF6FF"),
        box_border=hex_color("#E5E7EB"),
        table_border=False,
        box_left_bar=True,
    )

    def blocks(self, ctx: RenderContext):
        yield header_block(ctx)
        yield billing_block(ctx)
        yield from items_table_blocks(ctx)
        yield summary_block(ctx, boxed=True)
        yield payment_block(ctx)

from __future__ import annotations

from invoice_engine.utils.pdf.core.context import RenderContext
from invoice_engine.utils.pdf.core.layout_common import TemplateStyle, hex_color
from invoice_engine.utils.pdf.sections.billing import billing_block
from invoice_engine.utils.pdf.sections.header import header_block
from invoice_engine.utils.pdf.sections.items_table import items_table_blocks
from invoice_engine.utils.pdf.sections.letter import signature_block
from invoice_engine.utils.pdf.sections.payment import payment_block
from invoice_engine.utils.pdf.sections.summary import summary_block
from invoice_engine.utils.pdf.templates.base import TemplateRenderer


class ClassicRenderer(TemplateRenderer):
    """Serif layout with a ruled table, payment box and signature line."""

    name = "classic"
    style = TemplateStyle(
        text=hex_color("#333333"),
        muted=hex_color("#666666"),
        accent=hex_color("#000000"),
        header_bg=hex_color("#EEEEEE"),
        row_alt=hex_color("#FAFAFA"),
        border=hex_color("#CCCCCC"),
        box_bg=hex_color("#F5F5F5"),
        box_border=hex_color("#CCCCCC"),
        regular_font="/F3",
        bold_font="/F4",
        title_size=20,
    )

    def blocks(self, ctx: RenderContext):
        yield header_block(ctx)
        yield billing_block(ctx)
        yield from items_table_blocks(ctx)
        yield summary_block(ctx, boxed=True)
        yield payment_block(ctx)
        yield signature_block(ctx)

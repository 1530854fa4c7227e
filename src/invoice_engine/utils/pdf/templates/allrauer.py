from __future__ import annotations

from invoice_engine.utils.pdf.core.context import RenderContext
from invoice_engine.utils.pdf.core.drawing import _draw_text
from invoice_engine.utils.pdf.core.flow import Block, spacer
from invoice_engine.utils.pdf.core.layout_common import Column, TemplateStyle, hex_color
from invoice_engine.utils.pdf.sections.footer import compact_footer_columns, footer_ops
from invoice_engine.utils.pdf.sections.header import logo_height, render_logo
from invoice_engine.utils.pdf.sections.items_table import items_table_blocks
from invoice_engine.utils.pdf.sections.letter import address_window_block, detail_grid_block, paragraph_block
from invoice_engine.utils.pdf.sections.summary import payment_sentence_block, tax_table_block
from invoice_engine.utils.pdf.templates.base import TemplateRenderer

ALLRAUER_COLUMNS = (
    Column("description", "allrauer.description", 34),
    Column("quantity", "allrauer.quantity", 8, "right"),
    Column("unit", "allrauer.unit", 9),
    Column("tax_rate", "allrauer.rate", 8, "right"),
    Column("unit_price", "allrauer.unitPrice", 20, "right"),
    Column("total", "allrauer.totalPrice", 21, "right"),
)


class AllrauerRenderer(TemplateRenderer):
    """
    Trade-invoice layout: sender line above the address window, centred logo,
    two-column details, terms lines before the table and a per-rate tax table.
    """

    name = "allrauer2"
    style = TemplateStyle(
        text=hex_color("#000000"),
        muted=hex_color("#666666"),
        accent=hex_color("#000000"),
        header_bg=hex_color("#FFFFFF"),
        row_alt=hex_color("#FFFFFF"),
        border=hex_color("#666666"),
        box_bg=hex_color("#FFFFFF"),
        box_border=hex_color("#666666"),
        title_size=16,
        body_size=9,
        table_border=False,
        columns=ALLRAUER_COLUMNS,
    )

    def blocks(self, ctx: RenderContext):
        yield self._letterhead(ctx)
        yield self._title(ctx)
        left, right = self._detail_columns(ctx)
        yield detail_grid_block(ctx, left, right, label_ratio=0.55)
        yield paragraph_block(ctx, [ctx.t("allrauer.termsText1")], size=ctx.style.small_size, gap=0)
        yield paragraph_block(ctx, [ctx.t("allrauer.termsText2")], bold=True, size=ctx.style.small_size, gap=0)
        yield paragraph_block(ctx, [ctx.t("allrauer.termsText3")], size=ctx.style.small_size, gap=0)
        yield spacer(ctx.style.section_gap / 2)
        yield from items_table_blocks(ctx)
        yield tax_table_block(ctx)
        yield payment_sentence_block(ctx)

    def footer(self, ctx: RenderContext, page_no: int, page_count: int) -> str:
        return footer_ops(ctx, page_no, page_count, compact_footer_columns(ctx))

    def _letterhead(self, ctx: RenderContext) -> Block:
        address = address_window_block(ctx, with_sender=True, width_ratio=0.5)
        height = max(address.height, logo_height(ctx) + ctx.style.section_gap)

        def draw(top: float) -> str:
            logo = ""
            if ctx.logo_config is not None:
                logo = render_logo(ctx, ctx.right - float(ctx.logo_config.container_width), top)
            return address.draw(top) + logo

        return Block(height=height, draw=draw, name="letterhead")

    def _title(self, ctx: RenderContext) -> Block:
        size = ctx.style.title_size

        def draw(top: float) -> str:
            return _draw_text([ctx.t("allrauer.invoice")], ctx.x, top - size, ctx.style.bold_font, size)

        return Block(height=size + 10, draw=draw, name="title")

    def _detail_columns(self, ctx: RenderContext):
        doc = ctx.document
        left = [
            (ctx.t("allrauer.invoiceNumber"), ctx.or_placeholder(doc.invoice_number)),
            (ctx.t("allrauer.invoiceDate"), ctx.date(doc.invoice_date) or "-"),
        ]
        if doc.is_mm:
            left += [
                (ctx.t("allrauer.deliveryNoteNumber"), ctx.or_placeholder(doc.delivery_note_number)),
                (ctx.t("allrauer.deliveryDate"), ctx.date(doc.delivery_date) or "-"),
                (ctx.t("allrauer.orderDate"), ctx.date(doc.order_date) or "-"),
            ]
        right = [(ctx.t("allrauer.customerNumber"), ctx.or_placeholder(doc.customer_number))]
        if doc.is_mm:
            right.append((ctx.t("allrauer.orderNumber"), ctx.or_placeholder(doc.order_number)))
        right += [
            (ctx.t("allrauer.vatId"), ctx.or_placeholder(doc.vendor.vat_number)),
            (ctx.t("allrauer.processor"), ctx.or_placeholder(doc.processor)),
        ]
        return left, right

from __future__ import annotations

from textwrap import wrap

from invoice_engine.core.models.document import Party
from invoice_engine.utils.pdf.core.context import RenderContext
from invoice_engine.utils.pdf.core.drawing import _draw_text
from invoice_engine.utils.pdf.core.flow import Block


def build_recipient_lines(recipient: Party, placeholder: str = "-", wrap_width: int = 42) -> list[str]:
    address = recipient.address
    raw = [
        recipient.name or placeholder,
        address.street or placeholder,
        f"{address.zip} {address.city}".strip() or placeholder,
        address.country,
    ]
    lines: list[str] = []
    for line in raw:
        if not line:
            continue
        lines.extend(wrap(line, wrap_width) or ["-"])
    return lines


def document_title(ctx: RenderContext) -> str:
    return ctx.t("pdf.invoice") if ctx.document.is_mm else ctx.t("pdf.financialInvoice")


def build_detail_rows(ctx: RenderContext, include_customer: bool = False) -> list[tuple[str, str]]:
    """(label, value) pairs of the invoice metadata; MM documents add order and delivery data."""
    doc = ctx.document
    rows = [
        (ctx.t("pdf.invoiceNumber"), ctx.or_placeholder(doc.invoice_number)),
        (ctx.t("pdf.invoiceDate"), ctx.date(doc.invoice_date) or "-"),
    ]
    if doc.is_mm:
        if doc.order_number:
            rows.append((ctx.t("pdf.orderNumber"), doc.order_number))
        if doc.order_date:
            rows.append((ctx.t("pdf.orderDate"), ctx.date(doc.order_date)))
        if doc.delivery_note_number:
            rows.append((ctx.t("pdf.deliveryNoteNumber"), doc.delivery_note_number))
        if doc.delivery_date:
            rows.append((ctx.t("pdf.deliveryDate"), ctx.date(doc.delivery_date)))
    if doc.processor:
        rows.append((ctx.t("pdf.processor"), doc.processor))
    if include_customer and doc.customer_number:
        rows.append((ctx.t("pdf.customerNumber"), doc.customer_number))
    if not include_customer and doc.vendor.vat_number:
        rows.append((ctx.t("pdf.contactVatId"), doc.vendor.vat_number))
    return rows


def render_detail_rows(ctx: RenderContext, rows: list[tuple[str, str]], x: float, right: float, top: float, size: int, leading: int) -> str:
    style = ctx.style
    parts: list[str] = []
    y = top - size
    for label, value in rows:
        parts.append(_draw_text([f"{label}:"], x, y, style.regular_font, size, color=style.muted))
        parts.append(_draw_text([value], right, y, style.bold_font, size, align="right"))
        y -= leading
    return "".join(parts)


def billing_block(ctx: RenderContext) -> Block:
    """Recipient on the left (50%), invoice title and details on the right (40%)."""
    style = ctx.style
    doc = ctx.document
    size = style.body_size
    leading = size + 4
    recipient_lines = build_recipient_lines(doc.recipient, placeholder="-")
    if not doc.recipient.name:
        recipient_lines[0] = ctx.t("pdf.placeholderRecipient")
    extra = [f"{ctx.t('pdf.customerNumber')}: {doc.customer_number}"] if doc.customer_number else []
    rows = build_detail_rows(ctx)

    left_h = (size + 1) + 8 + (len(recipient_lines) + len(extra)) * leading
    right_h = style.title_size + 10 + len(rows) * leading
    height = max(left_h, right_h) + style.section_gap

    def draw(top: float) -> str:
        parts: list[str] = []
        parts.append(_draw_text([ctx.t("pdf.billTo").upper()], ctx.x, top - size - 1, style.bold_font, size + 1, color=style.accent))
        y = top - size - 1 - 8 - size
        parts.append(_draw_text(recipient_lines[:1], ctx.x, y, style.bold_font, size + 1))
        parts.append(_draw_text(recipient_lines[1:] + extra, ctx.x, y - leading, style.regular_font, size, leading=leading))

        details_x = ctx.x + ctx.width * 0.6
        parts.append(_draw_text([document_title(ctx)], ctx.right, top - style.title_size, style.bold_font, style.title_size, align="right", color=style.accent))
        parts.append(render_detail_rows(ctx, rows, details_x, ctx.right, top - style.title_size - 10, size, leading))
        return "".join(parts)

    return Block(height=height, draw=draw, name="billing")

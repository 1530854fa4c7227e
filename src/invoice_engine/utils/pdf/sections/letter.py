"""
Letter-style text blocks: address window, date line, subject, paragraphs,
two-column detail grids, closing and signature.
"""

from __future__ import annotations

from typing import Sequence

from invoice_engine.utils.pdf.core.context import RenderContext
from invoice_engine.utils.pdf.core.drawing import _draw_line, _draw_text, _fill_rect, wrap_text
from invoice_engine.utils.pdf.core.flow import Block
from invoice_engine.utils.pdf.sections.billing import build_recipient_lines


def sender_line(ctx: RenderContext) -> str:
    vendor = ctx.document.vendor
    address = vendor.address
    parts = [
        ctx.or_placeholder(vendor.name, ctx.t("pdf.placeholderVendor")),
        address.street,
        f"{address.zip} {address.city}".strip(),
    ]
    return ", ".join(part for part in parts if part)


def address_window_block(ctx: RenderContext, with_sender: bool = False, width_ratio: float = 0.55) -> Block:
    """Recipient address as printed into an envelope window, optionally with the small sender line above."""
    style = ctx.style
    size = style.body_size + 1
    leading = size + 3
    recipient = ctx.document.recipient
    lines = build_recipient_lines(recipient, placeholder="")
    if not recipient.name:
        lines.insert(0, ctx.t("pdf.placeholderRecipient"))
    sender = wrap_text(sender_line(ctx), ctx.width * width_ratio, style.small_size) if with_sender else []
    sender_h = len(sender) * (style.small_size + 2) + (8 if sender else 0)
    height = sender_h + len(lines) * leading + style.section_gap

    def draw(top: float) -> str:
        parts: list[str] = []
        y = top - style.small_size
        if sender:
            parts.append(_draw_text(sender, ctx.x, y, style.regular_font, style.small_size, leading=style.small_size + 2, color=style.muted))
            underline_y = y - (len(sender) - 1) * (style.small_size + 2) - 3
            parts.append(_draw_line(ctx.x, underline_y, ctx.x + ctx.width * width_ratio, underline_y, style.muted, 0.4))
        y = top - sender_h - size
        parts.append(_draw_text(lines[:1], ctx.x, y, style.bold_font, size))
        parts.append(_draw_text(lines[1:], ctx.x, y - leading, style.regular_font, size, leading=leading, color=style.text))
        return "".join(parts)

    return Block(height=height, draw=draw, name="address")


def date_line_block(ctx: RenderContext) -> Block:
    style = ctx.style
    size = style.body_size
    city = ctx.document.vendor.address.city
    date_text = ctx.date(ctx.document.invoice_date) or "-"
    text = f"{city}, {date_text}" if city else date_text

    def draw(top: float) -> str:
        return _draw_text([text], ctx.right, top - size, style.regular_font, size, align="right", color=style.text)

    return Block(height=size + style.section_gap / 2, draw=draw, name="date-line")


def subject_block(ctx: RenderContext, title: str) -> Block:
    style = ctx.style
    size = style.title_size - 4
    text = f"{title} Nr. {ctx.or_placeholder(ctx.document.invoice_number)}"

    def draw(top: float) -> str:
        return _draw_text([text], ctx.x, top - size, style.bold_font, size, color=style.accent)

    return Block(height=size + style.section_gap / 2, draw=draw, name="subject")


def paragraph_block(ctx: RenderContext, texts: Sequence[str], bold: bool = False, size: float | None = None, gap: float | None = None, color: str | None = None) -> Block | None:
    style = ctx.style
    size = size or style.body_size
    leading = size + 3
    lines: list[str] = []
    for text in texts:
        if text:
            lines.extend(wrap_text(text, ctx.width, size))
    if not lines:
        return None
    gap = style.section_gap / 2 if gap is None else gap
    font = style.bold_font if bold else style.regular_font

    def draw(top: float) -> str:
        return _draw_text(lines, ctx.x, top - size, font, size, leading=leading, color=color or style.text)

    return Block(height=len(lines) * leading + gap, draw=draw, name="paragraph")


def detail_grid_block(ctx: RenderContext, left: Sequence[tuple[str, str]], right: Sequence[tuple[str, str]] = (), label_ratio: float = 0.5) -> Block:
    """Label/value rows in one or two columns."""
    style = ctx.style
    size = style.body_size
    leading = size + 4
    columns = [col for col in (left, right) if col]
    col_w = ctx.width / max(1, len(columns))
    rows = max((len(col) for col in columns), default=0)
    height = rows * leading + style.section_gap

    def draw(top: float) -> str:
        parts: list[str] = []
        for index, column in enumerate(columns):
            x = ctx.x + index * col_w
            value_x = x + col_w * label_ratio
            y = top - size
            for label, value in column:
                parts.append(_draw_text([f"{label}:"], x, y, style.regular_font, size, color=style.muted))
                parts.append(_draw_text([value or "-"], value_x, y, style.bold_font, size, color=style.text))
                y -= leading
        return "".join(parts)

    return Block(height=height, draw=draw, name="details")


def closing_block(ctx: RenderContext) -> Block:
    style = ctx.style
    size = style.body_size
    lines = [ctx.t("pdf.closing"), "", ctx.or_placeholder(ctx.document.vendor.name, ctx.t("pdf.placeholderVendor"))]
    height = len(lines) * (size + 4) + style.section_gap

    def draw(top: float) -> str:
        return _draw_text(lines, ctx.x, top - style.section_gap / 2 - size, style.regular_font, size, leading=size + 4, color=style.text)

    return Block(height=height, draw=draw, name="closing")


def signature_block(ctx: RenderContext) -> Block:
    """Signature rule with caption and the 'created electronically' note dated with the invoice date."""
    style = ctx.style
    size = style.small_size
    note = f"{ctx.t('pdf.electronicNote')} {ctx.t('pdf.issuedOn')} {ctx.date(ctx.document.invoice_date) or '-'}."
    note_lines = wrap_text(note, ctx.width, size)
    height = 36 + size + 6 + len(note_lines) * (size + 2) + style.section_gap

    def draw(top: float) -> str:
        parts: list[str] = []
        line_y = top - 36
        parts.append(_draw_line(ctx.x, line_y, ctx.x + ctx.width * 0.4, line_y, style.text, 0.6))
        parts.append(_draw_text([ctx.t("pdf.signature")], ctx.x, line_y - size - 2, style.regular_font, size, color=style.muted))
        parts.append(_draw_text(note_lines, ctx.x, line_y - 2 * size - 10, style.regular_font, size, leading=size + 2, color=style.muted))
        return "".join(parts)

    return Block(height=height, draw=draw, name="signature")


def contact_strip_block(ctx: RenderContext) -> Block | None:
    """Single accent-tinted line with the vendor's phone, email and web address."""
    vendor = ctx.document.vendor
    entries = [
        f"{ctx.t('pdf.phone')}: {vendor.phone}" if vendor.phone else "",
        f"{ctx.t('pdf.contactEmail')}: {vendor.email}" if vendor.email else "",
        f"{ctx.t('pdf.contactWeb')}: {vendor.url}" if vendor.url else "",
    ]
    text = "   |   ".join(entry for entry in entries if entry)
    if not text:
        return None
    style = ctx.style
    size = style.small_size + 1
    strip_h = size + 10

    def draw(top: float) -> str:
        parts = [_fill_rect(ctx.x, top - strip_h, ctx.width, strip_h, style.box_bg)]
        parts.append(_fill_rect(ctx.x, top - strip_h, 3, strip_h, style.accent))
        parts.append(_draw_text([text], ctx.x + 10, top - strip_h + 6, style.regular_font, size, color=style.text))
        return "".join(parts)

    return Block(height=strip_h + style.section_gap / 2, draw=draw, name="contact-strip")

from __future__ import annotations

from invoice_engine.utils.pdf.core.context import RenderContext
from invoice_engine.utils.pdf.core.drawing import _draw_qr, _draw_text, _fill_rect, _stroke_rect, wrap_text
from invoice_engine.utils.pdf.core.flow import Block
from invoice_engine.utils.pdf.core.layout_common import WHITE

QR_SIDE = 84
GENERIC_TERMS = ("30 day", "30 tag")


def payment_terms_text(ctx: RenderContext) -> str:
    """Document payment terms; generic 30-day wording and blanks fall back to the default sentence."""
    terms = (ctx.document.payment_terms or "").strip()
    if not terms or any(marker in terms.lower() for marker in GENERIC_TERMS):
        return ctx.t("pdf.defaultPayment")
    return terms


def build_bank_lines(ctx: RenderContext) -> list[str]:
    vendor = ctx.document.vendor
    lines = []
    if vendor.bank_name:
        lines.append(vendor.bank_name)
    if vendor.iban:
        lines.append(f"IBAN: {vendor.iban}")
    if vendor.bic:
        lines.append(f"BIC: {vendor.bic}")
    return lines


def payment_block(ctx: RenderContext) -> Block:
    """Boxed payment terms with bank details and the optional payment QR on the right."""
    style = ctx.style
    size = style.body_size
    leading = size + 3
    pad = 10
    qr = ctx.qr_matrix
    text_w = ctx.width - 2 * pad - (QR_SIDE + pad if qr else 0)
    body = wrap_text(payment_terms_text(ctx), text_w, size)
    bank = build_bank_lines(ctx)
    text_h = size + 6 + (len(body) + len(bank) + (1 if bank else 0)) * leading
    box_h = max(text_h, QR_SIDE + 12 if qr else 0) + 2 * pad
    height = box_h + style.section_gap

    def draw(top: float) -> str:
        parts: list[str] = []
        box_top = top - style.section_gap / 2
        bottom = box_top - box_h
        parts.append(_fill_rect(ctx.x, bottom, ctx.width, box_h, style.box_bg))
        parts.append(_stroke_rect(ctx.x, bottom, ctx.width, box_h, style.box_border))
        if style.box_left_bar:
            parts.append(_fill_rect(ctx.x, bottom, 3, box_h, style.accent))
        y = box_top - pad - size
        parts.append(_draw_text([ctx.t("pdf.paymentTerms")], ctx.x + pad, y, style.bold_font, size + 1, color=style.accent))
        y -= size + 6
        parts.append(_draw_text(body, ctx.x + pad, y, style.regular_font, size, leading=leading, color=style.text))
        y -= (len(body) + 1) * leading
        if bank:
            parts.append(_draw_text(bank, ctx.x + pad, y, style.regular_font, size, leading=leading, color=style.muted))
        if qr:
            scale = QR_SIDE / max(len(qr), len(qr[0]))
            qr_x = ctx.right - pad - QR_SIDE
            parts.append(_draw_qr(qr, qr_x, box_top - pad, scale))
            parts.append(_draw_text([ctx.t("pdf.scanToPay")], qr_x + QR_SIDE / 2, box_top - pad - QR_SIDE - size, style.regular_font, style.small_size, align="center", color=style.muted))
        return "".join(parts)

    return Block(height=height, draw=draw, name="payment")


def info_banner_block(ctx: RenderContext) -> Block | None:
    """Accent-coloured information banner; only rendered when terms or a processor are set."""
    doc = ctx.document
    if not (doc.payment_terms or "").strip() and not (doc.processor or "").strip():
        return None
    style = ctx.style
    size = style.body_size
    leading = size + 3
    pad = 10
    lines: list[str] = []
    if (doc.payment_terms or "").strip():
        lines.extend(wrap_text(f"{ctx.t('pdf.paymentTerms')}: {payment_terms_text(ctx)}", ctx.width - 2 * pad, size))
    if (doc.processor or "").strip():
        lines.append(f"{ctx.t('pdf.contactAvailable')} {doc.processor} {ctx.t('pdf.contactAvailableSuffix')}")
    box_h = size + 8 + len(lines) * leading + 2 * pad
    height = box_h + style.section_gap

    def draw(top: float) -> str:
        box_top = top - style.section_gap / 2
        parts = [_fill_rect(ctx.x, box_top - box_h, ctx.width, box_h, style.accent)]
        y = box_top - pad - size
        parts.append(_draw_text([ctx.t("pdf.invoiceInformation")], ctx.x + pad, y, style.bold_font, size + 1, color=WHITE))
        parts.append(_draw_text(lines, ctx.x + pad, y - size - 8, style.regular_font, size, leading=leading, color=WHITE))
        return "".join(parts)

    return Block(height=height, draw=draw, name="info-banner")

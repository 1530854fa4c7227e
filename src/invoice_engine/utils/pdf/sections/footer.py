from __future__ import annotations

from typing import Sequence

from invoice_engine.utils.pdf.core.context import RenderContext
from invoice_engine.utils.pdf.core.drawing import _draw_line, _draw_text
from invoice_engine.utils.pdf.core.layout_common import FOOTER_H, FOOTER_Y

FooterColumn = tuple[str, list[str]]


def standard_footer_columns(ctx: RenderContext) -> list[FooterColumn]:
    vendor = ctx.document.vendor
    bank = [line for line in (vendor.bank_name, _prefixed("IBAN", vendor.iban), _prefixed("BIC", vendor.bic)) if line]
    business = [ctx.or_placeholder(vendor.name, ctx.t("pdf.placeholderVendor"))]
    business += [
        line
        for line in (
            _prefixed(ctx.t("pdf.taxNumber"), vendor.tax_number),
            _prefixed(ctx.t("pdf.vatNumber"), vendor.vat_number),
            vendor.registration,
        )
        if line
    ]
    contact = [
        line
        for line in (
            _prefixed(ctx.t("pdf.phone"), vendor.phone),
            _prefixed(ctx.t("pdf.fax"), vendor.fax),
            _prefixed(ctx.t("pdf.contactEmail"), vendor.email),
            _prefixed(ctx.t("pdf.contactWeb"), vendor.url),
        )
        if line
    ]
    return [
        (ctx.t("pdf.bankDetails"), bank or ["-"]),
        (ctx.t("pdf.businessDetails"), business),
        (ctx.t("pdf.contact"), contact or ["-"]),
    ]


def compact_footer_columns(ctx: RenderContext) -> list[FooterColumn]:
    """Untitled address / bank / tax id columns."""
    vendor = ctx.document.vendor
    address = vendor.address
    first = [address.street, f"{address.zip} {address.city}".strip(), f"Tel.: {vendor.phone or ''}".strip()]
    if vendor.fax:
        first.append(f"Fax: {vendor.fax}")
    if vendor.url:
        first.append(vendor.url)
    second = [f"{ctx.t('allrauer.bankConnections')}:", vendor.iban or "", vendor.bank_name or ""]
    third = [f"USTID {vendor.vat_number or ''}".strip()]
    if vendor.email:
        third.append(f"E-Mail: {vendor.email}")
    return [("", [line for line in first if line]), ("", second), ("", third)]


def _prefixed(label: str, value: str | None) -> str:
    value = (value or "").strip()
    return f"{label}: {value}" if value else ""


def page_label(ctx: RenderContext, page_no: int, page_count: int) -> str:
    return f"{ctx.t('pdf.page')} {page_no} {ctx.t('pdf.pageOf')} {page_count}"


def footer_ops(ctx: RenderContext, page_no: int, page_count: int, columns: Sequence[FooterColumn] | None = None) -> str:
    """Footer columns above the bottom margin and the page number at the bottom right; drawn on every page."""
    style = ctx.style
    cols = list(columns if columns is not None else standard_footer_columns(ctx))
    size = style.small_size
    leading = size + 2
    top = FOOTER_Y + FOOTER_H - 6
    parts = [_draw_line(ctx.x, top + 4, ctx.right, top + 4, style.border, 0.6)]
    if cols:
        col_w = ctx.width / len(cols)
        for index, (title, lines) in enumerate(cols):
            x = ctx.x + index * col_w
            y = top - size
            if title:
                parts.append(_draw_text([title], x, y, style.bold_font, size, color=style.text))
                y -= leading
            # keep clear of the page number line
            room = max(0, int((y - FOOTER_Y - leading) / leading) + 1)
            parts.append(_draw_text(lines[:room], x, y, style.regular_font, size, leading=leading, color=style.muted))
    parts.append(_draw_text([page_label(ctx, page_no, page_count)], ctx.right, FOOTER_Y - 12, style.regular_font, size, align="right", color=style.muted))
    return "".join(parts)

from __future__ import annotations

from invoice_engine.core.calculations.tax_aggregator import TaxGroup
from invoice_engine.utils.pdf.core.context import RenderContext
from invoice_engine.utils.pdf.core.drawing import _draw_line, _draw_text, _fill_rect, _stroke_rect, wrap_text
from invoice_engine.utils.pdf.core.flow import Block

MIN_TAX_ROWS = 3


def build_summary_lines(ctx: RenderContext) -> list[tuple[str, str]]:
    summary = ctx.summary
    vat_label = ctx.t("pdf.vat")
    rates = [g.tax_rate_percent for g in summary.groups if g.net_amount or g.tax_amount]
    if len(rates) == 1:
        vat_label = f"{vat_label} ({ctx.rate(rates[0])})"
    return [
        (ctx.t("pdf.net"), ctx.money(summary.net)),
        (vat_label, ctx.money(summary.tax)),
        (ctx.t("pdf.total"), ctx.money(summary.gross)),
    ]


def summary_block(ctx: RenderContext, width_ratio: float = 0.45, boxed: bool = False) -> Block:
    """Net, tax and gross right-aligned under the table; the gross line is emphasised."""
    style = ctx.style
    lines = build_summary_lines(ctx)
    size = style.body_size
    leading = size + 7
    pad = 8 if boxed else 0
    height = len(lines) * leading + 2 * pad + 6 + style.section_gap
    box_w = ctx.width * width_ratio
    box_x = ctx.right - box_w

    def draw(top: float) -> str:
        parts: list[str] = []
        inner_top = top - style.section_gap / 2
        box_h = len(lines) * leading + 2 * pad + 4
        if boxed:
            parts.append(_fill_rect(box_x, inner_top - box_h, box_w, box_h, style.box_bg))
            parts.append(_stroke_rect(box_x, inner_top - box_h, box_w, box_h, style.box_border))
        y = inner_top - pad - size
        for index, (label, value) in enumerate(lines):
            last = index == len(lines) - 1
            if last:
                parts.append(_draw_line(box_x + pad, y + size + 2, ctx.right - pad, y + size + 2, style.accent, 1))
            font = style.bold_font if last else style.regular_font
            parts.append(_draw_text([label], box_x + pad, y, font, size + (1 if last else 0), color=style.accent if last else style.text))
            parts.append(_draw_text([value], ctx.right - pad, y, font, size + (1 if last else 0), align="right", color=style.accent if last else style.text))
            y -= leading
        return "".join(parts)

    return Block(height=height, draw=draw, name="summary")


def tax_rows(ctx: RenderContext) -> list[list[str]]:
    """One row per tax group, padded with currency-only rows up to three."""
    rows: list[list[str]] = []
    for group in ctx.summary.groups:
        rows.append(_group_row(ctx, group))
    for _ in range(max(0, MIN_TAX_ROWS - len(rows))):
        rows.append(["", ctx.currency, "", ctx.currency, ctx.currency])
    return rows


def _group_row(ctx: RenderContext, group: TaxGroup) -> list[str]:
    return [
        "",
        ctx.money(group.net_amount),
        ctx.number(group.tax_rate_percent),
        ctx.money(group.tax_amount),
        ctx.money(group.gross_amount),
    ]


def tax_table_block(ctx: RenderContext) -> Block:
    """Per-rate tax table followed by the grand total row."""
    style = ctx.style
    size = style.table_size
    row_h = size + 8
    weights = (20, 22, 14, 22, 22)
    total_w = sum(weights)
    xs = []
    cursor = ctx.x
    for weight in weights:
        w = ctx.width * weight / total_w
        xs.append((cursor, w))
        cursor += w
    header = ["", ctx.t("allrauer.net"), ctx.t("allrauer.vatRate"), ctx.t("allrauer.vat"), ctx.t("allrauer.gross")]
    rows = tax_rows(ctx)
    summary = ctx.summary
    total_row = [ctx.t("allrauer.total"), ctx.money(summary.net), "", ctx.money(summary.tax), ctx.money(summary.gross)]
    height = row_h * (len(rows) + 1) + 6 + row_h + style.section_gap

    def _row(cells: list[str], top: float, font: str) -> str:
        parts = []
        baseline = top - row_h + 5
        for i, (text, (left, w)) in enumerate(zip(cells, xs)):
            if i == 0:
                parts.append(_draw_text([text], left + 4, baseline, font, size))
            else:
                parts.append(_draw_text([text], left + w - 4, baseline, font, size, align="right"))
        return "".join(parts)

    def draw(top: float) -> str:
        parts: list[str] = []
        y = top - style.section_gap / 2
        parts.append(_fill_rect(ctx.x, y - row_h, ctx.width, row_h, style.header_bg))
        parts.append(_row(header, y, style.bold_font))
        y -= row_h
        for cells in rows:
            parts.append(_row(cells, y, style.regular_font))
            parts.append(_draw_line(ctx.x, y - row_h, ctx.right, y - row_h, style.border, 0.5))
            y -= row_h
        y -= 6
        parts.append(_stroke_rect(ctx.x, y - row_h, ctx.width, row_h, style.text, 1))
        parts.append(_row(total_row, y, style.bold_font))
        return "".join(parts)

    return Block(height=height, draw=draw, name="tax-table")


def payment_sentence_block(ctx: RenderContext) -> Block:
    style = ctx.style
    size = style.body_size
    text = f"{ctx.t('allrauer.paymentText1')} {ctx.money(ctx.summary.gross)} {ctx.t('allrauer.paymentText2')}"
    lines = wrap_text(text, ctx.width, size)
    height = len(lines) * (size + 3) + style.section_gap

    def draw(top: float) -> str:
        return _draw_text(lines, ctx.x, top - size - 4, style.regular_font, size, leading=size + 3)

    return Block(height=height, draw=draw, name="payment-sentence")

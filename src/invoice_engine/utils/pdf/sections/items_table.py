from __future__ import annotations

import math
from typing import Sequence

from invoice_engine.core.models.document import LineItem
from invoice_engine.utils.pdf.core.context import RenderContext
from invoice_engine.utils.pdf.core.drawing import _draw_line, _draw_text, _fill_rect, _stroke_rect, wrap_text
from invoice_engine.utils.pdf.core.flow import Block
from invoice_engine.utils.pdf.core.fonts import text_width
from invoice_engine.utils.pdf.core.layout_common import CONTENT_BOTTOM, CONTENT_TOP, Column

POSITION_COLUMN = Column("position", "pdf.position", 6, "right")


def column_layout(columns: Sequence[Column], x: float, width: float) -> list[tuple[Column, float, float]]:
    """(column, left x, width) with widths proportional to the column weights."""
    total = sum(c.weight for c in columns) or 1
    out = []
    cursor = x
    for column in columns:
        w = width * column.weight / total
        out.append((column, cursor, w))
        cursor += w
    return out


def item_description(ctx: RenderContext, item: LineItem) -> str:
    text = (item.description or "").strip()
    if not text and item.material_reference:
        for material in ctx.document.materials:
            if material.material_reference == item.material_reference:
                text = (material.description or "").strip()
                break
    if not text:
        text = ctx.t("pdf.noDescription")
    if ctx.document.is_mm and item.material_reference:
        text = f"{item.material_reference} - {text}"
    return text


def item_cells(ctx: RenderContext, item: LineItem, currency: str, position: int) -> dict[str, str]:
    return {
        "position": str(position),
        "description": item_description(ctx, item),
        "quantity": ctx.quantity(item.quantity),
        "unit": item.unit or "-",
        "unit_price": ctx.money(item.unit_price, currency),
        "tax_rate": ctx.rate(item.tax_rate_percent),
        "total": ctx.money(item.line_total, currency),
    }


def _cell_x(align: str, left: float, width: float, pad: float) -> float:
    if align == "right":
        return left + width - pad
    if align == "center":
        return left + width / 2
    return left + pad


def fit_size(text: str, font: str, size: float, width: float) -> float:
    """Largest font size up to `size` at which text fits into width."""
    needed = text_width(text, font, size)
    if needed <= width or needed <= 0:
        return size
    return math.floor(size * width / needed * 100) / 100


def items_table_blocks(ctx: RenderContext, columns: Sequence[Column] | None = None, position_column: bool = False) -> list[Block]:
    """
    Header block followed by one block per item row.
    Every row carries the header so the paginator repeats it on continuation pages.
    Rows whose description is taller than a page are split into several blocks;
    only the first one prints the numeric cells.
    """
    style = ctx.style
    cols = list(columns or style.columns)
    if position_column:
        cols.insert(0, POSITION_COLUMN)
    layout = column_layout(cols, ctx.x, ctx.width)
    size = style.table_size
    pad = style.row_padding
    leading = size + 3
    header_h = size + 2 * pad + 2
    max_lines = max(1, int((CONTENT_TOP - CONTENT_BOTTOM - header_h - 2 * pad + 3) // leading))

    def draw_header(top: float) -> str:
        parts = [_fill_rect(ctx.x, top - header_h, ctx.width, header_h, style.header_bg)]
        if style.table_border:
            parts.append(_stroke_rect(ctx.x, top - header_h, ctx.width, header_h, style.border))
        baseline = top - pad - size
        for column, left, w in layout:
            label = ctx.t(column.label_key)
            label_size = fit_size(label, style.bold_font, size, w - 2 * pad)
            parts.append(
                _draw_text([label], _cell_x(column.align, left, w, pad), baseline, style.bold_font, label_size, align=column.align, color=style.header_text)
            )
        return "".join(parts)

    header = Block(height=header_h, draw=draw_header, name="items-header")

    rows: list[Block] = []
    for index, (item, currency) in enumerate(zip(ctx.items, ctx.item_currencies)):
        cells = item_cells(ctx, item, currency, index + 1)
        description: list[str] = []
        sizes: dict[str, float] = {}
        for column, _left, w in layout:
            text = cells.get(column.key, "")
            if column.key == "description":
                description = wrap_text(text, w - 2 * pad, size)
            else:
                sizes[column.key] = fit_size(text, style.regular_font, size, w - 2 * pad)
        chunks = [description[start : start + max_lines] for start in range(0, len(description), max_lines)] or [[]]
        for number, chunk in enumerate(chunks):
            lines = {column.key: [cells.get(column.key, "")] if number == 0 else [] for column, _left, _w in layout}
            lines["description"] = chunk
            row_h = max(1, len(chunk)) * leading + 2 * pad - 3
            rows.append(
                Block(height=row_h, draw=_row_drawer(ctx, layout, lines, sizes, index, row_h, leading), repeat_header=header, name="items-row")
            )

    first_row = rows[0].height if rows else 0
    header.min_space = header_h + first_row
    return [header, *rows]


def _row_drawer(ctx: RenderContext, layout, lines: dict[str, list[str]], sizes: dict[str, float], index: int, row_h: float, leading: float):
    style = ctx.style
    size = style.table_size
    pad = style.row_padding

    def draw(top: float) -> str:
        parts: list[str] = []
        bottom = top - row_h
        if index % 2 == 1:
            parts.append(_fill_rect(ctx.x, bottom, ctx.width, row_h, style.row_alt))
        if style.table_border:
            parts.append(_stroke_rect(ctx.x, bottom, ctx.width, row_h, style.border))
        else:
            parts.append(_draw_line(ctx.x, bottom, ctx.right, bottom, style.border, 0.5))
        baseline = top - pad - size + 1
        for column, left, w in layout:
            parts.append(
                _draw_text(
                    lines[column.key],
                    _cell_x(column.align, left, w, pad),
                    baseline,
                    style.regular_font,
                    sizes.get(column.key, size),
                    leading=leading,
                    align=column.align,
                    color=style.text,
                )
            )
        return "".join(parts)

    return draw

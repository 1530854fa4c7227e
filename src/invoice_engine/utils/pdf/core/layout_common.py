"""
Page geometry and per-template style constants.
Templates differ only in these values and in their summary/extra blocks.
"""

from __future__ import annotations

from dataclasses import dataclass, field

# Page geometry (A4, points)
PAGE_W, PAGE_H = 595, 842

MARGIN_X = 40
MARGIN_TOP = 40
FOOTER_H = 78
FOOTER_Y = 28
CONTENT_TOP = PAGE_H - MARGIN_TOP
CONTENT_BOTTOM = FOOTER_Y + FOOTER_H
CONTENT_W = PAGE_W - 2 * MARGIN_X

# Text width of one average character relative to the font size (wrapping)
CHAR_FACTOR = 0.52


def hex_color(value: str) -> str:
    """'#1E3A8A' -> '0.118 0.227 0.541' (PDF rg/RG operands)."""
    value = value.lstrip("#")
    r, g, b = (int(value[i : i + 2], 16) / 255.0 for i in (0, 2, 4))
    return f"{r:.3f} {g:.3f} {b:.3f}"


BLACK = "0 0 0"
WHITE = "1 1 1"


@dataclass(frozen=True)
class Column:
    key: str
    label_key: str
    weight: float
    align: str = "left"


STANDARD_COLUMNS = (
    Column("description", "pdf.description", 36),
    Column("quantity", "pdf.quantity", 8, "right"),
    Column("unit", "pdf.unit", 9),
    Column("unit_price", "pdf.unitPrice", 19, "right"),
    Column("tax_rate", "pdf.taxRate", 8, "right"),
    Column("total", "pdf.totalPrice", 20, "right"),
)


@dataclass(frozen=True)
class TemplateStyle:
    text: str = hex_color("#333333")
    muted: str = hex_color("#666666")
    accent: str = hex_color("#000000")
    header_bg: str = hex_color("#E8E8E8")
    header_text: str = hex_color("#000000")
    row_alt: str = hex_color("#F8F8F8")
    border: str = hex_color("#DDDDDD")
    box_bg: str = hex_color("#F5F5F5")
    box_border: str = hex_color("#CCCCCC")
    regular_font: str = "/F1"
    bold_font: str = "/F2"
    title_size: int = 18
    body_size: int = 10
    small_size: int = 8
    table_size: int = 9
    row_padding: int = 5
    table_border: bool = True
    box_left_bar: bool = False
    section_gap: int = 18
    columns: tuple[Column, ...] = field(default=STANDARD_COLUMNS)

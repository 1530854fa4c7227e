from __future__ import annotations

from textwrap import wrap
from typing import Iterable, Sequence

from invoice_engine.utils.pdf.core.fonts import pdf_string, text_width
from invoice_engine.utils.pdf.core.layout_common import BLACK, CHAR_FACTOR


def _fmt(value: float) -> str:
    return f"{value:.2f}".rstrip("0").rstrip(".") if value != int(value) else str(int(value))


def _draw_text(
    lines: Iterable[str],
    x: float,
    y: float,
    font: str,
    size: float,
    leading: float | None = None,
    align: str = "left",
    color: str | None = None,
) -> str:
    """Draw lines top-down starting at baseline y. For align=right x is the right edge, for center the middle."""
    out = []
    spacing = leading or (size + 2)
    if color:
        out.append(f"{color} rg ")
    for line in lines:
        text = str(line)
        if not text:
            y -= spacing
            continue
        tx = x
        if align == "right":
            tx = x - text_width(text, font, size)
        elif align == "center":
            tx = x - text_width(text, font, size) / 2
        out.append(f"BT {font} {_fmt(size)} Tf {_fmt(round(tx, 2))} {_fmt(round(y, 2))} Td ({pdf_string(text)}) Tj ET\n")
        y -= spacing
    if color:
        out.append(f"{BLACK} rg ")
    return "".join(out)


def _draw_rect(x: float, y: float, w: float, h: float, stroke: bool = True, fill: bool = False) -> str:
    if fill and stroke:
        op = "B"
    elif fill:
        op = "f"
    else:
        op = "S"
    return f"{_fmt(round(x, 2))} {_fmt(round(y, 2))} {_fmt(round(w, 2))} {_fmt(round(h, 2))} re {op}\n"


def _fill_rect(x: float, y: float, w: float, h: float, color: str) -> str:
    return f"{color} rg " + _draw_rect(x, y, w, h, stroke=False, fill=True) + f"{BLACK} rg "


def _stroke_rect(x: float, y: float, w: float, h: float, color: str, width: float = 0.5) -> str:
    return f"{color} RG {_fmt(width)} w " + _draw_rect(x, y, w, h) + f"{BLACK} RG "


def _draw_line(x1: float, y1: float, x2: float, y2: float, color: str = BLACK, width: float = 0.5, dashed: bool = False) -> str:
    dash = "[3 2] 0 d " if dashed else ""
    reset = "[] 0 d " if dashed else ""
    return (
        f"{color} RG {_fmt(width)} w {dash}{_fmt(round(x1, 2))} {_fmt(round(y1, 2))} m "
        f"{_fmt(round(x2, 2))} {_fmt(round(y2, 2))} l S {reset}{BLACK} RG\n"
    )


def _draw_image(name: str, x: float, y: float, w: float, h: float) -> str:
    return f"q {w:.2f} 0 0 {h:.2f} {x:.2f} {y:.2f} cm {name} Do Q\n"


def _draw_qr(matrix: Sequence[Sequence[bool]] | None, x: float, y: float, size: float) -> str:
    if not matrix:
        return ""
    ops = []
    rows = len(matrix)
    cols = len(matrix[0]) if rows else 0
    for r in range(rows):
        for c in range(cols):
            if matrix[r][c]:
                px = x + c * size
                py = y - (r + 1) * size  # PDF y grows up
                ops.append(_draw_rect(px, py, size, size, stroke=False, fill=True))
    return "".join(ops)


def wrap_text(text: str, width: float, size: float) -> list[str]:
    """Wrap to the column width using the average character width; never returns an empty list."""
    chars = max(1, int(width / (size * CHAR_FACTOR)))
    lines: list[str] = []
    for paragraph in str(text or "").splitlines() or [""]:
        lines.extend(wrap(paragraph, chars, break_long_words=True) or [""])
    return lines or [""]

"""
Standard Type1 fonts with WinAnsi encoding.

German and Western European text (umlauts, sharp s, euro sign) is encoded
directly; anything outside cp1252 is folded to its ASCII base letter.
Widths are Helvetica/Times approximations in 1/1000 em, good enough for
right alignment and wrapping.
"""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class StandardFont:
    resource: str  # e.g. "/F1"
    base_font: str  # e.g. "Helvetica-Bold"
    bold: bool = False
    serif: bool = False

    def pdf_object(self, obj_id: int) -> bytes:
        return (
            f"{obj_id} 0 obj << /Type /Font /Subtype /Type1 /BaseFont /{self.base_font} "
            f"/Encoding /WinAnsiEncoding >> endobj\n"
        ).encode("ascii")


FONTS: Dict[str, StandardFont] = {
    "/F1": StandardFont("/F1", "Helvetica"),
    "/F2": StandardFont("/F2", "Helvetica-Bold", bold=True),
    "/F3": StandardFont("/F3", "Times-Roman", serif=True),
    "/F4": StandardFont("/F4", "Times-Bold", bold=True, serif=True),
}

_NARROW = set("iljt.,:;|!'`()[]{} fIr-/\"")
_WIDE = set("mwMW@%")
_DIGITS = set("0123456789")


def _char_width(ch: str, font: StandardFont) -> int:
    if ch in _NARROW:
        width = 278
    elif ch in _WIDE:
        width = 833
    elif ch in _DIGITS:
        width = 556
    elif ch.isupper():
        width = 667
    else:
        width = 530
    if font.bold:
        width += 30
    if font.serif:
        width -= 40
    return width


def text_width(text: str, font: str, size: float) -> float:
    face = FONTS.get(font, FONTS["/F1"])
    units = sum(_char_width(ch, face) for ch in str(text))
    return units * float(size) / 1000.0


def encode_winansi(text: str) -> bytes:
    out = bytearray()
    for ch in str(text):
        try:
            out += ch.encode("cp1252")
        except UnicodeEncodeError:
            folded = unicodedata.normalize("NFKD", ch).encode("ascii", "ignore")
            out += folded or b"?"
    return bytes(out)


def pdf_string(text: str) -> str:
    """Literal PDF string body, ASCII-only (non-ASCII bytes as octal escapes)."""
    parts: list[str] = []
    for byte in encode_winansi(text):
        if byte in (0x28, 0x29, 0x5C):  # ( ) \
            parts.append("\\" + chr(byte))
        elif byte < 0x20 or byte > 0x7E:
            parts.append(f"\\{byte:03o}")
        else:
            parts.append(chr(byte))
    return "".join(parts)

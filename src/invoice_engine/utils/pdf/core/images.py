"""
Logo decoding for PDF embedding (Pillow).

Accepts raw bytes, base64 text or a data: URI. The image is flattened to
8-bit RGB plus an optional alpha soft mask, both Flate-compressed.
"""

from __future__ import annotations

import base64
import binascii
import io
import zlib
from dataclasses import dataclass
from typing import Optional

from PIL import Image, UnidentifiedImageError

from invoice_engine.errors import RenderError


@dataclass(frozen=True)
class PdfImage:
    name: str  # XObject resource name, e.g. "/Im1"
    width: int
    height: int
    data: bytes
    smask: Optional[bytes] = None

    def pdf_objects(self, obj_id: int) -> tuple[list[bytes], int]:
        """Return (objects, next_free_id); the image itself is `obj_id`."""
        objs: list[bytes] = []
        smask_ref = ""
        next_id = obj_id + 1
        if self.smask is not None:
            smask_id = next_id
            next_id += 1
            smask_ref = f" /SMask {smask_id} 0 R"
            objs.append(self._stream_obj(smask_id, "/DeviceGray", "", self.smask))
        objs.insert(0, self._stream_obj(obj_id, "/DeviceRGB", smask_ref, self.data))
        return objs, next_id

    def _stream_obj(self, obj_id: int, colorspace: str, extra: str, payload: bytes) -> bytes:
        return (
            f"{obj_id} 0 obj << /Type /XObject /Subtype /Image /Width {self.width} /Height {self.height} "
            f"/ColorSpace {colorspace} /BitsPerComponent 8 /Filter /FlateDecode{extra} /Length {len(payload)} >> stream\n"
        ).encode("ascii") + payload + b"\nendstream endobj\n"


def logo_bytes(logo: bytes | str) -> bytes:
    if isinstance(logo, (bytes, bytearray)):
        return bytes(logo)
    text = str(logo).strip()
    if text.startswith("data:"):
        _, _, text = text.partition(",")
    try:
        return base64.b64decode(text, validate=False)
    except (binascii.Error, ValueError) as exc:
        raise RenderError(f"Logo is not valid base64 data: {exc}") from exc


def load_logo(logo: bytes | str, name: str = "/Im1") -> PdfImage:
    raw = logo_bytes(logo)
    try:
        with Image.open(io.BytesIO(raw)) as img:
            img.load()
            rgba = img.convert("RGBA")
    except (UnidentifiedImageError, OSError) as exc:
        raise RenderError(f"Unsupported logo image: {exc}") from exc

    width, height = rgba.size
    if width <= 0 or height <= 0:
        raise RenderError("Logo image has no pixels")

    rgb = rgba.convert("RGB")
    alpha = rgba.getchannel("A")
    smask = None
    if alpha.getextrema() != (255, 255):
        smask = zlib.compress(alpha.tobytes())
    return PdfImage(name=name, width=width, height=height, data=zlib.compress(rgb.tobytes()), smask=smask)

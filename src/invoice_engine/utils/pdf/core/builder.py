"""
PDF object builder: assembles page content streams, fonts and images into PDF bytes.
"""

from __future__ import annotations

from typing import List, Sequence

from invoice_engine.utils.pdf.core import fonts
from invoice_engine.utils.pdf.core.images import PdfImage
from invoice_engine.utils.pdf.core.layout_common import PAGE_H, PAGE_W


def build_pdf_bytes(content_streams: List[str], images: Sequence[PdfImage] = (), page_size=(PAGE_W, PAGE_H), title: str = "") -> bytes:
    """
    Given list of page content streams (str), return ready-to-write PDF bytes.
    No timestamps or ids are written, so equal input gives equal bytes.
    """
    streams_bytes = [s.encode("ascii", "ignore") for s in content_streams]

    next_obj_id = 3
    font_objs: list[bytes] = []
    font_refs: list[str] = []
    for resource, font in fonts.FONTS.items():
        font_objs.append(font.pdf_object(next_obj_id))
        font_refs.append(f"{resource} {next_obj_id} 0 R")
        next_obj_id += 1

    image_objs: list[bytes] = []
    image_refs: list[str] = []
    for image in images:
        objs, following = image.pdf_objects(next_obj_id)
        image_objs.extend(objs)
        image_refs.append(f"{image.name} {next_obj_id} 0 R")
        next_obj_id = following

    resources = f"/Font << {' '.join(font_refs)} >>"
    if image_refs:
        resources += f" /XObject << {' '.join(image_refs)} >>"

    page_objs: list[bytes] = []
    pages_kids: list[int] = []
    for stream in streams_bytes:
        content_id = next_obj_id
        page_id = next_obj_id + 1
        pages_kids.append(page_id)
        page_objs.append(
            f"{content_id} 0 obj << /Length {len(stream)} >> stream\n".encode("ascii") + stream + b"\nendstream endobj\n"
        )
        page_objs.append(
            f"{page_id} 0 obj << /Type /Page /Parent 2 0 R /MediaBox [0 0 {page_size[0]} {page_size[1]}] "
            f"/Contents {content_id} 0 R /Resources << {resources} >> >> endobj\n".encode("ascii")
        )
        next_obj_id += 2

    info_objs: list[bytes] = []
    info_ref = ""
    if title:
        info_objs.append(f"{next_obj_id} 0 obj << /Title ({fonts.pdf_string(title)}) /Producer (invoice_engine) >> endobj\n".encode("ascii"))
        info_ref = f" /Info {next_obj_id} 0 R"

    kids_ref = " ".join(f"{kid} 0 R" for kid in pages_kids)
    pages_obj = f"2 0 obj << /Type /Pages /Count {len(pages_kids)} /Kids [{kids_ref}] >> endobj\n".encode("ascii")
    catalog_obj = b"1 0 obj << /Type /Catalog /Pages 2 0 R >> endobj\n"

    objs = [catalog_obj, pages_obj] + font_objs + image_objs + page_objs + info_objs

    header = b"%PDF-1.4\n"
    offsets = [0]
    pdf_body = bytearray()
    current_offset = len(header)
    for obj in objs:
        offsets.append(current_offset)
        pdf_body += obj
        current_offset += len(obj)

    xref_entries = ["0000000000 65535 f \n"] + [_format_xref_entry(off) for off in offsets[1:]]
    xref = ("xref\n0 %d\n" % len(offsets)).encode("ascii") + "".join(xref_entries).encode("ascii")
    startxref = len(header) + len(pdf_body)
    trailer = f"trailer << /Size {len(offsets)} /Root 1 0 R{info_ref} >>\nstartxref\n{startxref}\n%%EOF\n".encode("ascii")

    return header + bytes(pdf_body) + xref + trailer


def _format_xref_entry(offset: int) -> str:
    return f"{offset:010d} 00000 n \n"

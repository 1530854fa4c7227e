"""
Post-layout pagination.

Sections are turned into measured blocks first; the paginator then places
them top-down and opens a new page whenever the next block does not fit
above the footer. Table rows carry their header block so it is repeated at
the top of every continuation page.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from invoice_engine.utils.pdf.core.layout_common import CONTENT_BOTTOM, CONTENT_TOP

logger = logging.getLogger(__name__)


@dataclass
class Block:
    height: float
    draw: Callable[[float], str]  # top y -> content stream ops
    min_space: float = 0.0  # keep-with-next: space required below the current y
    repeat_header: Optional["Block"] = None
    name: str = ""

    @property
    def required(self) -> float:
        return max(self.height, self.min_space)


def spacer(height: float) -> Block:
    return Block(height=height, draw=lambda top: "", name="spacer")


def paginate(blocks: Iterable[Block], top: float = CONTENT_TOP, bottom: float = CONTENT_BOTTOM) -> list[list[str]]:
    pages: list[list[str]] = [[]]
    y = top
    for block in blocks:
        at_page_top = y >= top
        if not at_page_top and y - block.required < bottom:
            pages.append([])
            y = top
            if block.name == "spacer":
                continue
            if block.repeat_header is not None:
                pages[-1].append(block.repeat_header.draw(y))
                y -= block.repeat_header.height
        if y - block.height < bottom - 0.01:
            logger.warning("Block %s (%.1fpt) does not fit on page %d and overlaps the footer", block.name or "?", block.height, len(pages))
        pages[-1].append(block.draw(y))
        y -= block.height
    return pages

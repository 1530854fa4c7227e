"""
Aspect-ratio preserving logo fitting.

Width is clamped first, then the resulting height is re-checked, so both
bounds hold at once for any logo shape.
"""

from __future__ import annotations

from dataclasses import dataclass

from invoice_engine.core.models.document import LogoConfig


@dataclass(frozen=True)
class LogoBox:
    width: float
    height: float
    x_offset: float
    y_offset: float


def fit(original_width: float, original_height: float, max_width: float, max_height: float) -> tuple[float, float]:
    if original_width <= 0 or original_height <= 0:
        raise ValueError("Logo dimensions must be positive")
    if max_width <= 0 or max_height <= 0:
        raise ValueError("Logo bounds must be positive")

    aspect_ratio = float(original_width) / float(original_height)
    width = float(original_width)
    height = float(original_height)

    if width > max_width:
        width = float(max_width)
        height = width / aspect_ratio

    if height > max_height:
        height = float(max_height)
        width = height * aspect_ratio

    return width, height


def place(width: float, height: float, config: LogoConfig) -> tuple[float, float]:
    """Offset of the fitted logo from the container's bottom-left corner (PDF y grows up)."""
    free_x = max(0.0, float(config.container_width) - width)
    free_y = max(0.0, float(config.container_height) - height)

    if config.alignment == "left":
        x = 0.0
    elif config.alignment == "center":
        x = free_x / 2
    else:
        x = free_x

    if config.vertical_alignment == "top":
        y = free_y
    elif config.vertical_alignment == "bottom":
        y = 0.0
    else:
        y = free_y / 2
    return x, y


def layout_logo(original_width: float, original_height: float, config: LogoConfig) -> LogoBox:
    width, height = fit(original_width, original_height, config.max_width, config.max_height)
    x, y = place(width, height, config)
    return LogoBox(width=width, height=height, x_offset=x, y_offset=y)

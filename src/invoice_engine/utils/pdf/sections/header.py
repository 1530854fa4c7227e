from __future__ import annotations

from invoice_engine.core.calculations.logo_layout import layout_logo
from invoice_engine.core.models.document import Party
from invoice_engine.utils.pdf.core.context import RenderContext
from invoice_engine.utils.pdf.core.drawing import _draw_image, _draw_line, _draw_text
from invoice_engine.utils.pdf.core.flow import Block


def build_vendor_lines(vendor: Party) -> list[str]:
    address = vendor.address
    lines = []
    if address.street:
        lines.append(address.street)
    if address.zip or address.city:
        lines.append(f"{address.zip} {address.city}".strip())
    if address.country:
        lines.append(address.country)
    if vendor.phone:
        lines.append(f"Tel: {vendor.phone}")
    return lines


def render_logo(ctx: RenderContext, container_x: float, container_top: float) -> str:
    """Fitted logo placed inside its container box whose top-left corner is given."""
    if ctx.logo is None or ctx.logo_config is None:
        return ""
    box = layout_logo(ctx.logo.width, ctx.logo.height, ctx.logo_config)
    container_y = container_top - float(ctx.logo_config.container_height)
    return _draw_image(ctx.logo.name, container_x + box.x_offset, container_y + box.y_offset, box.width, box.height)


def logo_height(ctx: RenderContext) -> float:
    if ctx.logo is None or ctx.logo_config is None:
        return 0.0
    return float(ctx.logo_config.container_height)


def header_block(ctx: RenderContext, rule: bool = True) -> Block:
    """Vendor identity on the left, logo container on the right edge."""
    style = ctx.style
    vendor = ctx.document.vendor
    name_size = style.title_size - 2
    lines = build_vendor_lines(vendor)
    text_h = name_size + 6 + len(lines) * (style.body_size + 3)
    height = max(text_h, logo_height(ctx)) + (12 if rule else 4)

    def draw(top: float) -> str:
        parts: list[str] = []
        name = ctx.or_placeholder(vendor.name, ctx.t("pdf.placeholderVendor"))
        parts.append(_draw_text([name], ctx.x, top - name_size, style.bold_font, name_size, color=style.accent))
        parts.append(_draw_text(lines, ctx.x, top - name_size - 6 - style.body_size, style.regular_font, style.body_size, leading=style.body_size + 3, color=style.muted))
        if ctx.logo_config is not None:
            parts.append(render_logo(ctx, ctx.right - float(ctx.logo_config.container_width), top))
        if rule:
            parts.append(_draw_line(ctx.x, top - height + 6, ctx.right, top - height + 6, style.border, 0.8))
        return "".join(parts)

    return Block(height=height, draw=draw, name="header")

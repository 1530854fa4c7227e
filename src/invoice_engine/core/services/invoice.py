"""
Document assembler: snapshot, validate, resolve currencies, aggregate taxes,
render with the selected template and build the PDF bytes.
"""

from __future__ import annotations

import asyncio
import copy
import logging
import re
from pathlib import Path
from typing import Mapping, Optional

from invoice_engine.core.calculations.currency import primary_currency, resolve_currency
from invoice_engine.core.calculations.tax_aggregator import aggregate
from invoice_engine.core.models.document import Document
from invoice_engine.core.services.company import load_company_currencies
from invoice_engine.core.services.labels import Translate, load_labels
from invoice_engine.core.services.validation import validate_document
from invoice_engine.errors import InvoiceEngineError, RenderError
from invoice_engine.utils.pdf.core.builder import build_pdf_bytes
from invoice_engine.utils.pdf.templates.base import RenderedDocument
from invoice_engine.utils.pdf.templates.registry import DEFAULT_TEMPLATE, TemplateName, get_renderer, template_names

logger = logging.getLogger(__name__)


def _template_value(template_name) -> str:
    if isinstance(template_name, TemplateName):
        return template_name.value
    return str(template_name).strip().lower()


def render_document(
    document: Document,
    template_name: str | TemplateName | None = None,
    translate: Optional[Translate] = None,
    *,
    labels: Optional[dict] = None,
    company_currencies: Optional[Mapping[str, str]] = None,
    final: bool = True,
) -> RenderedDocument:
    """
    Full pipeline; returns the rendered pages, totals and PDF bytes.
    Raises ValidationError before rendering, RenderError when the PDF backend fails.
    """
    snapshot = copy.deepcopy(document)
    snapshot = snapshot.with_template(_template_value(template_name or snapshot.template_name or DEFAULT_TEMPLATE))
    validate_document(snapshot, known_templates=template_names())

    table = company_currencies if company_currencies is not None else load_company_currencies()
    catalogue = labels if labels is not None else load_labels()
    items = snapshot.usable_items
    currencies = [resolve_currency(item, snapshot.vendor, snapshot.recipient, table, snapshot.materials) for item in items]
    distinct = sorted(set(currencies))
    if len(distinct) > 1:
        logger.warning(
            "Invoice %s mixes currencies %s; amounts are summed without conversion and labelled %s",
            snapshot.invoice_number,
            ", ".join(distinct),
            primary_currency(currencies),
        )
    summary = aggregate(items)
    logger.debug("Invoice %s tax groups: %s", snapshot.invoice_number, [str(g.tax_rate_percent) for g in summary.groups])

    renderer = get_renderer(snapshot.template_name)
    try:
        rendered = renderer.render(
            snapshot,
            translate,
            labels=catalogue,
            company_currencies=table,
            item_currencies=currencies,
            summary=summary,
        )
        title = f"{'Invoice' if final else 'Preview'} {snapshot.invoice_number}"
        rendered.pdf_bytes = build_pdf_bytes(rendered.pages, rendered.images, title=title)
    except InvoiceEngineError:
        raise
    except Exception as exc:
        raise RenderError(f"{type(exc).__name__}: {exc}", template=renderer.name) from exc

    logger.info(
        "%s invoice %s with template %s: %d page(s), gross %s %s",
        "Generated" if final else "Previewed (non-final)",
        snapshot.invoice_number,
        renderer.name,
        rendered.page_count,
        summary.gross,
        rendered.currency,
    )
    return rendered


def generate(document: Document, template_name: str | TemplateName | None = None, translate: Optional[Translate] = None, **kwargs) -> bytes:
    return render_document(document, template_name, translate, **kwargs).pdf_bytes


def preview(document: Document, template_name: str | TemplateName | None = None, translate: Optional[Translate] = None, **kwargs) -> bytes:
    """Same output as generate(); only logged as a non-final preview."""
    return render_document(document, template_name, translate, final=False, **kwargs).pdf_bytes


async def generate_async(document: Document, template_name: str | TemplateName | None = None, translate: Optional[Translate] = None, **kwargs) -> bytes:
    return await asyncio.to_thread(generate, document, template_name, translate, **kwargs)


def default_filename(document: Document) -> str:
    stem = re.sub(r"[^A-Za-z0-9._-]+", "_", str(document.invoice_number or "").strip()).strip("._")
    return f"{stem or 'invoice'}.pdf"


def save_pdf(path: Path | str, document: Document, template_name: str | TemplateName | None = None, translate: Optional[Translate] = None, **kwargs) -> Path:
    """Render and write the PDF; a directory path gets `<invoice_number>.pdf`. Nothing is written on failure."""
    target = Path(path)
    if target.is_dir():
        target = target / default_filename(document)
    data = generate(document, template_name, translate, **kwargs)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(data)
    logger.debug("Wrote %d bytes to %s", len(data), target)
    return target


async def save_pdf_async(path: Path | str, document: Document, template_name: str | TemplateName | None = None, translate: Optional[Translate] = None, **kwargs) -> Path:
    return await asyncio.to_thread(save_pdf, path, document, template_name, translate, **kwargs)

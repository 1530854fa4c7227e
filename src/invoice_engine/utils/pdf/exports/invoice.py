from __future__ import annotations

from pathlib import Path
from typing import Optional

from invoice_engine.core.models.document import Document
from invoice_engine.core.services.invoice import save_pdf
from invoice_engine.core.services.labels import Translate


def export_invoice_pdf(path: Path | str, document: Document, template_name: Optional[str] = None, translate: Optional[Translate] = None, **kwargs) -> Path:
    """
    Wrapper for writing an invoice PDF to disk; returns the written path.
    """
    return save_pdf(path, document, template_name, translate, **kwargs)

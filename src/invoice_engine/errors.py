"""
Exceptions raised by the invoice engine.

ValidationError is raised before any rendering work starts and is always
recoverable by fixing the document. RenderError wraps a failure of the PDF
backend (logo decoding, fonts, assembly); the render is atomic.
"""

from __future__ import annotations

from typing import Iterable


class InvoiceEngineError(Exception):
    """Base class for all engine errors."""


class ValidationError(InvoiceEngineError):
    def __init__(self, problems: Iterable[str] | str):
        if isinstance(problems, str):
            problems = [problems]
        self.problems: list[str] = [str(p) for p in problems]
        super().__init__("; ".join(self.problems) or "Invalid document")


class RenderError(InvoiceEngineError):
    def __init__(self, message: str, template: str | None = None):
        self.template = template
        prefix = f"PDF generation failed ({template})" if template else "PDF generation failed"
        super().__init__(f"{prefix}: {message}")

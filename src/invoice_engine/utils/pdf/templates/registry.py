"""
Template registry: template name -> renderer class, fixed at import time.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Type

from invoice_engine.errors import ValidationError
from invoice_engine.utils.pdf.templates.allrauer import AllrauerRenderer
from invoice_engine.utils.pdf.templates.base import TemplateRenderer
from invoice_engine.utils.pdf.templates.business_green import BusinessGreenRenderer
from invoice_engine.utils.pdf.templates.business_standard import BusinessStandardRenderer
from invoice_engine.utils.pdf.templates.classic import ClassicRenderer
from invoice_engine.utils.pdf.templates.professional import ProfessionalRenderer


class TemplateName(str, Enum):
    BUSINESS_STANDARD = "businessstandard"
    CLASSIC = "classic"
    PROFESSIONAL = "professional"
    BUSINESS_GREEN = "businessgreen"
    ALLRAUER2 = "allrauer2"


DEFAULT_TEMPLATE = TemplateName.BUSINESS_STANDARD

TEMPLATES: Dict[TemplateName, Type[TemplateRenderer]] = {
    TemplateName.BUSINESS_STANDARD: BusinessStandardRenderer,
    TemplateName.CLASSIC: ClassicRenderer,
    TemplateName.PROFESSIONAL: ProfessionalRenderer,
    TemplateName.BUSINESS_GREEN: BusinessGreenRenderer,
    TemplateName.ALLRAUER2: AllrauerRenderer,
}


def template_names() -> list[str]:
    return [name.value for name in TemplateName]


def resolve_template_name(name: str | TemplateName | None) -> TemplateName:
    if isinstance(name, TemplateName):
        return name
    key = str(name or "").strip().lower()
    if not key:
        return DEFAULT_TEMPLATE
    try:
        return TemplateName(key)
    except ValueError:
        raise ValidationError(
            [f'Template "{name}" not found. Available templates: {", ".join(template_names())}']
        ) from None


def get_renderer(name: str | TemplateName | None) -> TemplateRenderer:
    return TEMPLATES[resolve_template_name(name)]()

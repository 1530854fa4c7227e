from __future__ import annotations

from invoice_engine.core.models.document import Document, DocumentMode, Party
from invoice_engine.errors import ValidationError

REQUIRED_PARTY_FIELDS = {
    "name": lambda p: p.name,
    "street": lambda p: p.address.street,
    "zip": lambda p: p.address.zip,
    "city": lambda p: p.address.city,
}


def _party_problems(party: Party | None, role: str) -> list[str]:
    if party is None:
        return [f"{role.capitalize()} information is required"]
    missing = [name for name, getter in REQUIRED_PARTY_FIELDS.items() if not str(getter(party) or "").strip()]
    if missing:
        return [f"{role.capitalize()} address information is incomplete (missing {', '.join(missing)})"]
    return []


ITEM_AMOUNT_FIELDS = {
    "quantity": "quantity",
    "unit price": "unit_price",
    "tax rate": "tax_rate_percent",
}


def _item_problems(document: Document) -> list[str]:
    problems = []
    for position, item in enumerate(document.usable_items, start=1):
        bad = [label for label, attr in ITEM_AMOUNT_FIELDS.items() if not getattr(item, attr).is_finite()]
        if bad:
            problems.append(f"Item {position} has an invalid {', '.join(bad)}")
    return problems


def collect_problems(document: Document, known_templates=None) -> list[str]:
    problems: list[str] = []
    if not isinstance(document.mode, DocumentMode):
        problems.append("Valid mode (MM or FI) is required")
    if not str(document.invoice_number or "").strip():
        problems.append("Invoice number is required")
    if not document.invoice_date:
        problems.append("Invoice date is required")
    problems.extend(_party_problems(document.vendor, "vendor"))
    problems.extend(_party_problems(document.recipient, "recipient"))
    if not document.usable_items:
        problems.append("At least one item is required")
    problems.extend(_item_problems(document))
    if known_templates is not None and document.template_name not in known_templates:
        problems.append(
            f'Template "{document.template_name}" not found. Available templates: {", ".join(known_templates)}'
        )
    if document.logo_config is not None:
        problems.extend(document.logo_config.problems())
    return problems


def validate_document(document: Document, known_templates=None) -> Document:
    """Raise ValidationError listing every problem; return the document unchanged otherwise."""
    problems = collect_problems(document, known_templates)
    if problems:
        raise ValidationError(problems)
    return document

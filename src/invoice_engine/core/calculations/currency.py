"""
Currency resolution and money formatting.

Amounts are never converted between currencies: a document that mixes
currencies is summed nominally and labelled with its primary currency.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Mapping, Sequence

from invoice_engine.core.models.document import LineItem, Material, Party, to_decimal
from invoice_engine.core.services.company import DEFAULT_COMPANY_CURRENCIES, FALLBACK_CURRENCY

CENT = Decimal("0.01")

# currencies printed with en-style separators (1,234.56); all others use de-style (1.234,56)
EN_STYLE_CURRENCIES = {"GBP", "USD"}


def _material_lookup(materials: Iterable[Material] | Mapping[str, Material] | None) -> Mapping[str, Material]:
    if not materials:
        return {}
    if isinstance(materials, Mapping):
        return materials
    return {m.material_reference: m for m in materials}


def resolve_currency(
    item: LineItem,
    vendor: Party | None,
    recipient: Party | None,
    company_currencies: Mapping[str, str] | None = None,
    materials: Iterable[Material] | Mapping[str, Material] | None = None,
    party: str = "recipient",
) -> str:
    """
    Effective currency of one line item, first match wins:
    explicit item currency, referenced material currency, company code of the
    chosen party ("recipient" or "vendor"), EUR.
    """
    explicit = (item.currency or "").strip().upper()
    if explicit:
        return explicit

    material = _material_lookup(materials).get(item.material_reference or "")
    if material is not None and (material.currency or "").strip():
        return material.currency.strip().upper()

    owner = vendor if party == "vendor" else recipient
    code = (owner.company_code or "").strip() if owner is not None else ""
    if code:
        table = company_currencies if company_currencies is not None else DEFAULT_COMPANY_CURRENCIES
        return table.get(code, FALLBACK_CURRENCY)
    return FALLBACK_CURRENCY


def primary_currency(currencies: Sequence[str]) -> str:
    """Most frequent currency; ties go to the one seen first."""
    counts: dict[str, int] = {}
    for code in currencies:
        if code:
            counts[code] = counts.get(code, 0) + 1
    if not counts:
        return FALLBACK_CURRENCY
    best = None
    for code, count in counts.items():
        if best is None or count > counts[best]:
            best = code
    return best


def currency_locale(currency: str) -> str:
    return "en" if (currency or "").upper() in EN_STYLE_CURRENCIES else "de"


def format_decimal(value, locale: str = "de", places: int = 2) -> str:
    quantum = Decimal(1).scaleb(-places)
    number = to_decimal(value).quantize(quantum, rounding=ROUND_HALF_UP)
    text = f"{number:,.{places}f}"
    if locale == "de":
        text = text.replace(",", "\x00").replace(".", ",").replace("\x00", ".")
    return text


def format_money(amount, currency: str) -> str:
    code = (currency or FALLBACK_CURRENCY).upper()
    return f"{format_decimal(amount, currency_locale(code))} {code}"


def format_quantity(value, locale: str = "de") -> str:
    number = to_decimal(value)
    if number == number.to_integral_value():
        return str(int(number))
    text = format(number.normalize(), "f")
    return text.replace(".", ",") if locale == "de" else text


def format_rate(value, locale: str = "de") -> str:
    return f"{format_quantity(value, locale)} %"

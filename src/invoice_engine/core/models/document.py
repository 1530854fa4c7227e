from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Optional


def to_decimal(value: Any, default: str = "0", invalid: Optional[str] = None) -> Decimal:
    """
    Normalize int/float/str/Decimal to Decimal (floats go through str to keep 129.99 exact).
    Unparseable input yields `invalid` when given, else `default`.
    """
    if isinstance(value, Decimal):
        number = value
    elif value is None or value == "":
        return Decimal(default)
    else:
        if isinstance(value, float):
            value = repr(value)
        try:
            number = Decimal(str(value).strip().replace(",", "."))
        except (InvalidOperation, ValueError):
            return Decimal(invalid if invalid is not None else default)
    # signalling NaN would raise on plain comparisons
    return Decimal("NaN") if number.is_snan() else number


class DocumentMode(str, Enum):
    MM = "MM"  # goods / order flow
    FI = "FI"  # financial / service flow


@dataclass(frozen=True)
class Address:
    street: str = ""
    zip: str = ""
    city: str = ""
    country: str = ""


@dataclass(frozen=True)
class Party:
    """Vendor or recipient of an invoice."""

    name: str
    address: Address = field(default_factory=Address)
    company_code: str = "1000"
    iban: str = ""
    bic: str = ""
    bank_name: str = ""
    vat_number: str = ""
    tax_number: str = ""
    registration: str = ""
    phone: str = ""
    fax: str = ""
    email: str = ""
    url: str = ""
    customer_id: str = ""


@dataclass(frozen=True)
class Material:
    material_reference: str
    description: str = ""
    currency: str = ""


@dataclass(frozen=True)
class LineItem:
    material_reference: str = ""
    description: str = ""
    quantity: Decimal = Decimal("0")
    unit: str = "ST"
    unit_price: Decimal = Decimal("0")
    tax_rate_percent: Decimal = Decimal("19")
    currency: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "quantity", to_decimal(self.quantity, invalid="NaN"))
        object.__setattr__(self, "unit_price", to_decimal(self.unit_price, invalid="NaN"))
        object.__setattr__(self, "tax_rate_percent", to_decimal(self.tax_rate_percent, invalid="NaN"))
        object.__setattr__(self, "currency", (self.currency or "").strip().upper())

    @property
    def line_total(self) -> Decimal:
        return self.quantity * self.unit_price

    @property
    def is_usable(self) -> bool:
        # blank form rows are dropped before aggregation and rendering
        return bool((self.description or "").strip()) or self.quantity != 0


ALIGNMENTS = ("left", "center", "right")
VERTICAL_ALIGNMENTS = ("top", "middle", "bottom")

_LOGO_DEFAULT = dict(max_width=300.0, max_height=60.0, container_width=320.0, container_height=70.0)

# Per-template defaults; business-standard uses a smaller letterhead slot.
LOGO_DEFAULTS: dict[str, dict] = {
    "businessstandard": dict(max_width=240.0, max_height=50.0, container_width=260.0, container_height=60.0, alignment="right"),
    "professional": dict(_LOGO_DEFAULT, alignment="right"),
    "businessgreen": dict(_LOGO_DEFAULT, alignment="right"),
    "classic": dict(_LOGO_DEFAULT, alignment="right"),
    "allrauer2": dict(_LOGO_DEFAULT, alignment="center"),
}


@dataclass(frozen=True)
class LogoConfig:
    max_width: float = 240.0
    max_height: float = 50.0
    container_width: float = 260.0
    container_height: float = 60.0
    alignment: str = "right"
    vertical_alignment: str = "middle"

    @classmethod
    def for_template(cls, template_name: str, **overrides) -> "LogoConfig":
        """Template default with caller overrides; unknown templates use the business-standard slot."""
        base = dict(LOGO_DEFAULTS.get(str(template_name), LOGO_DEFAULTS["businessstandard"]))
        base.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**base)

    def problems(self) -> list[str]:
        out = []
        for name in ("max_width", "max_height", "container_width", "container_height"):
            if not float(getattr(self, name)) > 0:
                out.append(f"Logo {name} must be positive")
        if self.alignment not in ALIGNMENTS:
            out.append(f"Logo alignment must be one of {', '.join(ALIGNMENTS)}")
        if self.vertical_alignment not in VERTICAL_ALIGNMENTS:
            out.append(f"Logo vertical alignment must be one of {', '.join(VERTICAL_ALIGNMENTS)}")
        return out


@dataclass(frozen=True)
class Document:
    """Invoice document as handed over by the form layer."""

    mode: DocumentMode
    invoice_number: str
    invoice_date: date | str
    vendor: Party
    recipient: Party
    items: tuple[LineItem, ...] = ()
    customer_number: str = ""
    processor: str = ""
    payment_terms: str = ""
    order_number: str = ""
    order_date: Optional[date | str] = None
    delivery_note_number: str = ""
    delivery_date: Optional[date | str] = None
    materials: tuple[Material, ...] = ()
    logo: Optional[bytes | str] = None
    logo_config: Optional[LogoConfig] = None
    template_name: str = "businessstandard"
    language: str = ""
    payment_qr: bool = False

    def __post_init__(self) -> None:
        mode = self.mode
        if isinstance(mode, str) and not isinstance(mode, DocumentMode):
            try:
                mode = DocumentMode(mode.strip().upper())
            except ValueError:
                pass
        object.__setattr__(self, "mode", mode)
        object.__setattr__(self, "items", tuple(self.items or ()))
        object.__setattr__(self, "materials", tuple(self.materials or ()))

    @property
    def usable_items(self) -> list[LineItem]:
        return [item for item in self.items if item.is_usable]

    @property
    def is_mm(self) -> bool:
        return self.mode == DocumentMode.MM

    def with_template(self, template_name: str) -> "Document":
        return replace(self, template_name=template_name)

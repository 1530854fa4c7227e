"""
EPC ("GiroCode") payment QR helper built on the `qrcode` library.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Sequence

import qrcode

from invoice_engine.core.models.document import Party, to_decimal

EPC_MAX_AMOUNT = Decimal("999999999.99")


def epc_payload(vendor: Party, amount, reference: str, currency: str = "EUR") -> Optional[str]:
    """SEPA credit transfer payload (EPC069-12 v002); None when it cannot be encoded."""
    iban = (vendor.iban or "").replace(" ", "").upper()
    name = (vendor.name or "").strip()[:70]
    value = to_decimal(amount).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    if not iban or not name or currency != "EUR":
        return None
    if value <= 0 or value > EPC_MAX_AMOUNT:
        return None
    lines = [
        "BCD",
        "002",
        "1",
        "SCT",
        (vendor.bic or "").replace(" ", "").upper(),
        name,
        iban,
        f"EUR{value}",
        "",
        "",
        (reference or "").strip()[:140],
    ]
    return "\n".join(lines)


def make_qr_matrix(data: str) -> Sequence[Sequence[bool]]:
    # EPC requires error correction level M
    qr = qrcode.QRCode(border=1, box_size=1, error_correction=qrcode.constants.ERROR_CORRECT_M)
    qr.add_data(data)
    qr.make(fit=True)
    return qr.get_matrix()


def payment_qr_matrix(vendor: Party, amount, reference: str, currency: str) -> Optional[Sequence[Sequence[bool]]]:
    payload = epc_payload(vendor, amount, reference, currency)
    if payload is None:
        return None
    return make_qr_matrix(payload)

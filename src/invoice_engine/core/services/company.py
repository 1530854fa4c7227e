from __future__ import annotations

import json
import logging
from pathlib import Path

from invoice_engine.core.services.data_files import data_path

logger = logging.getLogger(__name__)

COMPANY_CODES_FILE = "company_codes.json"

DEFAULT_COMPANY_CURRENCIES: dict[str, str] = {
    "1000": "EUR",
    "2000": "GBP",
    "3000": "CHF",
}

DEFAULT_COMPANY_LANGUAGES: dict[str, str] = {
    "1000": "de",
    "2000": "en",
    "3000": "de",
}

FALLBACK_CURRENCY = "EUR"
FALLBACK_LANGUAGE = "de"


def load_company_currencies(path: Path | None = None) -> dict[str, str]:
    """
    Company code -> home currency. A JSON file ({"2000": "GBP", ...}) extends the defaults.
    """
    table = dict(DEFAULT_COMPANY_CURRENCIES)
    target = path or data_path(COMPANY_CODES_FILE)
    if not target.exists():
        return table
    try:
        data = json.loads(target.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring unreadable company code table %s: %s", target, exc)
        return table
    raw = data.get("currencies", data) if isinstance(data, dict) else {}
    for code, currency in raw.items():
        code = str(code).strip()
        currency = str(currency or "").strip().upper()
        if code and currency:
            table[code] = currency
    return table


def company_language(company_code: str | None) -> str:
    return DEFAULT_COMPANY_LANGUAGES.get(str(company_code or "").strip(), FALLBACK_LANGUAGE)

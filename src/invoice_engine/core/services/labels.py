from __future__ import annotations

import json
from pathlib import Path
from typing import Callable, Dict, Optional

from invoice_engine.core.services.data_files import data_path

LABELS_FILE = "labels.json"

Translate = Callable[[str], str]

DEFAULT_LABELS: Dict[str, Dict[str, str]] = {
    "de": {
        "pdf.invoice": "Rechnung",
        "pdf.financialInvoice": "Finanzrechnung",
        "pdf.invoiceNumber": "Rechnungsnr.",
        "pdf.invoiceDate": "Rechnungsdatum",
        "pdf.orderNumber": "Bestellnr.",
        "pdf.orderDate": "Bestelldatum",
        "pdf.deliveryNoteNumber": "Lieferscheinnr.",
        "pdf.deliveryDate": "Lieferdatum",
        "pdf.customerNumber": "Kundennummer",
        "pdf.processor": "Sachbearbeiter",
        "pdf.contactVatId": "USt-ID",
        "pdf.billTo": "Rechnungsempfänger",
        "pdf.position": "Pos.",
        "pdf.description": "Bezeichnung",
        "pdf.noDescription": "Ohne Beschreibung",
        "pdf.quantity": "Menge",
        "pdf.unit": "Einheit",
        "pdf.unitPrice": "Einzelpreis",
        "pdf.taxRate": "MwSt.",
        "pdf.totalPrice": "Gesamtpreis",
        "pdf.net": "Zwischensumme (netto)",
        "pdf.vat": "Umsatzsteuer",
        "pdf.total": "Rechnungsbetrag (brutto)",
        "pdf.salutation": "Sehr geehrte Damen und Herren,",
        "pdf.introText": "hiermit stellen wir Ihnen die nachfolgend aufgeführten Leistungen in Rechnung:",
        "pdf.closing": "Mit freundlichen Grüßen",
        "pdf.paymentTerms": "Zahlungsbedingungen",
        "pdf.defaultPayment": "Bitte überweisen Sie den Rechnungsbetrag auf unser unten angegebenes Konto.",
        "pdf.contactAvailable": "Für Rückfragen steht Ihnen",
        "pdf.contactAvailableSuffix": "gerne zur Verfügung.",
        "pdf.invoiceInformation": "Information zur Rechnung",
        "pdf.thankYouOrder": "Wir danken Ihnen für Ihren Auftrag. Diese Rechnung ist gemäß unseren aktuellen Geschäftsbedingungen zu bezahlen",
        "pdf.bankDetails": "Bankverbindung",
        "pdf.businessDetails": "Geschäftsangaben",
        "pdf.contact": "Kontakt",
        "pdf.taxNumber": "Steuernr.",
        "pdf.vatNumber": "USt-IdNr.",
        "pdf.phone": "Tel",
        "pdf.fax": "Fax",
        "pdf.contactEmail": "E-Mail",
        "pdf.contactWeb": "Web",
        "pdf.page": "Seite",
        "pdf.pageOf": "von",
        "pdf.signature": "Unterschrift / Firmenstempel",
        "pdf.electronicNote": "Diese Rechnung wurde elektronisch erstellt und ist auch ohne Unterschrift gültig.",
        "pdf.issuedOn": "Ausgestellt am",
        "pdf.scanToPay": "Zahlen per QR-Code",
        "pdf.placeholderVendor": "Ihr Unternehmen",
        "pdf.placeholderRecipient": "Empfängername",
        "allrauer.invoice": "Rechnung",
        "allrauer.invoiceNumber": "RechnungsNr.",
        "allrauer.invoiceDate": "Rechnungsdatum",
        "allrauer.deliveryNoteNumber": "LieferscheinNr.",
        "allrauer.deliveryDate": "Lieferdatum",
        "allrauer.orderDate": "Auftragsdatum",
        "allrauer.customerNumber": "Ihre Kundennummer",
        "allrauer.orderNumber": "Ihre Bestellnummer",
        "allrauer.vatId": "Ihre USTID",
        "allrauer.processor": "Ihr Bearbeiter",
        "allrauer.termsText1": "Für alle Warenhandelsgeschäfte gelten unsere umseitig aufgeführten AGB. Lieferzeiten sind unverbindliche Angaben!",
        "allrauer.termsText2": "Rücksendungen ohne Fehlerbeschreibung und RMA. Nummer können nicht bearbeitet werden!",
        "allrauer.termsText3": "",
        "allrauer.description": "Bezeichnung",
        "allrauer.quantity": "Menge",
        "allrauer.unit": "Einheit",
        "allrauer.rate": "Satz",
        "allrauer.unitPrice": "Einzelpreis",
        "allrauer.totalPrice": "Gesamtpreis",
        "allrauer.net": "Netto",
        "allrauer.vatRate": "MwSt-Satz",
        "allrauer.vat": "MwSt",
        "allrauer.gross": "Brutto",
        "allrauer.total": "Gesamt",
        "allrauer.paymentText1": "Überweisen Sie bitte den ausstehenden Betrag von",
        "allrauer.paymentText2": "auf eins der unten angegebenen Konten.",
        "allrauer.bankConnections": "Bankverbindungen",
    },
    "en": {
        "pdf.invoice": "Invoice",
        "pdf.financialInvoice": "Financial Invoice",
        "pdf.invoiceNumber": "Invoice No.",
        "pdf.invoiceDate": "Invoice Date",
        "pdf.orderNumber": "Order No.",
        "pdf.orderDate": "Order Date",
        "pdf.deliveryNoteNumber": "Delivery Note No.",
        "pdf.deliveryDate": "Delivery Date",
        "pdf.customerNumber": "Customer No.",
        "pdf.processor": "Processed by",
        "pdf.contactVatId": "VAT ID",
        "pdf.billTo": "Bill To",
        "pdf.position": "Pos.",
        "pdf.description": "Description",
        "pdf.noDescription": "No description",
        "pdf.quantity": "Qty",
        "pdf.unit": "Unit",
        "pdf.unitPrice": "Unit Price",
        "pdf.taxRate": "VAT",
        "pdf.totalPrice": "Total",
        "pdf.net": "Subtotal (net)",
        "pdf.vat": "VAT",
        "pdf.total": "Total (gross)",
        "pdf.salutation": "Dear Sir or Madam,",
        "pdf.introText": "we hereby invoice you for the following services:",
        "pdf.closing": "Kind regards",
        "pdf.paymentTerms": "Payment Terms",
        "pdf.defaultPayment": "Please transfer the invoice amount to the account stated below.",
        "pdf.contactAvailable": "For questions,",
        "pdf.contactAvailableSuffix": "is happy to help.",
        "pdf.invoiceInformation": "Invoice Information",
        "pdf.thankYouOrder": "Thank you for your order. This invoice is payable according to our current terms",
        "pdf.bankDetails": "Bank Details",
        "pdf.businessDetails": "Business Details",
        "pdf.contact": "Contact",
        "pdf.taxNumber": "Tax No.",
        "pdf.vatNumber": "VAT No.",
        "pdf.phone": "Phone",
        "pdf.fax": "Fax",
        "pdf.contactEmail": "Email",
        "pdf.contactWeb": "Web",
        "pdf.page": "Page",
        "pdf.pageOf": "of",
        "pdf.signature": "Signature / Company Stamp",
        "pdf.electronicNote": "This invoice was created electronically and is valid without signature.",
        "pdf.issuedOn": "Issued on",
        "pdf.scanToPay": "Scan to pay",
        "pdf.placeholderVendor": "Your Company",
        "pdf.placeholderRecipient": "Recipient name",
        "allrauer.invoice": "Invoice",
        "allrauer.invoiceNumber": "Invoice No.",
        "allrauer.invoiceDate": "Invoice Date",
        "allrauer.deliveryNoteNumber": "Delivery Note No.",
        "allrauer.deliveryDate": "Delivery Date",
        "allrauer.orderDate": "Order Date",
        "allrauer.customerNumber": "Your Customer No.",
        "allrauer.orderNumber": "Your Order No.",
        "allrauer.vatId": "Your VAT ID",
        "allrauer.processor": "Your Contact",
        "allrauer.termsText1": "Our terms and conditions overleaf apply to all trade transactions. Delivery times are non-binding!",
        "allrauer.termsText2": "Returns without error description and RMA number cannot be processed!",
        "allrauer.termsText3": "",
        "allrauer.description": "Description",
        "allrauer.quantity": "Qty",
        "allrauer.unit": "Unit",
        "allrauer.rate": "Rate",
        "allrauer.unitPrice": "Unit Price",
        "allrauer.totalPrice": "Total Price",
        "allrauer.net": "Net",
        "allrauer.vatRate": "VAT Rate",
        "allrauer.vat": "VAT",
        "allrauer.gross": "Gross",
        "allrauer.total": "Total",
        "allrauer.paymentText1": "Please transfer the outstanding amount of",
        "allrauer.paymentText2": "to one of the accounts listed below.",
        "allrauer.bankConnections": "Bank Accounts",
    },
}


def load_labels(path: Path | None = None) -> dict:
    """
    Built-in labels merged with per-language overrides from JSON ({"de": {"pdf.invoice": "..."}}).
    """
    labels = json.loads(json.dumps(DEFAULT_LABELS))
    target = path or data_path(LABELS_FILE)
    if not target.exists():
        return labels
    data = json.loads(target.read_text(encoding="utf-8"))
    for language, overrides in (data or {}).items():
        if isinstance(overrides, dict):
            labels.setdefault(str(language), {}).update({str(k): str(v) for k, v in overrides.items()})
    return labels


def save_labels(data: dict, path: Path | None = None) -> Path:
    target = path or data_path(LABELS_FILE)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
    return target


def make_translator(language: str = "de", translate: Optional[Translate] = None, labels: dict | None = None) -> Translate:
    """
    Caller's translate() wins when it knows the key (returns something other than the key);
    otherwise the built-in label for `language`, otherwise German, otherwise the key.
    """
    catalogue = labels if labels is not None else DEFAULT_LABELS
    own = catalogue.get(language) or {}
    german = catalogue.get("de") or {}

    def _t(key: str) -> str:
        if translate is not None:
            value = translate(key)
            if value and value != key:
                return str(value)
        if key in own:
            return own[key]
        return german.get(key, key)

    return _t

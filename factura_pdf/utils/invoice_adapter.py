"""
FACTURA-PDF — Adaptador de datos de factura
Normaliza cualquier JSON de factura (simple o completo) a la estructura que
espera la plantilla, rellenando valores por defecto.
"""

from typing import Any

DEFAULT_COMPANY = {
    "name": "", "logo": "", "logo_small": "", "tax_id": "",
    "phone": "", "city": "", "website": "",
}
DEFAULT_CLIENT = {"name": "", "id": "", "address": "", "nit": "", "code": ""}
DEFAULT_INVOICE = {
    "type": "", "number": "", "place": "", "date": "", "expiry_date": "",
    "seller": "", "conditions": "", "reference": "", "delivery": "",
    "iva": "", "descuento": "",
}


def _adapt_item(item: dict) -> dict:
    return {
        "code": item.get("code") or "",
        "name": item.get("name") or item.get("description") or "",
        "details": item.get("details") or [],
        "quantity": item.get("quantity") or 0,
        "unit_price": item.get("unit_price") or item.get("price") or 0,
    }


def adapt_invoice_data(data: dict) -> dict:
    """
    Adapta la factura a la estructura estándar.

    ``iva`` y ``descuento`` quedan en la raíz: primero el valor de la raíz,
    luego el de ``invoice``; un valor falsy (incluido 0) pasa al siguiente.
    """
    invoice: dict[str, Any] = data.get("invoice") or {}
    return {
        "company": {**DEFAULT_COMPANY, **(data.get("company") or {})},
        "client": {**DEFAULT_CLIENT, **(data.get("client") or {})},
        "invoice": {**DEFAULT_INVOICE, **invoice},
        "items": [_adapt_item(item) for item in data.get("items") or []],
        "iva": data.get("iva") or invoice.get("iva") or "",
        "descuento": data.get("descuento") or invoice.get("descuento") or "",
        "observations": data.get("observations") or [],
    }

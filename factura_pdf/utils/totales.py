"""
FACTURA-PDF — Totales y monto en letras
========================================
Cálculo de subtotales, IVA, descuento y total de una factura, y conversión
del total a texto en español para la línea legal del documento.

Reglas de IVA / descuento (mismo algoritmo para ambos):
  - Ausente, None o ""            → 0
  - Número 0 < v <= 100           → porcentaje del subtotal
  - Número fuera de ese rango     → valor absoluto
  - String terminado en "%"       → porcentaje, sin importar magnitud
  - String numérico sin "%"       → misma regla que un número
  - Cualquier otro string         → 0

Un valor absoluto entre 1 y 100 no se puede expresar con un número suelto;
siempre se interpreta como porcentaje.
"""

import copy
import math
import re
from typing import Any

NAN = float("nan")

# Prefijo numérico al estilo parseFloat ("19.5%" → 19.5, "abc" → NaN)
_FLOAT_PREFIX_RE = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_NUMBER_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")

MAX_ENTERO = 999_999_999
DEMASIADO_GRANDE = "número demasiado grande"
CERO = "CERO 00/100"


# ─────────────────────────────────────────────────────────────
# COERCIÓN NUMÉRICA
# ─────────────────────────────────────────────────────────────

def to_number(value: Any) -> float:
    """Coerce a value to a number the permissive way the invoice JSON expects.

    None and blank strings are 0, numeric strings are parsed, anything else
    is NaN. NaN is never replaced: it propagates into the totals.
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return value
    if value is None:
        return 0
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0
        if _NUMBER_RE.match(text):
            return float(text) if any(c in text for c in ".eE") else int(text)
    return NAN


def parse_float_prefix(text: str) -> float:
    """Parse the leading number of a string, ignoring whatever follows."""
    match = _FLOAT_PREFIX_RE.match(text)
    if not match:
        return NAN
    return float(match.group(1))


def _porcentaje_o_absoluto(value: float, subtotal: float) -> float:
    if 0 < value <= 100:
        return subtotal * (value / 100)
    return value


def resolve_amount(raw: Any, subtotal: float) -> float:
    """Resolve an IVA or discount value to an absolute amount."""
    if raw is None or raw == "":
        return 0
    if isinstance(raw, bool):
        return 0
    if isinstance(raw, (int, float)):
        return _porcentaje_o_absoluto(raw, subtotal)
    if isinstance(raw, str):
        if raw.endswith("%"):
            return subtotal * (parse_float_prefix(raw) / 100)
        num = to_number(raw)
        if not math.isnan(num):
            return _porcentaje_o_absoluto(num, subtotal)
    return 0


def _pick(factura: dict, field: str) -> Any:
    """Root value first, then the nested ``invoice`` block."""
    if field in factura:
        return factura[field]
    invoice = factura.get("invoice")
    if isinstance(invoice, dict) and field in invoice:
        return invoice[field]
    return None


# ─────────────────────────────────────────────────────────────
# TOTALES
# ─────────────────────────────────────────────────────────────

def compute_totals(data: dict) -> dict:
    """
    Calcula los totales de la factura.

    Retorna una copia de ``data`` con ``subtotal`` en cada item y un bloque
    ``totals`` con subtotal, iva, descuento, total_numeric y total_text.
    El objeto recibido nunca se modifica.
    """
    factura = copy.deepcopy(data)

    iva_raw = _pick(factura, "iva")
    descuento_raw = _pick(factura, "descuento")

    items = []
    for item in factura["items"]:
        quantity = to_number(item["quantity"]) if "quantity" in item else NAN
        unit_price = to_number(item["unit_price"]) if "unit_price" in item else NAN
        items.append({**item, "subtotal": quantity * unit_price})
    factura["items"] = items

    subtotal = sum((item["subtotal"] for item in items), 0)
    iva = resolve_amount(iva_raw, subtotal)
    descuento = resolve_amount(descuento_raw, subtotal)
    total_numeric = subtotal + iva - descuento

    factura["totals"] = {
        "subtotal": subtotal,
        "iva": iva,
        "descuento": descuento,
        "total_numeric": total_numeric,
        "total_text": number_to_words(total_numeric),
    }
    return factura


# ─────────────────────────────────────────────────────────────
# MONTO EN LETRAS
# ─────────────────────────────────────────────────────────────

_UNIDADES = ["", "uno", "dos", "tres", "cuatro", "cinco",
             "seis", "siete", "ocho", "nueve"]
_ESPECIALES = {10: "diez", 11: "once", 12: "doce", 13: "trece", 14: "catorce",
               15: "quince", 16: "dieciséis", 17: "diecisiete",
               18: "dieciocho", 19: "diecinueve", 20: "veinte",
               21: "veintiuno", 22: "veintidós", 23: "veintitrés",
               24: "veinticuatro", 25: "veinticinco", 26: "veintiséis",
               27: "veintisiete", 28: "veintiocho", 29: "veintinueve"}
_DECENAS = ["", "diez", "veinte", "treinta", "cuarenta", "cincuenta",
            "sesenta", "setenta", "ochenta", "noventa"]
_CENTENAS = ["", "ciento", "doscientos", "trescientos", "cuatrocientos",
             "quinientos", "seiscientos", "setecientos", "ochocientos",
             "novecientos"]


def _convertir(n: int, apocope: bool = False) -> str:
    """Spell out 1..999,999,999. ``apocope`` shortens a trailing "uno"."""
    if n < 10:
        palabra = _UNIDADES[n]
        return "un" if apocope and n == 1 else palabra
    if n < 30:
        if apocope and n == 21:
            return "veintiún"
        return _ESPECIALES[n]
    if n < 100:
        d, u = divmod(n, 10)
        if u == 0:
            return _DECENAS[d]
        return f"{_DECENAS[d]} y {_convertir(u, apocope)}"
    if n < 1000:
        if n == 100:
            return "cien"
        c, r = divmod(n, 100)
        return f"{_CENTENAS[c]} {_convertir(r, apocope)}" if r else _CENTENAS[c]
    if n < 1_000_000:
        if n == 1000:
            return "mil"
        m, r = divmod(n, 1000)
        prefijo = "mil" if m == 1 else f"{_convertir(m, apocope=True)} mil"
        return f"{prefijo} {_convertir(r, apocope)}" if r else prefijo
    if n == 1_000_000:
        return "un millón"
    m, r = divmod(n, 1_000_000)
    prefijo = "un millón" if m == 1 else f"{_convertir(m, apocope=True)} millones"
    return f"{prefijo} {_convertir(r, apocope)}" if r else prefijo


def number_to_words(num: Any) -> str:
    """
    Convierte un monto a texto en español para la línea legal del total.

    >>> number_to_words(1234567.5)
    'UN MILLÓN DOSCIENTOS TREINTA Y CUATRO MIL QUINIENTOS SESENTA Y SIETE 50/100'
    """
    if isinstance(num, bool) or not isinstance(num, (int, float)) or math.isnan(num):
        return ""
    if num < 0:
        texto = number_to_words(-num)
        if texto in (DEMASIADO_GRANDE, CERO):
            return texto
        return f"MENOS {texto}"
    if math.isinf(num):
        return DEMASIADO_GRANDE

    entero = math.floor(num)
    centavos = math.floor((num - entero) * 100 + 0.5)
    if centavos == 100:
        entero, centavos = entero + 1, 0
    if entero > MAX_ENTERO:
        return DEMASIADO_GRANDE

    palabras = "cero" if entero == 0 else _convertir(entero)
    return f"{palabras.upper()} {centavos:02d}/100"

"""
FACTURA-PDF — Formato de moneda (es-CO)

Agrupación con punto para miles y coma decimal, hasta tres decimales:
>>> format_currency(1234567)
'$ 1.234.567'
>>> format_currency(1234.5)
'$ 1.234,5'
>>> format_currency("198.000")
'$ 198.000'

Función sin estado: se pasa explícitamente al contexto de cada render.
"""

import math
import re
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Any

_INT_PREFIX_RE = re.compile(r"^\s*([+-]?\d+)")


def format_number_es_co(value: float) -> str:
    """Format a number with es-CO grouping, at most three decimals."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "-∞" if value < 0 else "∞"
    with localcontext() as ctx:
        ctx.prec = 400
        dec = Decimal(str(value)).quantize(Decimal("0.001"), rounding=ROUND_HALF_UP)
    sign = "-" if dec < 0 else ""
    whole, _, frac = format(abs(dec), "f").partition(".")
    frac = frac.rstrip("0")
    groups = []
    while len(whole) > 3:
        groups.insert(0, whole[-3:])
        whole = whole[:-3]
    groups.insert(0, whole)
    grouped = ".".join(groups)
    if sign and grouped == "0" and not frac:
        sign = ""
    return sign + grouped + ("," + frac if frac else "")


def format_currency(value: Any) -> Any:
    """Prefix ``$`` and group digits; non-numeric values pass through."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return "$ " + format_number_es_co(value)
    if isinstance(value, str):
        # "198.000" → quitar puntos y reformatear
        match = _INT_PREFIX_RE.match(value.replace(".", ""))
        if match:
            return "$ " + format_number_es_co(int(match.group(1)))
    return value

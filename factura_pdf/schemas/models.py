"""
FACTURA-PDF Pydantic Schemas
Request/response models for the API.
"""

from __future__ import annotations

from typing import Annotated, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

# Número positivo (absoluto o porcentaje) o string "19", "19.5", "19%"
AMOUNT_OR_PERCENT_PATTERN = r"^[0-9]+(?:\.[0-9]+)?%?$"

AmountOrPercent = Union[
    Annotated[float, Field(ge=0)],
    Annotated[str, Field(pattern=AMOUNT_OR_PERCENT_PATTERN)],
]

# Los enteros se conservan como int
PositiveNumber = Union[Annotated[int, Field(gt=0)], Annotated[float, Field(gt=0)]]
NonNegativeNumber = Union[Annotated[int, Field(ge=0)], Annotated[float, Field(ge=0)]]


class StrictModel(BaseModel):
    model_config = ConfigDict(extra="forbid")


# ─────────────────────────────────────────────────────────────
# FACTURA
# ─────────────────────────────────────────────────────────────

class CompanyIn(StrictModel):
    name: str = ""
    logo: str = ""
    logo_small: str = ""
    tax_id: str = ""
    phone: str = ""
    city: str = ""
    website: str = ""


class ClientIn(StrictModel):
    name: str = Field(..., min_length=1, description="Nombre del cliente")
    nit: str = Field(..., description="NIT o identificación (puede ser vacío)")
    code: str = Field(..., description="Código de cliente (puede ser vacío)")
    id: str = ""
    address: str = ""


class InvoiceMeta(StrictModel):
    type: str = Field(..., min_length=1, description="Tipo de factura (ej: venta)")
    number: str = Field(..., min_length=1)
    place: str = Field(..., min_length=1, description="Lugar de emisión")
    date: str = Field(..., min_length=1, description="Fecha de emisión")
    expiry_date: str = ""
    seller: str = ""
    conditions: str = ""
    reference: str = ""
    delivery: str = ""
    iva: Optional[AmountOrPercent] = None
    descuento: Optional[AmountOrPercent] = None


class ItemIn(StrictModel):
    code: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    details: list[str] = Field(default_factory=list)
    quantity: PositiveNumber
    unit_price: NonNegativeNumber


class InvoiceRequest(StrictModel):
    """Datos de factura aceptados por POST /generate-invoice."""
    company: Optional[CompanyIn] = None
    client: ClientIn
    invoice: InvoiceMeta
    items: list[ItemIn] = Field(..., min_length=1)
    observations: list[str] = Field(default_factory=list)
    iva: Optional[AmountOrPercent] = None
    descuento: Optional[AmountOrPercent] = None

    model_config = ConfigDict(extra="forbid", json_schema_extra={
        "examples": [{
            "client": {"name": "Cliente Ejemplo S.A.S.", "nit": "900123456-7", "code": "C001"},
            "invoice": {"type": "venta", "number": "FV-0001", "place": "Bogotá",
                        "date": "2025-01-15", "iva": "19%", "descuento": 0},
            "items": [{"code": "P001", "name": "Servicio", "quantity": 2, "unit_price": 50000}],
        }]
    })


# ─────────────────────────────────────────────────────────────
# RESPUESTAS
# ─────────────────────────────────────────────────────────────

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str
    details: list[str] = Field(default_factory=list)


class HealthResponse(BaseModel):
    """Health check."""
    status: str = "ok"
    version: str
    renderer: str

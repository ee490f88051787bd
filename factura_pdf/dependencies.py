"""
FACTURA-PDF: Dependencias FastAPI
==================================
Inyección de dependencias para autenticación y servicios.
"""
import secrets
from functools import lru_cache

from fastapi import Depends, Security
from fastapi.security import APIKeyHeader

from factura_pdf.core.config import Settings, settings
from factura_pdf.services.invoice_service import InvoicePdfService
from factura_pdf.services.pdf_renderer import PdfRenderer

# ── Security scheme ──
api_key_header = APIKeyHeader(name="x-api-key", auto_error=False)


class ApiKeyError(Exception):
    """Missing or wrong ``x-api-key`` header."""
    def __init__(self, message: str = "API Key inválida o ausente"):
        self.message = message
        super().__init__(message)


# ── Singletons ──

def get_settings() -> Settings:
    return settings


@lru_cache()
def get_renderer() -> PdfRenderer:
    """Chromium renderer singleton, started in the app lifespan."""
    return PdfRenderer(margins=settings.pdf_margins(), page_format=settings.page_format)


def get_invoice_service(
    app_settings: Settings = Depends(get_settings),
    renderer: PdfRenderer = Depends(get_renderer),
) -> InvoicePdfService:
    return InvoicePdfService(settings=app_settings, renderer=renderer)


# ── Auth dependency ──

async def require_api_key(
    api_key: str | None = Security(api_key_header),
    app_settings: Settings = Depends(get_settings),
) -> str:
    if api_key and secrets.compare_digest(api_key, app_settings.api_key):
        return api_key
    raise ApiKeyError()

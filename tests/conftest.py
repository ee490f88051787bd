"""
FACTURA-PDF — Shared test fixtures.
Chromium is never launched in tests: a fake renderer records what it gets.
"""
import copy

import pytest

from factura_pdf.utils.errors import PdfRenderError

FAKE_PDF = b"%PDF-1.4\n%fake\n%%EOF"

SAMPLE_INVOICE = {
    "client": {"name": "Cliente Ejemplo S.A.S.", "nit": "900123456-7", "code": "C001"},
    "invoice": {
        "type": "venta", "number": "FV-0001", "place": "Bogotá",
        "date": "2025-01-15", "iva": "19%", "descuento": 0,
    },
    "items": [
        {"code": "P001", "name": "Servicio de consultoría", "quantity": 2, "unit_price": 50000},
    ],
    "observations": ["Pago a 30 días"],
}


class FakeRenderer:
    """Stands in for PdfRenderer; same interface, no browser."""

    def __init__(self, margins: dict | None = None, page_format: str = "A4",
                 fail: bool = False):
        self.margins = margins
        self.page_format = page_format
        self.fail = fail
        self.calls = []
        self.is_running = False

    async def start(self):
        self.is_running = True

    async def stop(self):
        self.is_running = False

    async def __aenter__(self):
        await self.start()
        return self

    async def __aexit__(self, *exc):
        await self.stop()

    async def render(self, html: str, header_html: str, footer_html: str) -> bytes:
        if self.fail:
            raise PdfRenderError("Chromium no disponible")
        self.calls.append({"html": html, "header": header_html, "footer": footer_html})
        return FAKE_PDF


@pytest.fixture
def sample_invoice():
    return copy.deepcopy(SAMPLE_INVOICE)


@pytest.fixture
def fake_renderer():
    return FakeRenderer()

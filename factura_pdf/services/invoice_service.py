"""
FACTURA-PDF: Servicio de generación de facturas
================================================
Flujo completo para una factura:
  1. Adaptar el JSON a la estructura estándar
  2. Calcular totales y monto en letras
  3. Incrustar logos y fuente en Base64
  4. Renderizar header, footer y contenido
  5. Imprimir el PDF con Chromium
"""
import json
import logging
from dataclasses import dataclass
from pathlib import Path

from factura_pdf.core.config import Settings
from factura_pdf.services.assets import embed_company_logos, font_face_css
from factura_pdf.services.pdf_renderer import PdfRenderer
from factura_pdf.services.template_service import RenderedInvoice, render_invoice
from factura_pdf.utils.invoice_adapter import adapt_invoice_data
from factura_pdf.utils.totales import compute_totals

logger = logging.getLogger(__name__)


@dataclass
class InvoiceDocument:
    data: dict
    rendered: RenderedInvoice


def load_company_data(path: Path) -> dict | None:
    """Global company data merged into every API request, if configured."""
    path = Path(path)
    if not path.is_file():
        return None
    return json.loads(path.read_text(encoding="utf-8"))


class InvoicePdfService:
    """Turns invoice JSON into a PDF using the configured template and styles."""

    def __init__(self, settings: Settings, renderer: PdfRenderer,
                 template_html: str | None = None, styles: str | None = None):
        self.settings = settings
        self.renderer = renderer
        self._template_html = template_html
        self._styles = styles

    @property
    def template_html(self) -> str:
        if self._template_html is None:
            return self.settings.template_path.read_text(encoding="utf-8")
        return self._template_html

    @property
    def styles(self) -> str:
        if self._styles is None:
            return self.settings.styles_path.read_text(encoding="utf-8")
        return self._styles

    def build_document(self, invoice_data: dict) -> InvoiceDocument:
        data = compute_totals(adapt_invoice_data(invoice_data))
        embed_company_logos(data, self.settings.assets_dir)

        font_face = font_face_css(self.settings.font_file, self.settings.font_family)
        css = f"{font_face}\n{self.styles}"
        rendered = render_invoice(self.template_html, css, data)

        totals = data["totals"]
        logger.info(
            f"Factura {data['invoice'].get('number') or '(sin número)'}: "
            f"{len(data['items'])} items, total {totals['total_numeric']}"
        )
        return InvoiceDocument(data=data, rendered=rendered)

    async def generate_pdf(self, invoice_data: dict) -> bytes:
        document = self.build_document(invoice_data)
        rendered = document.rendered
        return await self.renderer.render(rendered.html, rendered.header, rendered.footer)

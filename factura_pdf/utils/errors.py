"""
FACTURA-PDF — Errores de generación
Cada error lleva el status HTTP con el que la API lo reporta.
"""


class InvoiceGenerationError(Exception):
    """Raised when an invoice PDF cannot be produced."""
    def __init__(self, message: str, status_code: int = 500,
                 details: list = None):
        self.message = message
        self.status_code = status_code
        self.details = details or [message]
        super().__init__(self.message)


class AssetNotFoundError(InvoiceGenerationError):
    """A logo referenced by the invoice does not exist."""
    def __init__(self, message: str):
        super().__init__(message, status_code=400)


class TemplateStructureError(InvoiceGenerationError):
    """The HTML template lacks its header, footer or content block."""


class PdfRenderError(InvoiceGenerationError):
    """Chromium failed to print the document."""

"""
FACTURA-PDF: Impresión a PDF con Chromium
==========================================
Un navegador por proceso; cada render abre y cierra su propia página.
"""
import asyncio
import logging

from playwright.async_api import async_playwright, Browser, Playwright

from factura_pdf.utils.errors import PdfRenderError

logger = logging.getLogger(__name__)

DEFAULT_MARGINS = {"top": "75mm", "bottom": "45mm", "right": "10mm", "left": "10mm"}


class PdfRenderer:
    """Headless Chromium wrapper that prints HTML with header/footer templates."""

    def __init__(self, margins: dict | None = None, page_format: str = "A4"):
        self.margins = margins or dict(DEFAULT_MARGINS)
        self.page_format = page_format
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._lock = asyncio.Lock()

    @property
    def is_running(self) -> bool:
        return self._browser is not None

    async def start(self) -> None:
        async with self._lock:
            if self._browser is not None:
                return
            self._playwright = await async_playwright().start()
            self._browser = await self._playwright.chromium.launch(
                headless=True, args=["--no-sandbox"],
            )
            logger.info("Chromium iniciado para impresión de PDF")

    async def stop(self) -> None:
        async with self._lock:
            if self._browser:
                await self._browser.close()
            if self._playwright:
                await self._playwright.stop()
            self._browser = None
            self._playwright = None
            logger.info("Chromium detenido")

    async def __aenter__(self) -> "PdfRenderer":
        await self.start()
        return self

    async def __aexit__(self, *exc) -> None:
        await self.stop()

    async def render(self, html: str, header_html: str, footer_html: str) -> bytes:
        if self._browser is None:
            await self.start()

        page = await self._browser.new_page()
        try:
            await page.set_content(html, wait_until="networkidle")
            return await page.pdf(
                format=self.page_format,
                print_background=True,
                display_header_footer=True,
                header_template=header_html,
                footer_template=footer_html,
                margin=self.margins,
            )
        except Exception as e:
            logger.error(f"Error generando PDF: {e}")
            raise PdfRenderError(f"Error generando PDF: {e}") from e
        finally:
            await page.close()

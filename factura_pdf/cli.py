#!/usr/bin/env python3
"""
FACTURA-PDF — Generador por línea de comandos
==============================================
Genera un PDF a partir de un JSON de factura, sin levantar la API.

Uso:
  factura-pdf generate --input invoice.json --output invoice.pdf
  factura-pdf generate --input invoice.json --debug-html debug.html
  factura-pdf total-text 1234567.50
  factura-pdf serve --port 3000
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from factura_pdf.core.config import Settings, settings
from factura_pdf.services.invoice_service import InvoicePdfService
from factura_pdf.services.pdf_renderer import PdfRenderer
from factura_pdf.services.template_service import build_debug_html
from factura_pdf.utils.errors import InvoiceGenerationError
from factura_pdf.utils.totales import number_to_words

logger = logging.getLogger("factura-pdf.cli")


def _settings_from_args(args: argparse.Namespace) -> Settings:
    overrides = {}
    if args.template:
        overrides["templates_dir"] = args.template.parent
        overrides["template_file"] = args.template.name
    if args.assets_dir:
        overrides["assets_dir"] = args.assets_dir
    if args.font:
        overrides["font_file"] = args.font
    return settings.model_copy(update=overrides)


async def _generate(args: argparse.Namespace) -> int:
    app_settings = _settings_from_args(args)
    styles = args.styles.read_text(encoding="utf-8") if args.styles else None
    invoice_data = json.loads(args.input.read_text(encoding="utf-8"))

    async with PdfRenderer(margins=app_settings.pdf_margins(),
                           page_format=app_settings.page_format) as renderer:
        service = InvoicePdfService(app_settings, renderer, styles=styles)
        document = service.build_document(invoice_data)

        if args.debug_html:
            stylesheet = args.styles.name if args.styles else app_settings.styles_file
            args.debug_html.write_text(
                build_debug_html(document.rendered, stylesheet), encoding="utf-8",
            )
            logger.info(f"HTML de depuración: {args.debug_html}")

        logger.info("Generando PDF...")
        rendered = document.rendered
        pdf_bytes = await renderer.render(rendered.html, rendered.header, rendered.footer)

    args.output.write_bytes(pdf_bytes)
    totals = document.data["totals"]
    logger.info(f"PDF generado con éxito: {args.output}")
    logger.info(f"Total: {totals['total_numeric']} ({totals['total_text']})")
    return 0


def _cmd_generate(args: argparse.Namespace) -> int:
    try:
        return asyncio.run(_generate(args))
    except InvoiceGenerationError as e:
        logger.error(e.message)
        return 1
    except json.JSONDecodeError as e:
        logger.error(f"JSON de factura inválido en {args.input}: {e}")
        return 1
    except OSError as e:
        logger.error(f"No se pudo leer {e.filename or args.input}: {e.strerror or e}")
        return 1


def _cmd_total_text(args: argparse.Namespace) -> int:
    print(number_to_words(args.amount))
    return 0


def _cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn
    uvicorn.run("factura_pdf.main:app", host=args.host, port=args.port)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="factura-pdf", description="Facturas en PDF")
    sub = parser.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", help="Generar un PDF desde un JSON de factura")
    gen.add_argument("--input", "-i", type=Path, default=Path("invoice.json"))
    gen.add_argument("--output", "-o", type=Path, default=Path("invoice.pdf"))
    gen.add_argument("--template", type=Path, help="Plantilla HTML")
    gen.add_argument("--styles", type=Path, help="Hoja de estilos CSS")
    gen.add_argument("--assets-dir", type=Path, help="Directorio base de logos")
    gen.add_argument("--font", type=Path, help="Fuente TTF a incrustar")
    gen.add_argument("--debug-html", type=Path, help="Guardar vista previa HTML")
    gen.set_defaults(func=_cmd_generate)

    words = sub.add_parser("total-text", help="Monto en letras")
    words.add_argument("amount", type=float)
    words.set_defaults(func=_cmd_total_text)

    serve = sub.add_parser("serve", help="Levantar la API")
    serve.add_argument("--host", default=settings.host)
    serve.add_argument("--port", type=int, default=settings.port)
    serve.set_defaults(func=_cmd_serve)
    return parser


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())

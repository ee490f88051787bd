"""
FACTURA-PDF: Plantillas HTML
=============================
La plantilla trae tres bloques:
  - <template id="header-template">  → encabezado de cada página
  - <template id="footer-template">  → pie de cada página
  - <div class="content">            → cuerpo de la factura

Cada bloque se renderiza con Jinja2. El header y el footer llevan su propio
<style> porque Chromium los imprime fuera del documento principal.
"""
import re
from dataclasses import dataclass
from typing import Callable

from jinja2 import Environment, select_autoescape

from factura_pdf.utils.errors import TemplateStructureError
from factura_pdf.utils.formatting import format_currency

_HEADER_RE = re.compile(r'<template id="header-template">([\s\S]*?)</template>')
_FOOTER_RE = re.compile(r'<template id="footer-template">([\s\S]*?)</template>')
_CONTENT_OPEN_RE = re.compile(r"""<div\s+class=["']content["'][^>]*>""", re.IGNORECASE)

_jinja_env = Environment(autoescape=select_autoescape(default_for_string=True))


@dataclass
class TemplateBlocks:
    header: str
    footer: str
    content: str


@dataclass
class RenderedInvoice:
    html: str
    header: str
    footer: str
    content: str


def extract_content_block(html: str) -> str | None:
    """Return the first ``<div class="content">`` element, balancing nested divs."""
    open_match = _CONTENT_OPEN_RE.search(html)
    if not open_match:
        return None
    start = open_match.start()
    idx = open_match.end()
    depth = 1
    while idx < len(html):
        next_open = html.find("<div", idx)
        next_close = html.find("</div>", idx)
        if next_close == -1:
            break
        if next_open != -1 and next_open < next_close:
            idx = next_open + 4
            depth += 1
        else:
            idx = next_close + 6
            depth -= 1
            if depth == 0:
                return html[start:idx]
    return None


def split_template(template_html: str) -> TemplateBlocks:
    header = _HEADER_RE.search(template_html)
    footer = _FOOTER_RE.search(template_html)
    content = extract_content_block(template_html)
    if not header or not footer or not content:
        raise TemplateStructureError(
            "No se encontraron los bloques de header, footer o content en la plantilla HTML."
        )
    return TemplateBlocks(header=header.group(1), footer=footer.group(1), content=content)


def render_block(source: str, data: dict,
                 currency_formatter: Callable = format_currency) -> str:
    """Render one template fragment. The formatter travels in the context."""
    template = _jinja_env.from_string(source)
    return template.render(**data, format_currency=currency_formatter)


def render_invoice(template_html: str, css: str, data: dict,
                   currency_formatter: Callable = format_currency) -> RenderedInvoice:
    """Render the three blocks and assemble the printable HTML document."""
    blocks = split_template(template_html)
    content = render_block(blocks.content, data, currency_formatter)
    header = f"<style>{css}</style>" + render_block(blocks.header, data, currency_formatter)
    footer = f"<style>{css}</style>" + render_block(blocks.footer, data, currency_formatter)
    html = (
        "<!DOCTYPE html>\n"
        '<html lang="es">\n'
        "<head>\n"
        '  <meta charset="UTF-8">\n'
        f"  <style>{css}</style>\n"
        "</head>\n"
        "<body>\n"
        f"  {content}\n"
        "</body>\n"
        "</html>"
    )
    return RenderedInvoice(html=html, header=header, footer=footer, content=content)


def build_debug_html(rendered: RenderedInvoice, stylesheet_href: str = "styles.css") -> str:
    """Preview page that links the stylesheet instead of embedding fonts."""
    return (
        "<!DOCTYPE html>\n"
        '<html lang="es">\n'
        "<head>\n"
        '  <meta charset="UTF-8">\n'
        "  <title>Debug - Vista previa de factura</title>\n"
        f'  <link rel="stylesheet" href="{stylesheet_href}">\n'
        "</head>\n"
        "<body>\n"
        f"  {rendered.content}\n"
        '  <div style="margin-top: 50px; border-top: 1px dashed #ccc; padding-top: 20px;">\n'
        "    <h3>Plantilla de Encabezado:</h3>\n"
        f'    <div id="header-template">{rendered.header}</div>\n'
        "    <h3>Plantilla de Pie de Página:</h3>\n"
        f'    <div id="footer-template">{rendered.footer}</div>\n'
        "  </div>\n"
        "</body>\n"
        "</html>"
    )

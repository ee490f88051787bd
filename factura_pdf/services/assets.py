"""
FACTURA-PDF: Recursos embebidos
================================
Logos y fuentes se incrustan como data URI en Base64 para que Chromium
no necesite acceso al sistema de archivos al imprimir.
"""
import base64
import logging
from pathlib import Path

from factura_pdf.utils.errors import AssetNotFoundError

logger = logging.getLogger(__name__)


def _data_uri(path: Path, mime: str) -> str:
    encoded = base64.b64encode(path.read_bytes()).decode("ascii")
    return f"data:{mime};base64,{encoded}"


def resolve_asset_path(file_path: str | Path, assets_dir: Path) -> Path:
    """Absolute paths are kept; relative ones hang from ``assets_dir``."""
    path = Path(file_path)
    return path if path.is_absolute() else Path(assets_dir) / path


def image_to_base64(file_path: str | Path) -> str:
    """PNG image as a data URI. Raises AssetNotFoundError if missing."""
    path = Path(file_path)
    if not path.is_file():
        raise AssetNotFoundError(f"El archivo de logo no existe: {file_path}")
    return _data_uri(path, "image/png")


def font_to_base64(file_path: str | Path) -> str:
    return _data_uri(Path(file_path), "font/truetype")


def font_face_css(font_path: Path, family: str) -> str:
    """``@font-face`` block for the embedded font, empty if the file is absent."""
    if not Path(font_path).is_file():
        logger.warning(f"Fuente no encontrada, se omite @font-face: {font_path}")
        return ""
    return (
        "\n@font-face {\n"
        f"  font-family: '{family}';\n"
        f"  src: url({font_to_base64(font_path)}) format('truetype');\n"
        "}"
    )


def embed_company_logos(data: dict, assets_dir: Path) -> dict:
    """Replace ``company.logo`` / ``company.logo_small`` paths with data URIs."""
    company = data.get("company")
    if not company:
        return data
    for field in ("logo", "logo_small"):
        if company.get(field):
            company[field] = image_to_base64(
                resolve_asset_path(company[field], assets_dir)
            )
    return data

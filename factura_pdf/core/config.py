"""
FACTURA-PDF Core Configuration
Application settings, read from environment variables or ``.env``.
"""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    app_name: str = "FACTURA-PDF"
    app_version: str = "1.0.0"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 3000

    # Seguridad
    api_key: str = "supersecretkey"
    rate_limit: str = "30 per 15 minutes"

    # Plantilla y recursos
    templates_dir: Path = PACKAGE_DIR / "templates"
    template_file: str = "template.html"
    styles_file: str = "styles.css"
    assets_dir: Path = PACKAGE_DIR / "assets"
    font_file: Path = PACKAGE_DIR / "assets" / "fonts" / "DanhDa-Bold.ttf"
    font_family: str = "DanhDa-Bold"
    company_data_file: Path = PACKAGE_DIR / "data" / "company.json"

    # Márgenes del PDF (dejan espacio al header/footer de Chromium)
    margin_top: str = "75mm"
    margin_bottom: str = "45mm"
    margin_right: str = "10mm"
    margin_left: str = "10mm"
    page_format: str = "A4"

    @property
    def template_path(self) -> Path:
        return self.templates_dir / self.template_file

    @property
    def styles_path(self) -> Path:
        return self.templates_dir / self.styles_file

    def pdf_margins(self) -> dict[str, str]:
        return {
            "top": self.margin_top,
            "bottom": self.margin_bottom,
            "right": self.margin_right,
            "left": self.margin_left,
        }


settings = Settings()

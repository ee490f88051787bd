"""
FACTURA-PDF — Main API Application
FastAPI service that turns invoice JSON into a PDF.

Flow for POST /generate-invoice:
  1. Rate limit by client IP (slowapi)
  2. Check the x-api-key header
  3. Validate the body (pydantic)
  4. Merge the global company data, compute totals, render, print

Chromium is launched once in the lifespan and shared by every request.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from factura_pdf.core.config import settings
from factura_pdf.dependencies import (
    ApiKeyError,
    get_invoice_service,
    get_renderer,
    require_api_key,
)
from factura_pdf.schemas.models import ErrorResponse, HealthResponse, InvoiceRequest
from factura_pdf.services.invoice_service import InvoicePdfService, load_company_data
from factura_pdf.utils.errors import InvoiceGenerationError

# ─────────────────────────────────────────────────────────────
# LOGGING
# ─────────────────────────────────────────────────────────────

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("factura-pdf")


# ─────────────────────────────────────────────────────────────
# APP LIFECYCLE
# ─────────────────────────────────────────────────────────────

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"🚀 {settings.app_name} v{settings.app_version} starting...")
    logger.info(f"   Plantilla: {settings.template_path}")
    logger.info(f"   Rate limit: {settings.rate_limit}")
    renderer = get_renderer()
    await renderer.start()
    yield
    await renderer.stop()
    logger.info(f"{settings.app_name} shutdown complete.")


# ─────────────────────────────────────────────────────────────
# FASTAPI APP
# ─────────────────────────────────────────────────────────────

limiter = Limiter(key_func=get_remote_address, default_limits=[settings.rate_limit])

app = FastAPI(
    title="FACTURA-PDF API",
    description=(
        "Genera facturas en PDF a partir de datos JSON: calcula totales, "
        "IVA, descuento y el monto en letras, y renderiza la plantilla "
        "HTML/CSS con Chromium."
    ),
    version=settings.app_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)

# La documentación interactiva no consume cuota
for route in list(app.routes):
    if getattr(route, "path", None) in (
        app.openapi_url, app.docs_url, app.redoc_url, app.swagger_ui_oauth2_redirect_url,
    ):
        limiter.exempt(route.endpoint)


# ─────────────────────────────────────────────────────────────
# GLOBAL EXCEPTION HANDLERS
# ─────────────────────────────────────────────────────────────

def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    return JSONResponse(
        status_code=429,
        content=ErrorResponse(
            error="Demasiadas peticiones",
            details=["Has excedido el límite de peticiones, intenta más tarde."],
        ).model_dump(),
    )


app.add_exception_handler(RateLimitExceeded, rate_limit_handler)


@app.exception_handler(ApiKeyError)
async def api_key_error_handler(request: Request, exc: ApiKeyError):
    return JSONResponse(
        status_code=401,
        content=ErrorResponse(error="No autorizado", details=[exc.message]).model_dump(),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    details = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        details.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return JSONResponse(
        status_code=400,
        content=ErrorResponse(error="Datos de factura inválidos", details=details).model_dump(),
    )


@app.exception_handler(InvoiceGenerationError)
async def generation_error_handler(request: Request, exc: InvoiceGenerationError):
    if exc.status_code >= 500:
        logger.error(f"Error generando PDF: {exc.message}")
        error = "Error interno del servidor"
    else:
        logger.warning(f"Factura rechazada: {exc.message}")
        error = exc.message
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=error, details=exc.details).model_dump(),
    )


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception(f"Error inesperado en {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(error="Error interno del servidor", details=[str(exc)]).model_dump(),
    )


# ═════════════════════════════════════════════════════════════
# ROUTES
# ═════════════════════════════════════════════════════════════

@app.get("/health", response_model=HealthResponse, tags=["Sistema"])
@limiter.exempt
async def health_check():
    """Verificar estado del servicio."""
    return {
        "status": "ok",
        "version": settings.app_version,
        "renderer": "running" if get_renderer().is_running else "stopped",
    }


@app.post(
    "/generate-invoice",
    tags=["Facturas"],
    summary="Generar factura en PDF",
    response_class=Response,
    responses={
        200: {"content": {"application/pdf": {}}},
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    dependencies=[Depends(require_api_key)],
)
async def generate_invoice(
    payload: InvoiceRequest,
    service: InvoicePdfService = Depends(get_invoice_service),
):
    """
    Genera el PDF de la factura.

    Los datos globales de la empresa (``company_data_file``) reemplazan el
    bloque ``company`` recibido.
    """
    data = payload.model_dump(exclude_none=True)
    company = load_company_data(settings.company_data_file)
    if company is not None:
        data["company"] = company

    pdf_bytes = await service.generate_pdf(data)
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": "attachment; filename=factura.pdf"},
    )


# ENTRYPOINT
# ─────────────────────────────────────────────────────────────

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "factura_pdf.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )

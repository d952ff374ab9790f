# backend/app/main.py
"""
Punto de entrada principal de la aplicación FastAPI.

Este módulo configura y inicializa la aplicación FastAPI completa,
incluyendo la configuración de rutas, el manejo de errores de dominio,
la documentación automática y el ciclo de vida de la aplicación.

Características principales:
- Configuración centralizada de la aplicación
- Registro de routers de la API con prefijos
- Traducción de MarketplaceError a respuestas JSON con su código HTTP
- Arranque: logging, creación de tablas y catálogo por defecto
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.core.config import settings  # Configuración centralizada de la aplicación
from app.core.exceptions import MarketplaceError
from app.core.logging_config import setup_logging
from app.api.v1.api_router import api_router_v1  # Router principal de la API v1
from app.db.database import AsyncSessionLocal, create_tables
from app.services.bootstrap_service import seed_default_catalog

logger = logging.getLogger(__name__)


# ========================================
# CICLO DE VIDA DE LA APLICACIÓN
# ========================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Tareas de arranque:
    - Configuración del logging
    - Creación de las tablas que falten
    - Catálogo por defecto si el registro de categorías está vacío
    """
    setup_logging()
    logger.info(f"Iniciando {settings.PROJECT_NAME} v{settings.PROJECT_VERSION} ({settings.APP_ENVIRONMENT})")

    await create_tables()
    if settings.SEED_DEFAULT_CATALOG:
        async with AsyncSessionLocal() as db:
            await seed_default_catalog(db)

    yield
    logger.info("Aplicación detenida.")


# ========================================
# CONFIGURACIÓN DE LA APLICACIÓN FASTAPI
# ========================================

app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    version=settings.PROJECT_VERSION,
    description="API del marketplace: categorías, catálogo, lotes, carrito y pagos",
    lifespan=lifespan,
)


@app.exception_handler(MarketplaceError)
async def marketplace_error_handler(request: Request, exc: MarketplaceError):
    """Traduce los errores de dominio a su código HTTP."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.detail}")
    else:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.detail}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


# ========================================
# REGISTRO DE ROUTERS DE LA API
# ========================================

app.include_router(api_router_v1, prefix=settings.API_V1_STR)


# ========================================
# ENDPOINTS RAÍZ Y VERIFICACIÓN DE ESTADO
# ========================================

@app.get("/", tags=["Root"])
async def read_root():
    """
    Endpoint raíz para verificación básica del estado de la API.

    Returns:
        dict: Mensaje de bienvenida con información del proyecto
    """
    return {"message": f"Bienvenido a {settings.PROJECT_NAME} v{settings.PROJECT_VERSION}"}

# backend/app/api/v1/api_router.py
"""
Este archivo contiene el router principal para la API versión 1.

Se encarga de registrar y configurar todos los routers de la versión 1 de la API.
"""

from fastapi import APIRouter

# Importación de routers especializados por dominio de negocio
from app.api.v1.endpoints import (
    admins,
    batch,
    blobs,
    cart,
    categories,
    payments,
    price_constraints,
    products,
    store_settings,
    users,
)

# ========================================
# CONFIGURACIÓN DEL ROUTER PRINCIPAL V1
# ========================================

api_router_v1 = APIRouter()

# ========================================
# REGISTRO DE ROUTERS POR DOMINIO DE NEGOCIO
# ========================================

# ROUTER DE CATEGORÍAS
# Registro de categorías de dos niveles
api_router_v1.include_router(
    categories.router,              # Router con endpoints de categorías
    prefix="/categories",           # Prefijo: /api/v1/categories
    tags=["Categories"]             # Tag para documentación OpenAPI/Swagger
)

# ROUTER DE PRODUCTOS
api_router_v1.include_router(
    products.router,
    prefix="/products",
    tags=["Products"]
)

# ROUTER DE SUBIDA POR LOTES
api_router_v1.include_router(
    batch.router,
    prefix="/batch",
    tags=["Batch Upload"]
)

# ROUTER DEL CARRITO
api_router_v1.include_router(
    cart.router,
    prefix="/cart",
    tags=["Cart"]
)

# ROUTER DE PAGOS (Stripe)
api_router_v1.include_router(
    payments.router,
    prefix="/payments",
    tags=["Payments"]
)

# ROUTERS DE IDENTIDAD: administradores, roles y perfiles
api_router_v1.include_router(
    admins.router,
    prefix="/admins",
    tags=["Admins"]
)
api_router_v1.include_router(
    users.router,
    prefix="/users",
    tags=["Users"]
)

# ROUTERS DE CONFIGURACIÓN DE LA TIENDA
api_router_v1.include_router(
    store_settings.router,
    prefix="/settings",
    tags=["Settings"]
)
api_router_v1.include_router(
    price_constraints.router,
    prefix="/price-constraints",
    tags=["Price Constraints"]
)

# ROUTER DE BLOBS (imágenes del almacén en memoria)
api_router_v1.include_router(
    blobs.router,
    prefix="/blobs",
    tags=["Blobs"]
)

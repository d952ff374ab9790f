# backend/app/api/deps.py
"""
Módulo de dependencias para FastAPI.

Este archivo centraliza todas las dependencias que pueden ser inyectadas
en los endpoints de la API: sesión de base de datos, configuración, identidad
del llamante y los servicios con estado en memoria (lote, carrito, almacén de
blobs, pagos). Los tests sustituyen cualquiera de ellas con
app.dependency_overrides.

La identidad llega en la cabecera X-Principal como una cadena opaca. Si falta
o vale "anonymous" el llamante es un invitado.
"""

from typing import AsyncGenerator, Optional

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import AuthorizationError
from app.db.database import AsyncSessionLocal
from app.schemas.user_schema import UserRole
from app.services.batch_upload_service import BatchUploadService, batch_upload_service
from app.services.blob_storage_service import BlobStore, get_blob_store as _get_blob_store
from app.services.cart_service import CartService, cart_service
from app.services.payment_service import PaymentService, payment_service
from app.services.user_service import UserService, is_anonymous, user_service


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependencia de FastAPI para obtener una sesión de base de datos asíncrona.
    Se asegura de que la sesión se cierre siempre después de la petición.
    """
    async with AsyncSessionLocal() as session:
        yield session


def get_settings():
    """
    Dependencia de FastAPI para obtener el objeto de configuración.
    """
    return settings


# ========================================
# SERVICIOS CON ESTADO
# ========================================

def get_blob_store() -> BlobStore:
    return _get_blob_store()


def get_batch_service() -> BatchUploadService:
    return batch_upload_service


def get_cart_service() -> CartService:
    return cart_service


def get_payment_service() -> PaymentService:
    return payment_service


def get_user_service() -> UserService:
    return user_service


# ========================================
# IDENTIDAD Y ROLES
# ========================================

def get_caller_principal(x_principal: Optional[str] = Header(None)) -> Optional[str]:
    """Identidad del llamante, o None si es anónimo."""
    if is_anonymous(x_principal):
        return None
    return x_principal.strip()


async def get_caller_role(
    principal: Optional[str] = Depends(get_caller_principal),
    db: AsyncSession = Depends(get_db),
    users: UserService = Depends(get_user_service),
) -> UserRole:
    return await users.get_role(db, principal)


async def require_user(
    principal: Optional[str] = Depends(get_caller_principal),
    role: UserRole = Depends(get_caller_role),
) -> str:
    """Exige un llamante identificado (usuario o administrador)."""
    if principal is None or role is UserRole.GUEST:
        raise AuthorizationError("You must be signed in to perform this action.")
    return principal


async def require_admin(
    principal: Optional[str] = Depends(get_caller_principal),
    role: UserRole = Depends(get_caller_role),
) -> str:
    """Exige rol de administrador."""
    if role is not UserRole.ADMIN:
        raise AuthorizationError("Only admins can perform this action.")
    return principal

# backend/app/core/exceptions.py
"""
Excepciones de dominio de la aplicación.

Los servicios lanzan estas excepciones en lugar de HTTPException para que la
lógica de negocio sea independiente de la capa HTTP. main.py registra un
manejador que traduce cada tipo a su código de estado.
"""

from starlette import status


class MarketplaceError(Exception):
    """Error base de la aplicación."""
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class AuthorizationError(MarketplaceError):
    """El llamante no tiene el rol requerido."""
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(MarketplaceError):
    """La categoría, producto o carrito referenciado no existe."""
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(MarketplaceError):
    """Nombre duplicado, lote ya activo o recurso todavía en uso."""
    status_code = status.HTTP_409_CONFLICT


class ValidationError(MarketplaceError):
    """Datos de entrada que violan una regla de negocio."""
    status_code = status.HTTP_400_BAD_REQUEST


class ExternalServiceError(MarketplaceError):
    """Fallo del almacén de blobs o del procesador de pagos."""
    status_code = status.HTTP_502_BAD_GATEWAY

# backend/app/schemas/product_schema.py
"""
Esquemas Pydantic para el modelo Product y para los elementos de un lote.
"""

from typing import Optional, List
from pydantic import BaseModel, Field

# ========================================
# ESQUEMA BASE
# ========================================

class ProductBase(BaseModel):
    """Propiedades comunes compartidas entre esquemas de producto."""
    name: str
    price: int = Field(..., gt=0, description="Precio en céntimos")
    category: str


# ========================================
# ESQUEMAS PARA OPERACIONES
# ========================================

class ProductInput(ProductBase):
    """
    Producto pendiente dentro de un lote de subida. Todavía no existe en el
    catálogo; image es la referencia ya guardada en el almacén de blobs.
    """
    id: str
    image: str


# ========================================
# ESQUEMA DE RESPUESTA
# ========================================

class ProductResponse(ProductBase):
    """Esquema de respuesta para un producto."""
    id: str
    description: str
    image: str
    image_url: Optional[str] = None


class BatchStatus(BaseModel):
    """Estado observable de la sesión de subida por lotes."""
    state: str
    category: Optional[str] = None
    pending_items: List[ProductInput] = []


class BatchStart(BaseModel):
    """Cuerpo de la petición para abrir un lote."""
    category: str

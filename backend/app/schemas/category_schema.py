# backend/app/schemas/category_schema.py

"""
Esquemas Pydantic para el modelo Category.

Patrón de esquemas utilizado:
- CategoryBase: Propiedades comunes compartidas
- CategoryCreate: Para crear nuevas categorías (POST) y para editar (PUT)
- CategoryOrderItem: Un elemento de la lista completa al reordenar
- CategoryResponse: Para respuestas de la API (GET)

Las subcategorías no se aceptan en la entrada: se derivan del campo parent
de cada hija, así que un cliente que envíe "subcategories" las verá ignoradas.
"""

from typing import Optional, List
from pydantic import BaseModel, field_validator

# ========================================
# ESQUEMA BASE
# ========================================

class CategoryBase(BaseModel):
    """Propiedades comunes compartidas entre esquemas de categoría."""
    name: str
    parent: Optional[str] = None

    @field_validator('name')
    @classmethod
    def strip_name(cls, v: str) -> str:
        return v.strip()

    @field_validator('parent')
    @classmethod
    def empty_parent_is_none(cls, v: Optional[str]) -> Optional[str]:
        """Un padre vacío equivale a no tener padre."""
        if v is None or not v.strip():
            return None
        return v.strip()


# ========================================
# ESQUEMAS PARA OPERACIONES
# ========================================

class CategoryCreate(CategoryBase):
    """Esquema para crear o editar una categoría."""
    pass


class CategoryOrderItem(CategoryBase):
    """Elemento de la lista ordenada que reemplaza al registro completo."""
    pass


# ========================================
# ESQUEMA DE RESPUESTA
# ========================================

class CategoryResponse(CategoryBase):
    """Esquema para las respuestas de la API al leer categorías."""
    subcategories: List[str] = []

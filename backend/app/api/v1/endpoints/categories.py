"""
Endpoints REST para el registro de categorías.

Las lecturas son públicas. Cualquier mutación exige rol de administrador.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.schemas import category_schema
from app.services.category_service import category_service

router = APIRouter()


def _to_response(category) -> category_schema.CategoryResponse:
    return category_schema.CategoryResponse(**category.to_dict())


@router.get("/", response_model=List[category_schema.CategoryResponse])
async def read_categories(db: AsyncSession = Depends(deps.get_db)) -> List[category_schema.CategoryResponse]:
    """Obtiene todas las categorías en el orden del registro."""
    categories = await category_service.get_all_categories(db)
    return [_to_response(c) for c in categories]


@router.post("/", response_model=category_schema.CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    *,
    db: AsyncSession = Depends(deps.get_db),
    _admin: str = Depends(deps.require_admin),
    category_in: category_schema.CategoryCreate,
) -> category_schema.CategoryResponse:
    """Crea una nueva categoría, opcionalmente bajo una categoría raíz."""
    category = await category_service.add_category(db, category_in)
    return _to_response(category)


@router.put("/", response_model=category_schema.CategoryResponse)
async def update_category(
    *,
    db: AsyncSession = Depends(deps.get_db),
    _admin: str = Depends(deps.require_admin),
    category_in: category_schema.CategoryCreate,
) -> category_schema.CategoryResponse:
    """Cambia el padre de la categoría con el nombre indicado."""
    category = await category_service.update_category(db, category_in)
    return _to_response(category)


@router.put("/order", response_model=List[category_schema.CategoryResponse])
async def reorder_categories(
    *,
    db: AsyncSession = Depends(deps.get_db),
    _admin: str = Depends(deps.require_admin),
    ordering: List[category_schema.CategoryOrderItem],
) -> List[category_schema.CategoryResponse]:
    """Reemplaza el orden y los vínculos padre/hijo de todo el registro."""
    categories = await category_service.reorder_categories(db, ordering)
    return [_to_response(c) for c in categories]


@router.put("/{old_name}", response_model=category_schema.CategoryResponse)
async def edit_category(
    *,
    db: AsyncSession = Depends(deps.get_db),
    _admin: str = Depends(deps.require_admin),
    old_name: str,
    category_in: category_schema.CategoryCreate,
) -> category_schema.CategoryResponse:
    """Renombra una categoría y/o la mueve a otro padre."""
    category = await category_service.edit_category(db, old_name, category_in)
    return _to_response(category)


@router.delete("/{name}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(
    *,
    db: AsyncSession = Depends(deps.get_db),
    _admin: str = Depends(deps.require_admin),
    name: str,
):
    """Elimina una categoría sin subcategorías ni productos."""
    await category_service.delete_category(db, name)


@router.get("/{name}", response_model=category_schema.CategoryResponse)
async def read_category(
    *,
    db: AsyncSession = Depends(deps.get_db),
    name: str,
) -> category_schema.CategoryResponse:
    """Obtiene una categoría por su nombre."""
    category = await category_service.get_category(db, name)
    if not category:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")
    return _to_response(category)

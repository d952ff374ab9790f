# backend/app/api/v1/endpoints/price_constraints.py
"""
Endpoints de los precios mínimos por categoría.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.schemas.settings_schema import PriceConstraintResponse, PriceConstraintUpdate
from app.services.price_constraint_service import price_constraint_service

router = APIRouter()


@router.get("/", response_model=List[PriceConstraintResponse])
async def read_price_constraints(db: AsyncSession = Depends(deps.get_db)):
    return await price_constraint_service.get_price_constraints(db)


@router.get("/{category}", response_model=PriceConstraintResponse)
async def read_price_constraint(category: str, db: AsyncSession = Depends(deps.get_db)):
    """Precio mínimo de una categoría."""
    constraint = await price_constraint_service.get_price_constraint(db, category)
    if constraint is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Price constraint not found")
    return constraint


@router.put("/{category}", response_model=PriceConstraintResponse)
async def set_price_constraint(
    category: str,
    constraint_in: PriceConstraintUpdate,
    db: AsyncSession = Depends(deps.get_db),
    _admin: str = Depends(deps.require_admin),
):
    return await price_constraint_service.set_price_constraint(db, category, constraint_in.min_price)


@router.delete("/{category}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_price_constraint(
    category: str,
    db: AsyncSession = Depends(deps.get_db),
    _admin: str = Depends(deps.require_admin),
):
    await price_constraint_service.delete_price_constraint(db, category)

# backend/app/crud/price_constraint_crud.py
"""
Operaciones CRUD para la tabla de precios mínimos por categoría.
"""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.settings_model import PriceConstraint


async def get_price_constraint(db: AsyncSession, category: str) -> Optional[PriceConstraint]:
    result = await db.execute(select(PriceConstraint).filter(PriceConstraint.category == category))
    return result.scalars().first()


async def get_price_constraints(db: AsyncSession) -> List[PriceConstraint]:
    result = await db.execute(select(PriceConstraint).order_by(PriceConstraint.category))
    return list(result.scalars().all())


async def upsert_price_constraint(db: AsyncSession, category: str, min_price: str) -> PriceConstraint:
    constraint = await get_price_constraint(db, category)
    if constraint is None:
        constraint = PriceConstraint(category=category)
    constraint.min_price = min_price
    db.add(constraint)
    await db.commit()
    await db.refresh(constraint)
    return constraint


async def delete_price_constraint(db: AsyncSession, constraint: PriceConstraint) -> None:
    await db.delete(constraint)
    await db.commit()

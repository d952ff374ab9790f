# backend/app/services/price_constraint_service.py
"""
Servicio de precios mínimos por categoría.

La tabla se consulta por igualdad de nombre con la categoría. Cuando
ENFORCE_PRICE_FLOOR está activo, check_price rechaza los precios por debajo del
mínimo; si no, solo deja constancia en el log.
"""

import logging
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import NotFoundError, ValidationError
from app.crud import price_constraint_crud
from app.db.models.settings_model import PriceConstraint

logger = logging.getLogger(__name__)


def min_price_in_cents(min_price: str) -> Decimal:
    """Convierte '10.50' (unidades mayores) a céntimos."""
    return Decimal(min_price) * 100


class PriceConstraintService:

    def __init__(self, enforce: Optional[bool] = None):
        self.enforce = settings.ENFORCE_PRICE_FLOOR if enforce is None else enforce

    async def get_price_constraint(self, db: AsyncSession, category: str) -> Optional[PriceConstraint]:
        return await price_constraint_crud.get_price_constraint(db, category)

    async def get_price_constraints(self, db: AsyncSession) -> List[PriceConstraint]:
        return await price_constraint_crud.get_price_constraints(db)

    async def set_price_constraint(self, db: AsyncSession, category: str, min_price: str) -> PriceConstraint:
        constraint = await price_constraint_crud.upsert_price_constraint(db, category, min_price)
        logger.info(f"Precio mínimo de '{category}' fijado en {min_price}.")
        return constraint

    async def delete_price_constraint(self, db: AsyncSession, category: str) -> None:
        constraint = await price_constraint_crud.get_price_constraint(db, category)
        if constraint is None:
            raise NotFoundError(f"No price constraint for category '{category}'.")
        await price_constraint_crud.delete_price_constraint(db, constraint)
        logger.info(f"Precio mínimo de '{category}' eliminado.")

    async def check_price(self, db: AsyncSession, category: str, price: int) -> None:
        """
        Compara un precio en céntimos con el mínimo de la categoría.

        Raises:
            ValidationError: si el precio es inferior y la regla está activa
        """
        constraint = await price_constraint_crud.get_price_constraint(db, category)
        if constraint is None:
            return
        if Decimal(price) >= min_price_in_cents(constraint.min_price):
            return
        if self.enforce:
            raise ValidationError(
                f"Price must be at least {constraint.min_price} for category '{category}'."
            )
        logger.warning(
            f"Precio {price} por debajo del mínimo {constraint.min_price} de '{category}' (regla solo informativa)."
        )


price_constraint_service = PriceConstraintService()

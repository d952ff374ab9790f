# backend/app/services/bootstrap_service.py
"""
Carga del catálogo por defecto al arrancar: categorías iniciales y sus precios
mínimos. Solo actúa si el registro de categorías está vacío.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.crud import category_crud, price_constraint_crud

logger = logging.getLogger(__name__)

# (categoría, subcategorías, precio mínimo)
DEFAULT_CATALOG = [
    ("paintings", ["oil", "watercolor"], "20.00"),
    ("ceramics", ["vases", "tableware"], "10.00"),
    ("jewelry", ["rings", "necklaces"], "15.00"),
    ("3d print", [], "5.00"),
]


async def seed_default_catalog(db: AsyncSession) -> bool:
    """
    Crea las categorías y los precios mínimos por defecto.

    Returns:
        True si se ha sembrado el catálogo, False si ya había categorías
    """
    if await category_crud.get_total_categories(db) > 0:
        logger.info("El registro de categorías ya tiene datos. No se siembra el catálogo por defecto.")
        return False

    position = 0
    for name, children, min_price in DEFAULT_CATALOG:
        parent = await category_crud.create_category(db, name=name, parent_id=None, position=position)
        parent_id = parent.category_id
        position += 1
        for child in children:
            await category_crud.create_category(db, name=child, parent_id=parent_id, position=position)
            position += 1
        await price_constraint_crud.upsert_price_constraint(db, name, min_price)

    logger.info(f"Catálogo por defecto creado: {position} categorías.")
    return True

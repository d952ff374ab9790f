# backend/app/crud/product_crud.py

"""
Operaciones CRUD para el modelo Product.

Este módulo implementa las operaciones de lectura y escritura de productos del
catálogo. Las lecturas precargan la categoría para poder serializar su nombre
sin consultas perezosas (no permitidas con sesiones asíncronas).
"""

from typing import Iterable, List, Optional

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.db.models.product_model import Product
from . import category_crud

import logging

logger = logging.getLogger(__name__)

# ========================================
# OPERACIONES DE LECTURA (READ)
# ========================================

async def get_product_by_id(db: AsyncSession, product_id: str) -> Optional[Product]:
    """Obtiene un producto por su ID, con la categoría precargada."""
    result = await db.execute(
        select(Product)
        .options(selectinload(Product.category))
        .filter(Product.product_id == product_id)
    )
    return result.scalars().first()


async def get_products(db: AsyncSession, category_id: Optional[int] = None) -> List[Product]:
    """
    Obtiene todos los productos en orden de alta.

    Si se indica category_id se incluyen también los productos de sus
    subcategorías.
    """
    query = select(Product).options(selectinload(Product.category))

    if category_id is not None:
        all_category_ids = await category_crud.get_category_and_children_ids(db, category_id)
        query = query.filter(Product.category_id.in_(all_category_ids))

    query = query.order_by(Product.created_at, Product.product_id)
    result = await db.execute(query)
    return list(result.scalars().all())


async def get_products_by_ids(db: AsyncSession, product_ids: List[str]) -> List[Product]:
    """Obtiene una lista de productos a partir de sus IDs."""
    if not product_ids:
        return []

    result = await db.execute(
        select(Product)
        .options(selectinload(Product.category))
        .filter(Product.product_id.in_(product_ids))
    )
    return list(result.scalars().all())


async def get_existing_ids(db: AsyncSession, product_ids: List[str]) -> set:
    """Devuelve cuáles de los IDs dados ya están en el catálogo."""
    if not product_ids:
        return set()
    result = await db.execute(select(Product.product_id).filter(Product.product_id.in_(product_ids)))
    return {row[0] for row in result.fetchall()}


async def count_products(db: AsyncSession) -> int:
    """Número de productos del catálogo; alimenta la secuencia de los IDs."""
    result = await db.execute(select(func.count(Product.product_id)))
    return result.scalar_one()


async def count_products_in_category(db: AsyncSession, category_id: int) -> int:
    """Número de productos que referencian una categoría."""
    result = await db.execute(select(func.count(Product.product_id)).filter(Product.category_id == category_id))
    return result.scalar_one()


# ========================================
# OPERACIONES DE ESCRITURA (CREATE, UPDATE)
# ========================================

async def create_products(db: AsyncSession, products: Iterable[Product]) -> List[Product]:
    """
    Inserta varios productos en una única transacción.

    Si falla el commit no queda ninguno guardado.
    """
    products = list(products)
    db.add_all(products)
    try:
        await db.commit()
    except Exception:
        await db.rollback()
        raise
    ids = [p.product_id for p in products]
    by_id = {p.product_id: p for p in await get_products_by_ids(db, ids)}
    return [by_id[product_id] for product_id in ids]


async def create_product(db: AsyncSession, product: Product) -> Product:
    """Inserta un producto nuevo."""
    created = await create_products(db, [product])
    return created[0]


async def update_product_image(db: AsyncSession, db_product: Product, image_ref: str) -> Product:
    """Sustituye solo la referencia de la imagen de un producto."""
    db_product.image_ref = image_ref
    db.add(db_product)
    await db.commit()
    return await get_product_by_id(db, db_product.product_id)

# backend/app/crud/category_crud.py

"""
Operaciones CRUD para el modelo Category.

Este módulo implementa las operaciones de lectura y escritura de categorías,
proporcionando una capa de abstracción entre los servicios y la base de datos.
No aplica reglas de negocio: la validación de la jerarquía de dos niveles y de
nombres duplicados vive en category_service.

Funcionalidades principales:
- Consultas por nombre con hijos y padre precargados
- Listado en el orden del registro
- Alta, edición, borrado y reordenación en bloque
"""

from typing import List, Optional, Sequence, Tuple

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.db.models.category_model import Category

# ========================================
# OPERACIONES DE LECTURA (READ)
# ========================================

def _category_query():
    """
    Consulta base con relaciones precargadas.

    El padre se carga con sus propios hijos para que parent.subcategories no
    dispare una carga perezosa. Las escrituras expiran la sesión (ver
    _commit), así que las relaciones se vuelven a leer tras cada cambio.
    """
    return select(Category).options(
        selectinload(Category.children),
        selectinload(Category.parent).selectinload(Category.children),
    )


async def get_category_by_name(db: AsyncSession, name: str) -> Optional[Category]:
    """Obtiene una categoría por su nombre exacto."""
    result = await db.execute(_category_query().filter(Category.name == name))
    return result.scalars().first()


async def get_categories(db: AsyncSession) -> List[Category]:
    """Obtiene todas las categorías en el orden del registro."""
    result = await db.execute(_category_query().order_by(Category.position, Category.category_id))
    return list(result.scalars().all())


async def get_category_and_children_ids(db: AsyncSession, category_id: int) -> List[int]:
    """
    Obtiene el ID de la categoría dada y los de sus subcategorías.
    Con dos niveles como máximo basta una consulta por parent_id.
    """
    result = await db.execute(select(Category.category_id).filter(Category.parent_id == category_id))
    return [category_id] + [row[0] for row in result.fetchall()]


async def get_next_position(db: AsyncSession) -> int:
    """Posición al final del registro para una categoría nueva."""
    result = await db.execute(select(func.max(Category.position)))
    last = result.scalar()
    return 0 if last is None else last + 1


async def get_total_categories(db: AsyncSession) -> int:
    """Obtiene el número total de categorías."""
    result = await db.execute(select(func.count(Category.category_id)))
    return result.scalar_one()


# ========================================
# OPERACIONES DE ESCRITURA (CREATE, UPDATE, DELETE)
# ========================================

async def _commit(db: AsyncSession) -> None:
    """Confirma y expira la sesión: padres e hijos cambian en bloque."""
    await db.commit()
    db.expire_all()


async def create_category(db: AsyncSession, name: str, parent_id: Optional[int], position: int) -> Category:
    """Crea una nueva categoría y la devuelve con sus relaciones cargadas."""
    db_category = Category(name=name, parent_id=parent_id, position=position)
    db.add(db_category)
    await _commit(db)
    return await get_category_by_name(db, name)


async def update_category(db: AsyncSession, db_category: Category, name: str, parent_id: Optional[int]) -> Category:
    """
    Cambia nombre y padre de una categoría existente.

    Los hijos y los productos apuntan a category_id, así que un cambio de
    nombre no deja ningún vínculo colgando.
    """
    db_category.name = name
    db_category.parent_id = parent_id
    db.add(db_category)
    await _commit(db)
    return await get_category_by_name(db, name)


async def delete_category(db: AsyncSession, db_category: Category) -> None:
    """Elimina una categoría de la base de datos."""
    await db.delete(db_category)
    await _commit(db)


async def apply_order(db: AsyncSession, ordering: Sequence[Tuple[Category, Optional[int], int]]) -> List[Category]:
    """
    Aplica en una sola transacción el padre y la posición de cada categoría.

    Args:
        ordering: Tuplas (categoría, nuevo parent_id, nueva posición)
    """
    for db_category, parent_id, position in ordering:
        db_category.parent_id = parent_id
        db_category.position = position
        db.add(db_category)
    await _commit(db)
    return await get_categories(db)

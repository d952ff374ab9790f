# backend/app/services/category_service.py
"""
Servicio para operaciones de negocio relacionadas con categorías.

Este servicio se encarga de gestionar la lógica de negocio del registro de
categorías: validación de la jerarquía de dos niveles, unicidad global de los
nombres y verificación de integridad antes de borrar.
"""

import asyncio
import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.crud import category_crud, product_crud
from app.db.models.category_model import Category
from app.schemas import category_schema

logger = logging.getLogger(__name__)

class CategoryService:
    """
    Servicio para operaciones de negocio relacionadas con categorías.

    Reglas que mantiene:
    - Los nombres son únicos en todo el registro
    - Una categoría con padre cuelga de una categoría raíz (profundidad máxima 2)
    - La relación padre/hijo se guarda solo en el hijo; las subcategorías del
      padre se derivan al leer, así que nunca pueden desincronizarse
    - No se borra una categoría que todavía tenga subcategorías o productos

    Todas las mutaciones se serializan con un asyncio.Lock.
    """

    def __init__(self):
        self._lock = asyncio.Lock()

    # ========================================
    # OPERACIONES DE CONSULTA
    # ========================================

    async def get_category(self, db: AsyncSession, name: str) -> Optional[Category]:
        """Obtiene una categoría por nombre, o None si no existe."""
        return await category_crud.get_category_by_name(db, name)

    async def get_all_categories(self, db: AsyncSession) -> List[Category]:
        """Obtiene todas las categorías en el orden del registro."""
        return await category_crud.get_categories(db)

    async def require_category(self, db: AsyncSession, name: str) -> Category:
        """Como get_category, pero lanza NotFoundError si no existe."""
        category = await category_crud.get_category_by_name(db, name)
        if category is None:
            raise NotFoundError(f"Category '{name}' not found.")
        return category

    # ========================================
    # VALIDACIONES DE JERARQUÍA
    # ========================================

    async def _resolve_parent(self, db: AsyncSession, parent_name: Optional[str]) -> Optional[Category]:
        """Comprueba que el padre existe y es una categoría raíz."""
        if parent_name is None:
            return None
        parent = await category_crud.get_category_by_name(db, parent_name)
        if parent is None:
            raise NotFoundError(f"Parent category '{parent_name}' not found.")
        if parent.parent_id is not None:
            raise ValidationError(
                f"Category '{parent_name}' is already a subcategory and cannot have subcategories."
            )
        return parent

    # ========================================
    # OPERACIONES DE ESCRITURA CON LÓGICA DE NEGOCIO
    # ========================================

    async def add_category(self, db: AsyncSession, category_in: category_schema.CategoryCreate) -> Category:
        """
        Crea una nueva categoría.

        Falla si el nombre está vacío (ValidationError), si ya existe
        (ConflictError), si el padre no existe (NotFoundError) o si el padre es
        a su vez una subcategoría (ValidationError).
        """
        if not category_in.name:
            raise ValidationError("Category name cannot be empty.")

        async with self._lock:
            if await category_crud.get_category_by_name(db, category_in.name):
                raise ConflictError(f"Category '{category_in.name}' already exists.")

            parent = await self._resolve_parent(db, category_in.parent)
            position = await category_crud.get_next_position(db)
            category = await category_crud.create_category(
                db,
                name=category_in.name,
                parent_id=parent.category_id if parent else None,
                position=position,
            )

        logger.info(f"Categoría '{category.name}' creada (padre: {category_in.parent}).")
        return category

    async def edit_category(self, db: AsyncSession, old_name: str, category_in: category_schema.CategoryCreate) -> Category:
        """
        Edita una categoría existente, permitiendo cambiar nombre y padre.

        Al renombrar, las subcategorías y productos siguen vinculados porque
        referencian la clave interna. Al cambiar de padre, la lista derivada
        del padre anterior deja de incluirla y la del nuevo la incluye.
        """
        if not category_in.name:
            raise ValidationError("Category name cannot be empty.")

        async with self._lock:
            db_category = await category_crud.get_category_by_name(db, old_name)
            if db_category is None:
                raise NotFoundError(f"Category '{old_name}' not found.")

            if category_in.name != old_name:
                if await category_crud.get_category_by_name(db, category_in.name):
                    raise ConflictError(f"Category '{category_in.name}' already exists.")

            if category_in.parent is not None and category_in.parent in (old_name, category_in.name):
                raise ValidationError("A category cannot be its own parent.")

            parent = await self._resolve_parent(db, category_in.parent)
            if parent is not None and db_category.children:
                raise ValidationError(
                    f"Category '{old_name}' has subcategories and cannot become a subcategory."
                )

            previous_parent = db_category.parent.name if db_category.parent else None
            category = await category_crud.update_category(
                db,
                db_category,
                name=category_in.name,
                parent_id=parent.category_id if parent else None,
            )

        logger.info(
            f"Categoría '{old_name}' editada como '{category.name}' "
            f"(padre: {previous_parent} -> {category_in.parent})."
        )
        return category

    async def update_category(self, db: AsyncSession, category_in: category_schema.CategoryCreate) -> Category:
        """Actualiza el padre de la categoría identificada por su propio nombre."""
        return await self.edit_category(db, category_in.name, category_in)

    async def delete_category(self, db: AsyncSession, name: str) -> Category:
        """
        Elimina una categoría.

        No hay borrado en cascada: si la categoría tiene subcategorías o
        productos se rechaza con ConflictError y nada cambia.
        """
        async with self._lock:
            db_category = await category_crud.get_category_by_name(db, name)
            if db_category is None:
                raise NotFoundError(f"Category '{name}' not found.")

            if db_category.children:
                raise ConflictError(
                    f"Cannot delete category '{name}' while it has subcategories: "
                    f"{', '.join(db_category.subcategories)}."
                )

            product_count = await product_crud.count_products_in_category(db, db_category.category_id)
            if product_count:
                raise ConflictError(
                    f"Cannot delete category '{name}' with {product_count} associated products. Reassign products first."
                )

            await category_crud.delete_category(db, db_category)

        logger.info(f"Categoría '{name}' eliminada.")
        return db_category

    async def reorder_categories(self, db: AsyncSession, ordering: List[category_schema.CategoryOrderItem]) -> List[Category]:
        """
        Reemplaza el orden del registro y los vínculos padre/hijo en bloque.

        La lista debe contener exactamente las categorías existentes, sin
        repetir. Se vuelve a comprobar la regla de dos niveles sobre el
        resultado completo antes de aplicar nada.
        """
        names = [item.name for item in ordering]
        if len(set(names)) != len(names):
            raise ValidationError("Category order contains duplicated names.")

        async with self._lock:
            current = {c.name: c for c in await category_crud.get_categories(db)}
            if set(names) != set(current):
                missing = sorted(set(current) - set(names))
                unknown = sorted(set(names) - set(current))
                raise ValidationError(
                    f"Category order must list every existing category (missing: {missing}, unknown: {unknown})."
                )

            parents = {item.name: item.parent for item in ordering}
            for name, parent_name in parents.items():
                if parent_name is None:
                    continue
                if parent_name == name:
                    raise ValidationError(f"Category '{name}' cannot be its own parent.")
                if parent_name not in parents:
                    raise ValidationError(f"Parent category '{parent_name}' of '{name}' is not in the list.")
                if parents[parent_name] is not None:
                    raise ValidationError(
                        f"Category '{parent_name}' is a subcategory and cannot be parent of '{name}'."
                    )

            plan = []
            for position, item in enumerate(ordering):
                parent_id = current[item.parent].category_id if item.parent else None
                plan.append((current[item.name], parent_id, position))
            categories = await category_crud.apply_order(db, plan)

        logger.info(f"Registro de categorías reordenado: {names}")
        return categories

# ========================================
# INSTANCIA SINGLETON DEL SERVICIO
# ========================================

# Instancia única del servicio para uso en endpoints
category_service = CategoryService()

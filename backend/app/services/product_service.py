# backend/app/services/product_service.py

"""
Capa de servicios para operaciones de negocio relacionadas con productos.

Esta capa implementa el patrón Service Layer para el catálogo: resuelve la
categoría por nombre, aplica el precio mínimo, genera el identificador y la
descripción, y delega la persistencia en product_crud.

Características del dominio de productos:
- ID "<nombre>#<número de productos en el catálogo>"
- Descripción generada a partir de una plantilla
- Precio entero en céntimos
- Imagen guardada como referencia opaca del almacén de blobs
- Lecturas sin filtro de visibilidad: todo el catálogo es público
"""

import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError, ValidationError
from app.crud import product_crud
from app.db.models.category_model import Category
from app.db.models.product_model import Product
from app.services.category_service import CategoryService, category_service as default_category_service
from app.services.price_constraint_service import (
    PriceConstraintService,
    price_constraint_service as default_price_constraint_service,
)

logger = logging.getLogger(__name__)

DESCRIPTION_TEMPLATE = "{name} from our {category} collection."


def generate_product_id(name: str, sequence: int) -> str:
    """Identificador derivado del nombre y de la secuencia del catálogo."""
    return f"{name}#{sequence}"


def generate_description(name: str, category: str) -> str:
    return DESCRIPTION_TEMPLATE.format(name=name, category=category)


class ProductService:
    """
    Servicio para operaciones de negocio relacionadas con productos.
    """

    def __init__(
        self,
        categories: Optional[CategoryService] = None,
        price_constraints: Optional[PriceConstraintService] = None,
    ):
        self.categories = categories or default_category_service
        self.price_constraints = price_constraints or default_price_constraint_service

    # ========================================
    # OPERACIONES DE CONSULTA
    # ========================================

    async def get_product(self, db: AsyncSession, product_id: str) -> Optional[Product]:
        return await product_crud.get_product_by_id(db, product_id)

    async def get_all_products(self, db: AsyncSession, category: Optional[str] = None) -> List[Product]:
        """
        Obtiene todo el catálogo. Con category se limita a esa categoría y a
        sus subcategorías.
        """
        if category is None:
            return await product_crud.get_products(db)
        db_category = await self.categories.require_category(db, category)
        return await product_crud.get_products(db, category_id=db_category.category_id)

    # ========================================
    # OPERACIONES DE ESCRITURA
    # ========================================

    async def allocate_product_id(self, db: AsyncSession, name: str, sequence: int, reserved=()) -> str:
        """
        Primer ID libre "<nombre>#<n>" con n >= sequence, saltando los que ya
        están en el catálogo o en reserved.
        """
        while True:
            candidate = generate_product_id(name, sequence)
            if candidate not in reserved and not await product_crud.get_existing_ids(db, [candidate]):
                return candidate
            sequence += 1

    def build_product(
        self,
        product_id: str,
        name: str,
        price: int,
        image_ref: str,
        category: Category,
    ) -> Product:
        """Construye (sin guardar) un producto con su descripción generada."""
        return Product(
            product_id=product_id,
            name=name,
            description=generate_description(name, category.name),
            price=price,
            category_id=category.category_id,
            image_ref=image_ref,
        )

    async def validate_input(self, db: AsyncSession, name: str, price: int, category_name: str) -> Category:
        """
        Comprueba nombre, precio y categoría de un producto nuevo.

        Returns:
            La categoría resuelta
        """
        if not name or not name.strip():
            raise ValidationError("Product name cannot be empty.")
        if price <= 0:
            raise ValidationError("Product price must be greater than zero.")
        category = await self.categories.require_category(db, category_name)
        await self.price_constraints.check_price(db, category_name, price)
        return category

    async def create_product(
        self,
        db: AsyncSession,
        name: str,
        price: int,
        image_ref: str,
        category_name: str,
    ) -> Product:
        """
        Crea un producto en el catálogo.

        Raises:
            NotFoundError: si la categoría no existe
            ValidationError: nombre vacío o precio por debajo del mínimo
        """
        name = name.strip()
        category = await self.validate_input(db, name, price, category_name)
        sequence = await product_crud.count_products(db)
        product = self.build_product(
            product_id=await self.allocate_product_id(db, name, sequence),
            name=name,
            price=price,
            image_ref=image_ref,
            category=category,
        )
        created = await product_crud.create_product(db, product)
        logger.info(f"Producto '{created.product_id}' creado en '{category.name}' con precio {price}.")
        return created

    async def replace_product_image(self, db: AsyncSession, product_id: str, image_ref: str) -> Product:
        """
        Sustituye la imagen de un producto conservando el resto de campos.

        Raises:
            NotFoundError: si el producto no existe
        """
        db_product = await product_crud.get_product_by_id(db, product_id)
        if db_product is None:
            raise NotFoundError(f"Product '{product_id}' not found.")
        updated = await product_crud.update_product_image(db, db_product, image_ref)
        logger.info(f"Imagen del producto '{product_id}' sustituida.")
        return updated


# Instancia única del servicio para ser usada en la aplicación
product_service = ProductService()

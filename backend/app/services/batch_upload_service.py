# backend/app/services/batch_upload_service.py
"""
Servicio de subida de productos por lotes.

Este componente encapsula la máquina de estados de la sesión de lote, única
para toda la aplicación (no hay un lote por administrador):

    IDLE --start(categoría)--> ACTIVE --append(item)*--> ACTIVE --finish()--> IDLE

- start exige IDLE y una categoría existente.
- append exige ACTIVE y acumula el producto pendiente sin tocar el catálogo.
- finish exige ACTIVE y confirma todos los pendientes en una sola transacción.
  Si alguno falla no se guarda ninguno; en cualquier caso la sesión vuelve a
  IDLE con la lista vacía.

No existe operación de cancelación. Las transiciones se serializan con un
asyncio.Lock.
"""

import asyncio
import enum
import logging
from typing import Awaitable, Callable, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ConflictError, ValidationError
from app.crud import product_crud
from app.db.models.product_model import Product
from app.schemas.product_schema import BatchStatus, ProductInput
from app.services.product_service import ProductService, generate_product_id, product_service as default_product_service

logger = logging.getLogger(__name__)


class BatchState(str, enum.Enum):
    IDLE = "idle"
    ACTIVE = "active"


class BatchUploadService:
    """
    Gestiona la sesión global de subida por lotes.
    """

    def __init__(self, products: Optional[ProductService] = None):
        self.products = products or default_product_service
        self.state = BatchState.IDLE
        self.category: Optional[str] = None
        self.pending_items: List[ProductInput] = []
        self._lock = asyncio.Lock()

    def status(self) -> BatchStatus:
        return BatchStatus(
            state=self.state.value,
            category=self.category,
            pending_items=list(self.pending_items),
        )

    def require_active(self) -> str:
        """Categoría del lote activo; ValidationError si no hay lote."""
        if self.state is not BatchState.ACTIVE:
            raise ValidationError("No batch upload in progress. Start a batch first.")
        return self.category

    def _reset(self) -> None:
        self.state = BatchState.IDLE
        self.category = None
        self.pending_items = []

    async def start(self, db: AsyncSession, category: str) -> BatchStatus:
        """
        Abre un lote para la categoría indicada.

        Raises:
            ConflictError: si ya hay un lote activo
            NotFoundError: si la categoría no existe
        """
        async with self._lock:
            if self.state is BatchState.ACTIVE:
                raise ConflictError(f"A batch upload for '{self.category}' is already in progress.")
            await self.products.categories.require_category(db, category)
            self.state = BatchState.ACTIVE
            self.category = category
            self.pending_items = []

        logger.info(f"Lote iniciado para la categoría '{category}'.")
        return self.status()

    async def append(
        self,
        db: AsyncSession,
        name: str,
        price: int,
        image_ref: Optional[str] = None,
        category: Optional[str] = None,
        store_image: Optional[Callable[[], Awaitable[str]]] = None,
    ) -> ProductInput:
        """
        Añade un producto pendiente al lote activo.

        El ID se genera como "<nombre>#<productos en catálogo + pendientes>"
        para que dos pendientes con el mismo nombre no colisionen.

        Si se pasa store_image, la imagen se sube dentro del cerrojo y solo
        después de validar, de modo que un lote cerrado entretanto no deja
        blobs sin producto.

        Raises:
            ValidationError: si no hay lote activo o el producto no es válido
            NotFoundError: si la categoría del producto no existe
        """
        async with self._lock:
            session_category = self.require_active()
            category = category or session_category
            name = name.strip()
            await self.products.validate_input(db, name, price, category)
            if store_image is not None:
                image_ref = await store_image()

            sequence = await product_crud.count_products(db) + len(self.pending_items)
            item = ProductInput(
                id=generate_product_id(name, sequence),
                name=name,
                price=price,
                category=category,
                image=image_ref,
            )
            self.pending_items.append(item)

        logger.info(f"Producto pendiente '{item.id}' añadido al lote ({len(self.pending_items)} en cola).")
        return item

    async def finish(self, db: AsyncSession) -> List[Product]:
        """
        Confirma todos los productos pendientes en el catálogo.

        Primero se resuelven todas las categorías y los IDs; si alguna falla se
        lanza el error sin insertar nada. La sesión vuelve a IDLE tanto si la
        confirmación tiene éxito como si no.

        Raises:
            ValidationError: si no hay lote activo
            NotFoundError: si la categoría de algún pendiente ya no existe
        """
        async with self._lock:
            if self.state is not BatchState.ACTIVE:
                raise ValidationError("No batch upload in progress.")

            pending = list(self.pending_items)
            try:
                products = []
                reserved = set()
                for item in pending:
                    category = await self.products.categories.require_category(db, item.category)
                    product_id = item.id
                    if product_id in reserved or await product_crud.get_existing_ids(db, [product_id]):
                        sequence = await product_crud.count_products(db) + len(reserved)
                        product_id = await self.products.allocate_product_id(db, item.name, sequence, reserved)
                        logger.warning(f"ID '{item.id}' ocupado; el producto se guarda como '{product_id}'.")
                    reserved.add(product_id)
                    products.append(
                        self.products.build_product(
                            product_id=product_id,
                            name=item.name,
                            price=item.price,
                            image_ref=item.image,
                            category=category,
                        )
                    )

                created = await product_crud.create_products(db, products) if products else []
            except Exception:
                logger.error(f"Lote para '{self.category}' abortado: no se guardó ninguno de {len(pending)} productos.")
                raise
            finally:
                self._reset()

        logger.info(f"Lote finalizado: {len(created)} productos creados.")
        return created


# Instancia única: la sesión de lote es global
batch_upload_service = BatchUploadService()

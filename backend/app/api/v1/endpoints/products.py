# backend/app/api/v1/endpoints/products.py

"""
Endpoints REST para el catálogo de productos.

Las altas y el cambio de imagen llegan como multipart/form-data: la imagen se
guarda primero en el almacén de blobs y el producto solo conserva su
referencia.
"""

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
import logging

from app.api import deps
from app.schemas import product_schema
from app.services.blob_storage_service import BlobStore
from app.services.product_service import product_service

logger = logging.getLogger(__name__)
router = APIRouter()


def to_product_response(product, blob_store: BlobStore) -> product_schema.ProductResponse:
    """Serializa un producto añadiendo la URL directa de su imagen."""
    return product_schema.ProductResponse(
        **product.to_dict(),
        image_url=blob_store.direct_url(product.image_ref),
    )


async def store_upload(blob_store: BlobStore, upload: UploadFile) -> str:
    """Guarda el fichero subido y devuelve su referencia."""
    data = await upload.read()
    return await blob_store.store(data, upload.content_type)


@router.get("/", response_model=List[product_schema.ProductResponse])
async def read_products(
    db: AsyncSession = Depends(deps.get_db),
    blob_store: BlobStore = Depends(deps.get_blob_store),
    category: Optional[str] = None,
) -> List[product_schema.ProductResponse]:
    """Obtiene el catálogo completo, opcionalmente filtrado por categoría."""
    products = await product_service.get_all_products(db, category=category)
    return [to_product_response(p, blob_store) for p in products]


@router.get("/{product_id}", response_model=product_schema.ProductResponse)
async def read_product(
    *,
    db: AsyncSession = Depends(deps.get_db),
    blob_store: BlobStore = Depends(deps.get_blob_store),
    product_id: str,
) -> product_schema.ProductResponse:
    """Obtiene un producto por su ID."""
    product = await product_service.get_product(db, product_id)
    if not product:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")
    return to_product_response(product, blob_store)


@router.post("/", response_model=product_schema.ProductResponse, status_code=status.HTTP_201_CREATED)
async def create_product(
    *,
    db: AsyncSession = Depends(deps.get_db),
    blob_store: BlobStore = Depends(deps.get_blob_store),
    _admin: str = Depends(deps.require_admin),
    name: str = Form(...),
    price: int = Form(...),
    category: str = Form(...),
    image: UploadFile = File(...),
) -> product_schema.ProductResponse:
    """Crea un producto individual en el catálogo."""
    logger.info(f"Creando producto '{name}' en '{category}'")
    await product_service.validate_input(db, name, price, category)
    image_ref = await store_upload(blob_store, image)
    product = await product_service.create_product(db, name, price, image_ref, category)
    return to_product_response(product, blob_store)


@router.put("/{product_id}/image", response_model=product_schema.ProductResponse)
async def replace_product_image(
    *,
    db: AsyncSession = Depends(deps.get_db),
    blob_store: BlobStore = Depends(deps.get_blob_store),
    _admin: str = Depends(deps.require_admin),
    product_id: str,
    image: UploadFile = File(...),
) -> product_schema.ProductResponse:
    """Sustituye la imagen de un producto existente."""
    if not await product_service.get_product(db, product_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")
    image_ref = await store_upload(blob_store, image)
    product = await product_service.replace_product_image(db, product_id, image_ref)
    return to_product_response(product, blob_store)

# backend/app/api/v1/endpoints/batch.py
"""
Endpoints de la subida de productos por lotes. Todos exigen rol de
administrador; la sesión de lote es única para toda la aplicación.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.api.v1.endpoints.products import store_upload, to_product_response
from app.schemas import product_schema
from app.services.batch_upload_service import BatchUploadService
from app.services.blob_storage_service import BlobStore

router = APIRouter()


@router.get("/", response_model=product_schema.BatchStatus)
async def read_batch_status(
    _admin: str = Depends(deps.require_admin),
    batch: BatchUploadService = Depends(deps.get_batch_service),
) -> product_schema.BatchStatus:
    """Estado actual del lote y productos pendientes."""
    return batch.status()


@router.post("/start", response_model=product_schema.BatchStatus)
async def start_batch(
    *,
    db: AsyncSession = Depends(deps.get_db),
    _admin: str = Depends(deps.require_admin),
    batch: BatchUploadService = Depends(deps.get_batch_service),
    batch_in: product_schema.BatchStart,
) -> product_schema.BatchStatus:
    """Abre un lote para una categoría."""
    return await batch.start(db, batch_in.category)


@router.post("/items", response_model=product_schema.ProductInput, status_code=status.HTTP_201_CREATED)
async def append_batch_item(
    *,
    db: AsyncSession = Depends(deps.get_db),
    blob_store: BlobStore = Depends(deps.get_blob_store),
    _admin: str = Depends(deps.require_admin),
    batch: BatchUploadService = Depends(deps.get_batch_service),
    name: str = Form(...),
    price: int = Form(...),
    category: Optional[str] = Form(None),
    image: UploadFile = File(...),
) -> product_schema.ProductInput:
    """Añade un producto pendiente al lote activo."""
    return await batch.append(
        db,
        name,
        price,
        category=category,
        store_image=lambda: store_upload(blob_store, image),
    )


@router.post("/finish", response_model=List[product_schema.ProductResponse])
async def finish_batch(
    *,
    db: AsyncSession = Depends(deps.get_db),
    blob_store: BlobStore = Depends(deps.get_blob_store),
    _admin: str = Depends(deps.require_admin),
    batch: BatchUploadService = Depends(deps.get_batch_service),
) -> List[product_schema.ProductResponse]:
    """Confirma todos los pendientes en el catálogo y cierra el lote."""
    products = await batch.finish(db)
    return [to_product_response(p, blob_store) for p in products]

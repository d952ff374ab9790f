# backend/app/api/v1/endpoints/blobs.py
"""
Sirve el contenido de los blobs. Es el destino de las URLs directas del
almacén en memoria; con S3 las URLs apuntan al bucket.
"""

from fastapi import APIRouter, Depends, Response

from app.api import deps
from app.services.blob_storage_service import BlobStore

router = APIRouter()


@router.get("/{reference}")
async def read_blob(reference: str, blob_store: BlobStore = Depends(deps.get_blob_store)):
    data, content_type = await blob_store.get_bytes(reference)
    return Response(content=data, media_type=content_type)

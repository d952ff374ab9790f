# backend/app/services/blob_storage_service.py
"""
Almacén de blobs para las imágenes de producto.

Recibe bytes y devuelve una referencia opaca que después se resuelve a una URL
directa o de vuelta a bytes. Hay dos implementaciones:
- S3BlobStore: bucket de S3 a través de boto3 (producción)
- InMemoryBlobStore: diccionario en memoria servido por GET /blobs/{ref}
  (desarrollo y tests)

Cualquier fallo del almacén se propaga como ExternalServiceError.
"""

import io
import logging
import uuid
from typing import Dict, Optional, Tuple

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from starlette.concurrency import run_in_threadpool

from app.core.config import settings
from app.core.exceptions import ExternalServiceError, NotFoundError

logger = logging.getLogger(__name__)


def _new_reference() -> str:
    return uuid.uuid4().hex


class BlobStore:
    """Interfaz común de los almacenes de blobs."""

    async def store(self, data: bytes, content_type: Optional[str] = None) -> str:
        raise NotImplementedError

    def direct_url(self, reference: str) -> str:
        raise NotImplementedError

    async def get_bytes(self, reference: str) -> Tuple[bytes, str]:
        """Devuelve el contenido y su content type."""
        raise NotImplementedError


class InMemoryBlobStore(BlobStore):
    """Almacén en memoria; las URLs apuntan al endpoint de blobs de la propia API."""

    def __init__(self, base_url: Optional[str] = None):
        self.base_url = (base_url or f"{settings.PUBLIC_BASE_URL}{settings.API_V1_STR}").rstrip("/")
        self._blobs: Dict[str, Tuple[bytes, str]] = {}

    async def store(self, data: bytes, content_type: Optional[str] = None) -> str:
        if not data:
            raise ExternalServiceError("Cannot store an empty blob.")
        reference = _new_reference()
        self._blobs[reference] = (bytes(data), content_type or "application/octet-stream")
        logger.debug(f"Blob {reference} guardado en memoria ({len(data)} bytes).")
        return reference

    def direct_url(self, reference: str) -> str:
        return f"{self.base_url}/blobs/{reference}"

    async def get_bytes(self, reference: str) -> Tuple[bytes, str]:
        try:
            return self._blobs[reference]
        except KeyError:
            raise NotFoundError(f"Blob '{reference}' not found.")


class S3BlobStore(BlobStore):
    """Almacén en un bucket de S3. Las llamadas de boto3 son bloqueantes y se
    ejecutan en el threadpool."""

    def __init__(self, bucket: str, client=None):
        self.bucket = bucket
        self.client = client or boto3.client(
            "s3",
            aws_access_key_id=settings.AWS_ACCESS_KEY_ID,
            aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
            region_name=settings.AWS_S3_REGION,
        )

    async def store(self, data: bytes, content_type: Optional[str] = None) -> str:
        reference = _new_reference()
        extra_args = {"ContentType": content_type} if content_type else None
        try:
            await run_in_threadpool(
                self.client.upload_fileobj, io.BytesIO(data), self.bucket, reference, ExtraArgs=extra_args
            )
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Error al subir el blob {reference} a S3: {e}", exc_info=True)
            raise ExternalServiceError("Could not store image.") from e
        logger.info(f"Blob {reference} subido al bucket '{self.bucket}'.")
        return reference

    def direct_url(self, reference: str) -> str:
        try:
            return self.client.generate_presigned_url(
                "get_object",
                Params={"Bucket": self.bucket, "Key": reference},
                ExpiresIn=settings.BLOB_URL_EXPIRATION,
            )
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Error al generar la URL del blob {reference}: {e}")
            raise ExternalServiceError("Could not resolve image URL.") from e

    async def get_bytes(self, reference: str) -> Tuple[bytes, str]:
        try:
            response = await run_in_threadpool(self.client.get_object, Bucket=self.bucket, Key=reference)
            body = await run_in_threadpool(response["Body"].read)
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") in ("NoSuchKey", "404"):
                raise NotFoundError(f"Blob '{reference}' not found.") from e
            logger.error(f"Error al descargar el blob {reference}: {e}")
            raise ExternalServiceError("Could not retrieve image.") from e
        except BotoCoreError as e:
            logger.error(f"Error al descargar el blob {reference}: {e}")
            raise ExternalServiceError("Could not retrieve image.") from e
        return body, response.get("ContentType", "application/octet-stream")


def create_blob_store() -> BlobStore:
    """Elige S3 si hay bucket configurado; en otro caso, memoria."""
    if settings.AWS_S3_BUCKET_NAME:
        logger.info(f"Almacén de blobs: bucket S3 '{settings.AWS_S3_BUCKET_NAME}'.")
        return S3BlobStore(settings.AWS_S3_BUCKET_NAME)
    logger.warning("AWS_S3_BUCKET_NAME no configurado. Las imágenes se guardarán en memoria.")
    return InMemoryBlobStore()


# Instancia única del almacén (se crea al primer uso)
_blob_store: Optional[BlobStore] = None


def get_blob_store() -> BlobStore:
    global _blob_store
    if _blob_store is None:
        _blob_store = create_blob_store()
    return _blob_store

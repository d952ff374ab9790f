# backend/tests/test_bootstrap_and_blobs.py
import boto3
import pytest
from botocore.stub import Stubber

from app.core.exceptions import ExternalServiceError, NotFoundError
from app.crud import category_crud, price_constraint_crud
from app.services.blob_storage_service import InMemoryBlobStore, S3BlobStore
from app.services.bootstrap_service import DEFAULT_CATALOG, seed_default_catalog


async def test_seed_default_catalog_only_once(db):
    assert await seed_default_catalog(db) is True
    assert await seed_default_catalog(db) is False

    categories = await category_crud.get_categories(db)
    expected = sum(1 + len(children) for _, children, _ in DEFAULT_CATALOG)
    assert len(categories) == expected
    for category in categories:
        if category.parent is not None:
            assert category.parent.parent is None

    constraint = await price_constraint_crud.get_price_constraint(db, "ceramics")
    assert constraint.min_price == "10.00"


async def test_in_memory_blob_store():
    store = InMemoryBlobStore(base_url="http://shop/api/v1/")

    reference = await store.store(b"data", "image/png")

    assert await store.get_bytes(reference) == (b"data", "image/png")
    assert store.direct_url(reference) == f"http://shop/api/v1/blobs/{reference}"
    with pytest.raises(NotFoundError):
        await store.get_bytes("missing")
    with pytest.raises(ExternalServiceError):
        await store.store(b"")


def _s3_client():
    return boto3.client(
        "s3",
        region_name="us-east-1",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
    )


async def test_s3_blob_store_missing_key_and_failures():
    client = _s3_client()
    store = S3BlobStore("images", client=client)

    with Stubber(client) as stubber:
        stubber.add_client_error("get_object", service_error_code="NoSuchKey", http_status_code=404)
        stubber.add_client_error("get_object", service_error_code="InternalError", http_status_code=500)

        with pytest.raises(NotFoundError):
            await store.get_bytes("missing")
        with pytest.raises(ExternalServiceError):
            await store.get_bytes("broken")


def test_s3_direct_url_is_presigned():
    store = S3BlobStore("images", client=_s3_client())

    url = store.direct_url("abc123")

    assert "images" in url
    assert "abc123" in url
    assert "Signature" in url or "X-Amz-Signature" in url


def test_setup_logging_writes_to_rotating_file(tmp_path):
    import logging

    from app.core.logging_config import setup_logging

    log_file = tmp_path / "logs" / "app.log"
    app_logger = setup_logging(log_level="debug", log_file=str(log_file))

    logging.getLogger("app.services.test").debug("mensaje de prueba")
    for handler in app_logger.handlers:
        handler.flush()

    assert app_logger.level == logging.DEBUG
    assert "mensaje de prueba" in log_file.read_text()
    assert logging.getLogger("httpx").level == logging.WARNING
    for handler in list(app_logger.handlers):
        handler.close()
        app_logger.removeHandler(handler)
    app_logger.propagate = True

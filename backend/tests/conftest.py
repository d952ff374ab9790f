# backend/tests/conftest.py
"""
Fixtures comunes: base de datos sqlite en memoria por test, servicios con estado
recién creados y un cliente httpx contra la app con las dependencias
sustituidas.
"""

import os

os.environ.setdefault("SQLALCHEMY_DATABASE_URI", "sqlite+aiosqlite://")
os.environ.setdefault("SEED_DEFAULT_CATALOG", "false")

import httpx
import pytest
from httpx import ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.api import deps
from app.db.database import create_tables
from app.main import app
from app.services.batch_upload_service import BatchUploadService
from app.services.blob_storage_service import InMemoryBlobStore
from app.services.cart_service import CartService
from app.services.category_service import CategoryService
from app.services.payment_service import PaymentService
from app.services.price_constraint_service import PriceConstraintService
from app.services.product_service import ProductService
from app.services.user_service import UserService

ROOT_ADMIN = "root-admin"
ADMIN_HEADERS = {"X-Principal": ROOT_ADMIN}
USER_HEADERS = {"X-Principal": "alice"}
STRIPE_TEST_BASE = "https://stripe.test"


@pytest.fixture
async def engine():
    test_engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await create_tables(test_engine)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def category_service():
    return CategoryService()


@pytest.fixture
def product_service(category_service):
    return ProductService(categories=category_service, price_constraints=PriceConstraintService(enforce=True))


@pytest.fixture
def batch_service(product_service):
    return BatchUploadService(products=product_service)


@pytest.fixture
def blob_store():
    return InMemoryBlobStore(base_url="http://test/api/v1")


@pytest.fixture
def cart_service():
    return CartService()


@pytest.fixture
def user_service():
    return UserService(bootstrap_admins=[ROOT_ADMIN])


@pytest.fixture
def stripe_requests():
    """Peticiones recibidas por el Stripe simulado."""
    return []


@pytest.fixture
def stripe_handler(stripe_requests):
    def handler(request: httpx.Request) -> httpx.Response:
        stripe_requests.append(request)
        if request.method == "POST" and request.url.path == "/v1/checkout/sessions":
            return httpx.Response(200, json={"id": "cs_test_1", "url": "https://checkout.stripe.test/cs_test_1"})
        if request.method == "GET" and request.url.path == "/v1/checkout/sessions/cs_paid":
            return httpx.Response(
                200,
                json={"id": "cs_paid", "status": "complete", "payment_status": "paid", "client_reference_id": "alice"},
            )
        if request.method == "GET" and request.url.path == "/v1/checkout/sessions/cs_open":
            return httpx.Response(200, json={"id": "cs_open", "status": "open", "payment_status": "unpaid"})
        return httpx.Response(404, json={"error": {"message": "No such checkout session"}})

    return handler


@pytest.fixture
def payment_service(stripe_handler):
    return PaymentService(api_base=STRIPE_TEST_BASE, transport=httpx.MockTransport(stripe_handler))


@pytest.fixture
async def client(session_factory, batch_service, blob_store, cart_service, user_service, payment_service):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[deps.get_db] = override_get_db
    app.dependency_overrides[deps.get_batch_service] = lambda: batch_service
    app.dependency_overrides[deps.get_blob_store] = lambda: blob_store
    app.dependency_overrides[deps.get_cart_service] = lambda: cart_service
    app.dependency_overrides[deps.get_user_service] = lambda: user_service
    app.dependency_overrides[deps.get_payment_service] = lambda: payment_service

    async with httpx.AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as test_client:
        yield test_client

    app.dependency_overrides.clear()

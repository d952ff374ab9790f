# backend/tests/test_payment_service.py
from urllib.parse import parse_qs

import httpx
import pytest

from app.core.exceptions import ExternalServiceError, NotFoundError, ValidationError
from app.schemas.cart_schema import CartItem
from app.schemas.category_schema import CategoryCreate
from app.schemas.settings_schema import ShoppingItem, StoreSettingsUpdate
from app.services.payment_service import PaymentService, build_checkout_form, normalize_countries
from app.services.settings_service import settings_service


def _form(request: httpx.Request) -> dict:
    return {k: v[0] for k, v in parse_qs(request.content.decode()).items()}


def test_normalize_countries():
    assert normalize_countries([" us", "gb ", "US", ""]) == ["US", "GB"]
    with pytest.raises(ValidationError):
        normalize_countries(["USA"])
    with pytest.raises(ValidationError):
        normalize_countries(["  "])


def test_build_checkout_form():
    items = [ShoppingItem(product_name="Bowl", product_description="A bowl", currency="eur", price_in_cents=1500, quantity=2)]

    form = build_checkout_form(items, "https://shop/ok", "https://shop/ko", ["ES", "FR"], "alice")

    assert form["mode"] == "payment"
    assert form["line_items[0][price_data][currency]"] == "eur"
    assert form["line_items[0][price_data][product_data][name]"] == "Bowl"
    assert form["line_items[0][price_data][product_data][description]"] == "A bowl"
    assert form["line_items[0][price_data][unit_amount]"] == "1500"
    assert form["line_items[0][quantity]"] == "2"
    assert form["shipping_address_collection[allowed_countries][1]"] == "FR"
    assert form["client_reference_id"] == "alice"


async def test_configuration(db, payment_service):
    assert not await payment_service.is_configured(db)

    with pytest.raises(ValidationError):
        await payment_service.set_configuration(db, "  ", ["US"])
    with pytest.raises(ValidationError):
        await payment_service.set_configuration(db, "sk_test", ["usa"])
    assert not await payment_service.is_configured(db)

    config = await payment_service.set_configuration(db, "sk_test", ["us", " ca"])

    assert config.allowed_countries == ["US", "CA"]
    assert await payment_service.is_configured(db)


async def test_checkout_requires_configuration_and_items(db, payment_service):
    item = ShoppingItem(product_name="Bowl", price_in_cents=100, quantity=1)

    with pytest.raises(ValidationError):
        await payment_service.create_checkout_session(db, [item], "https://ok", "https://ko")

    await payment_service.set_configuration(db, "sk_test", ["US"])
    with pytest.raises(ValidationError):
        await payment_service.create_checkout_session(db, [], "https://ok", "https://ko")


async def test_create_checkout_session(db, payment_service, stripe_requests):
    await payment_service.set_configuration(db, "sk_test", ["US"])
    item = ShoppingItem(product_name="Bowl", price_in_cents=1500, quantity=2)

    session = await payment_service.create_checkout_session(db, [item], "https://ok", "https://ko", principal="alice")

    assert session.id == "cs_test_1"
    assert session.url == "https://checkout.stripe.test/cs_test_1"
    request = stripe_requests[0]
    assert request.headers["Authorization"] == "Bearer sk_test"
    form = _form(request)
    assert form["line_items[0][price_data][unit_amount]"] == "1500"
    assert form["shipping_address_collection[allowed_countries][0]"] == "US"
    assert form["client_reference_id"] == "alice"


async def test_session_status(db, payment_service):
    await payment_service.set_configuration(db, "sk_test", ["US"])

    paid = await payment_service.get_session_status(db, "cs_paid")
    open_session = await payment_service.get_session_status(db, "cs_open")

    assert paid.status == "completed"
    assert paid.user_principal == "alice"
    assert open_session.status == "failed"
    assert open_session.error

    with pytest.raises(ExternalServiceError):
        await payment_service.get_session_status(db, "cs_missing")


async def test_transport_errors_are_external_failures(db):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    service = PaymentService(api_base="https://stripe.test", transport=httpx.MockTransport(handler))
    await service.set_configuration(db, "sk_test", ["US"])

    with pytest.raises(ExternalServiceError):
        await service.create_checkout_session(
            db, [ShoppingItem(product_name="Bowl", price_in_cents=100, quantity=1)], "https://ok", "https://ko"
        )


async def test_items_from_cart_use_catalog_prices_and_store_currency(db, payment_service, product_service, category_service):
    await category_service.add_category(db, CategoryCreate(name="ceramics"))
    await product_service.create_product(db, "Bowl", 1500, "ref", "ceramics")
    await settings_service.update_settings(
        db, StoreSettingsUpdate(store_name="Shop", contact_email="owner@example.com", currency="eur")
    )

    items = await payment_service.items_from_cart(db, [CartItem(product_id="Bowl#0", quantity=3)])

    assert items == [
        ShoppingItem(
            product_name="Bowl",
            product_description="Bowl from our ceramics collection.",
            currency="eur",
            price_in_cents=1500,
            quantity=3,
        )
    ]
    with pytest.raises(NotFoundError):
        await payment_service.items_from_cart(db, [CartItem(product_id="Gone#9", quantity=1)])

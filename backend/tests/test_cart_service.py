# backend/tests/test_cart_service.py
import pytest

from app.core.exceptions import NotFoundError, ValidationError
from app.schemas.cart_schema import CartItem


async def test_add_overwrites_quantity(cart_service):
    await cart_service.add_product_to_cart("alice", "Bowl#0", 2)
    await cart_service.add_product_to_cart("alice", "Bowl#0", 5)

    assert await cart_service.get_cart_contents("alice") == [CartItem(product_id="Bowl#0", quantity=5)]


async def test_add_rejects_non_positive_quantity(cart_service):
    with pytest.raises(ValidationError):
        await cart_service.add_product_to_cart("alice", "Bowl#0", 0)

    assert await cart_service.get_cart_contents("alice") == []


async def test_baskets_are_per_principal(cart_service):
    await cart_service.add_product_to_cart("alice", "Bowl#0", 1)
    await cart_service.add_product_to_cart("bob", "Ring#1", 3)

    assert [i.product_id for i in await cart_service.get_cart_contents("alice")] == ["Bowl#0"]
    assert [i.product_id for i in await cart_service.get_cart_contents("bob")] == ["Ring#1"]


async def test_remove_and_clear(cart_service):
    with pytest.raises(NotFoundError):
        await cart_service.remove_product_from_cart("alice", "Bowl#0")

    await cart_service.add_product_to_cart("alice", "Bowl#0", 1)
    await cart_service.add_product_to_cart("alice", "Ring#1", 2)
    await cart_service.remove_product_from_cart("alice", "Bowl#0")
    assert await cart_service.get_cart_contents("alice") == [CartItem(product_id="Ring#1", quantity=2)]

    await cart_service.clear_cart("alice")
    assert await cart_service.get_cart_contents("alice") == []
    with pytest.raises(NotFoundError):
        await cart_service.remove_product_from_cart("alice", "Ring#1")

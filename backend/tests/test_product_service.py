# backend/tests/test_product_service.py
import pytest

from app.core.exceptions import NotFoundError, ValidationError
from app.crud import price_constraint_crud
from app.schemas.category_schema import CategoryCreate
from app.services.price_constraint_service import PriceConstraintService, min_price_in_cents
from app.services.product_service import ProductService, generate_description


@pytest.fixture
async def categories(db, category_service):
    await category_service.add_category(db, CategoryCreate(name="ceramics"))
    await category_service.add_category(db, CategoryCreate(name="vases", parent="ceramics"))
    await category_service.add_category(db, CategoryCreate(name="jewelry"))


async def test_create_product(db, product_service, categories):
    product = await product_service.create_product(db, "Bowl", 1500, "ref-bowl", "ceramics")

    assert product.product_id == "Bowl#0"
    assert product.description == generate_description("Bowl", "ceramics")
    assert product.to_dict() == {
        "id": "Bowl#0",
        "name": "Bowl",
        "description": "Bowl from our ceramics collection.",
        "price": 1500,
        "category": "ceramics",
        "image": "ref-bowl",
    }

    second = await product_service.create_product(db, "Ring", 2500, "ref-ring", "jewelry")
    assert second.product_id == "Ring#1"


async def test_create_product_errors(db, product_service, categories):
    with pytest.raises(NotFoundError):
        await product_service.create_product(db, "Bowl", 1500, "ref", "paintings")
    with pytest.raises(ValidationError):
        await product_service.create_product(db, "  ", 1500, "ref", "ceramics")
    with pytest.raises(ValidationError):
        await product_service.create_product(db, "Bowl", -1, "ref", "ceramics")

    assert await product_service.get_all_products(db) == []


async def test_price_floor_is_enforced(db, product_service, categories):
    await price_constraint_crud.upsert_price_constraint(db, "ceramics", "10.00")

    with pytest.raises(ValidationError):
        await product_service.create_product(db, "Bowl", 999, "ref", "ceramics")

    product = await product_service.create_product(db, "Bowl", 1000, "ref", "ceramics")
    assert product.price == 1000


async def test_price_floor_advisory_mode(db, category_service, categories):
    service = ProductService(categories=category_service, price_constraints=PriceConstraintService(enforce=False))
    await price_constraint_crud.upsert_price_constraint(db, "ceramics", "10.00")

    product = await service.create_product(db, "Bowl", 1, "ref", "ceramics")

    assert product.price == 1


def test_min_price_in_cents():
    assert min_price_in_cents("10.50") == 1050
    assert min_price_in_cents("0") == 0


async def test_replace_image_changes_only_the_image(db, product_service, categories):
    original = await product_service.create_product(db, "Bowl", 1500, "ref-old", "ceramics")
    before = original.to_dict()

    updated = await product_service.replace_product_image(db, "Bowl#0", "ref-new")

    after = updated.to_dict()
    assert after["image"] == "ref-new"
    assert {k: v for k, v in after.items() if k != "image"} == {k: v for k, v in before.items() if k != "image"}


async def test_replace_image_unknown_product(db, product_service, categories):
    with pytest.raises(NotFoundError):
        await product_service.replace_product_image(db, "Missing#0", "ref")


async def test_list_by_category_includes_subcategories(db, product_service, categories):
    await product_service.create_product(db, "Bowl", 1500, "ref", "ceramics")
    await product_service.create_product(db, "Amphora", 3000, "ref", "vases")
    await product_service.create_product(db, "Ring", 2500, "ref", "jewelry")

    ceramics = await product_service.get_all_products(db, category="ceramics")
    vases = await product_service.get_all_products(db, category="vases")

    assert sorted(p.name for p in ceramics) == ["Amphora", "Bowl"]
    assert [p.name for p in vases] == ["Amphora"]
    assert len(await product_service.get_all_products(db)) == 3
    with pytest.raises(NotFoundError):
        await product_service.get_all_products(db, category="paintings")


async def test_products_follow_category_rename(db, product_service, category_service, categories):
    await product_service.create_product(db, "Bowl", 1500, "ref", "ceramics")

    await category_service.edit_category(db, "ceramics", CategoryCreate(name="pottery"))

    product = await product_service.get_product(db, "Bowl#0")
    assert product.to_dict()["category"] == "pottery"


async def test_zero_price_is_rejected(db, product_service, categories):
    with pytest.raises(ValidationError):
        await product_service.create_product(db, "Bowl", 0, "ref", "ceramics")

    assert await product_service.get_all_products(db) == []

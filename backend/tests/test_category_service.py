# backend/tests/test_category_service.py
import pytest

from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.crud import product_crud
from app.db.models.product_model import Product
from app.schemas.category_schema import CategoryCreate, CategoryOrderItem


async def _add(service, db, name, parent=None):
    return await service.add_category(db, CategoryCreate(name=name, parent=parent))


async def test_subcategory_is_listed_under_its_parent(db, category_service):
    await _add(category_service, db, "3d print")
    await _add(category_service, db, "shape type", parent="3d print")

    parent = await category_service.get_category(db, "3d print")
    child = await category_service.get_category(db, "shape type")

    assert parent.subcategories == ["shape type"]
    assert parent.parent is None
    assert child.to_dict() == {"name": "shape type", "parent": "3d print", "subcategories": []}


async def test_parents_never_have_a_parent(db, category_service):
    await _add(category_service, db, "ceramics")
    await _add(category_service, db, "vases", parent="ceramics")
    await _add(category_service, db, "tableware", parent="ceramics")
    await _add(category_service, db, "jewelry")

    categories = await category_service.get_all_categories(db)
    by_name = {c.name: c for c in categories}
    for category in categories:
        if category.parent is not None:
            parent = by_name[category.parent.name]
            assert category.name in parent.subcategories
            assert parent.parent is None

    assert [c.name for c in categories] == ["ceramics", "vases", "tableware", "jewelry"]


async def test_add_under_subcategory_is_rejected(db, category_service):
    await _add(category_service, db, "ceramics")
    await _add(category_service, db, "vases", parent="ceramics")

    with pytest.raises(ValidationError):
        await _add(category_service, db, "amphora", parent="vases")

    assert await category_service.get_category(db, "amphora") is None


async def test_add_rejects_duplicates_unknown_parent_and_empty_name(db, category_service):
    await _add(category_service, db, "ceramics")

    with pytest.raises(ConflictError):
        await _add(category_service, db, "ceramics")
    with pytest.raises(NotFoundError):
        await _add(category_service, db, "vases", parent="pottery")
    with pytest.raises(ValidationError):
        await _add(category_service, db, "   ")


async def test_edit_renames_and_keeps_links(db, category_service):
    await _add(category_service, db, "ceramics")
    await _add(category_service, db, "vases", parent="ceramics")

    renamed = await category_service.edit_category(db, "ceramics", CategoryCreate(name="pottery"))

    assert renamed.name == "pottery"
    assert renamed.subcategories == ["vases"]
    assert (await category_service.get_category(db, "vases")).parent.name == "pottery"
    assert await category_service.get_category(db, "ceramics") is None


async def test_edit_moves_category_between_parents(db, category_service):
    await _add(category_service, db, "ceramics")
    await _add(category_service, db, "jewelry")
    await _add(category_service, db, "beads", parent="ceramics")

    await category_service.edit_category(db, "beads", CategoryCreate(name="beads", parent="jewelry"))

    assert (await category_service.get_category(db, "ceramics")).subcategories == []
    assert (await category_service.get_category(db, "jewelry")).subcategories == ["beads"]


async def test_edit_validations(db, category_service):
    await _add(category_service, db, "ceramics")
    await _add(category_service, db, "vases", parent="ceramics")
    await _add(category_service, db, "jewelry")

    with pytest.raises(NotFoundError):
        await category_service.edit_category(db, "paintings", CategoryCreate(name="art"))
    with pytest.raises(ConflictError):
        await category_service.edit_category(db, "jewelry", CategoryCreate(name="ceramics"))
    with pytest.raises(ValidationError):
        await category_service.edit_category(db, "jewelry", CategoryCreate(name="jewelry", parent="jewelry"))
    # una categoría con hijos no puede pasar a ser subcategoría
    with pytest.raises(ValidationError):
        await category_service.edit_category(db, "ceramics", CategoryCreate(name="ceramics", parent="jewelry"))


async def test_update_changes_parent_by_name(db, category_service):
    await _add(category_service, db, "ceramics")
    await _add(category_service, db, "vases")

    updated = await category_service.update_category(db, CategoryCreate(name="vases", parent="ceramics"))

    assert updated.parent.name == "ceramics"


async def test_delete_with_subcategories_keeps_everything(db, category_service):
    await _add(category_service, db, "ceramics")
    await _add(category_service, db, "vases", parent="ceramics")

    with pytest.raises(ConflictError):
        await category_service.delete_category(db, "ceramics")

    assert await category_service.get_category(db, "ceramics") is not None
    assert await category_service.get_category(db, "vases") is not None


async def test_delete_with_products_is_refused(db, category_service):
    category = await _add(category_service, db, "ceramics")
    await product_crud.create_product(
        db,
        Product(
            product_id="Bowl#0",
            name="Bowl",
            description="Bowl",
            price=100,
            category_id=category.category_id,
            image_ref="ref",
        ),
    )

    with pytest.raises(ConflictError):
        await category_service.delete_category(db, "ceramics")


async def test_delete_leaf_category(db, category_service):
    await _add(category_service, db, "ceramics")
    await _add(category_service, db, "vases", parent="ceramics")

    await category_service.delete_category(db, "vases")

    assert await category_service.get_category(db, "vases") is None
    assert (await category_service.get_category(db, "ceramics")).subcategories == []
    with pytest.raises(NotFoundError):
        await category_service.delete_category(db, "vases")


async def test_reorder_replaces_order_and_parents(db, category_service):
    await _add(category_service, db, "ceramics")
    await _add(category_service, db, "jewelry")
    await _add(category_service, db, "vases", parent="ceramics")

    categories = await category_service.reorder_categories(
        db,
        [
            CategoryOrderItem(name="jewelry"),
            CategoryOrderItem(name="vases", parent="jewelry"),
            CategoryOrderItem(name="ceramics"),
        ],
    )

    assert [c.name for c in categories] == ["jewelry", "vases", "ceramics"]
    assert (await category_service.get_category(db, "jewelry")).subcategories == ["vases"]
    assert (await category_service.get_category(db, "ceramics")).subcategories == []


async def test_reorder_rejects_invalid_lists(db, category_service):
    await _add(category_service, db, "ceramics")
    await _add(category_service, db, "jewelry")
    await _add(category_service, db, "vases", parent="ceramics")

    with pytest.raises(ValidationError):
        await category_service.reorder_categories(db, [CategoryOrderItem(name="ceramics")])
    with pytest.raises(ValidationError):
        await category_service.reorder_categories(
            db,
            [
                CategoryOrderItem(name="ceramics"),
                CategoryOrderItem(name="jewelry", parent="vases"),
                CategoryOrderItem(name="vases", parent="ceramics"),
            ],
        )

    # nada ha cambiado
    names = [c.name for c in await category_service.get_all_categories(db)]
    assert names == ["ceramics", "jewelry", "vases"]


async def test_parent_reached_through_child_keeps_its_subcategories(db, category_service):
    await _add(category_service, db, "3d print")
    await _add(category_service, db, "shape type", parent="3d print")

    child = await category_service.get_category(db, "shape type")
    parent = await category_service.get_category(db, "3d print")

    assert child.parent.subcategories == ["shape type"]
    assert parent.to_dict() == {"name": "3d print", "parent": None, "subcategories": ["shape type"]}
    assert [c.to_dict()["subcategories"] for c in await category_service.get_all_categories(db)] == [
        ["shape type"],
        [],
    ]

import pytest
from decimal import Decimal

from app.core.exceptions import IdentityAssignmentFailed, NotFoundError, StorageUnavailable
from app.models.menu import MenuItem
from app.services.menu_service import (
    create_menu_item,
    delete_menu_item,
    get_menu_item,
    list_menu_items,
    update_menu_item,
)
from app.services.sequence_service import SequenceGenerator
from app.testing.db import memory_db
from app.testing.testing_mocks import CountingSequenceGenerator, FailingSequenceGenerator


def menu_item_data(name="Paneer Wrap", addons=0):
    return {
        "name": name,
        "main_category": "Lunch",
        "menu_category": "Wraps",
        "description": None,
        "protein": 22.0,
        "web_price": Decimal("12.00"),
        "third_party_price": Decimal("14.00"),
        "in_house_price": Decimal("11.50"),
        "ingredients": [{"ingredient_id": 1, "quantity_needed": 2.0}],
        "addons": [
            {"ingredient_id": 10 + i, "quantity_needed": 1.0, "price": 1.5}
            for i in range(addons)
        ],
    }


@pytest.mark.asyncio
async def test_ids_follow_independent_sequences():
    """A (no addons), B (2 addons), C (1 addon) created on an empty store."""
    async with memory_db():
        sequences = SequenceGenerator()

        a = await create_menu_item(menu_item_data("A"), sequences)
        b = await create_menu_item(menu_item_data("B", addons=2), sequences)
        c = await create_menu_item(menu_item_data("C", addons=1), sequences)

        assert a.id == 1
        assert b.id == 2
        assert [addon["id"] for addon in b.addons] == [1, 2]
        assert c.id == 3
        assert [addon["id"] for addon in c.addons] == [3]

        stored = await get_menu_item(2)
        assert [addon["id"] for addon in stored.addons] == [1, 2]
        assert [addon["ingredient_id"] for addon in stored.addons] == [10, 11]


@pytest.mark.asyncio
async def test_ids_are_only_issued_on_create():
    async with memory_db():
        sequences = CountingSequenceGenerator()

        item = await create_menu_item(menu_item_data(addons=2), sequences)
        assert sequences.issued == [("menuItemId", 1), ("addonId", 1), ("addonId", 2)]

        updated = await update_menu_item(item.id, {"name": "Spicy Paneer Wrap"}, sequences)
        assert len(sequences.issued) == 3
        assert updated.id == item.id
        assert updated.name == "Spicy Paneer Wrap"
        assert [addon["id"] for addon in updated.addons] == [1, 2]


@pytest.mark.asyncio
async def test_client_supplied_addon_ids_are_ignored_on_create():
    async with memory_db():
        data = menu_item_data(addons=1)
        data["addons"][0]["id"] = 999

        item = await create_menu_item(data, SequenceGenerator())

        assert item.addons[0]["id"] == 1


@pytest.mark.asyncio
async def test_failed_issuance_persists_nothing():
    async with memory_db():
        # 1st call is the menu item id, 2nd is the first addon id
        sequences = FailingSequenceGenerator(fail_on={2})

        with pytest.raises(IdentityAssignmentFailed) as excinfo:
            await create_menu_item(menu_item_data(addons=2), sequences)

        assert isinstance(excinfo.value.__cause__, StorageUnavailable)
        assert await MenuItem.all().count() == 0
        # The menu item id issued in the aborted transaction was rolled back too
        assert await SequenceGenerator().current_value("menuItemId") == 0


@pytest.mark.asyncio
async def test_update_assigns_ids_to_new_addons_only():
    async with memory_db():
        sequences = SequenceGenerator()
        item = await create_menu_item(menu_item_data(addons=2), sequences)
        first, second = item.addons

        updated = await update_menu_item(item.id, {
            "addons": [
                {**second, "price": 3.0},
                {"id": None, "ingredient_id": 42, "quantity_needed": 1.0, "price": 0.5},
            ],
        }, sequences)

        assert [addon["id"] for addon in updated.addons] == [second["id"], 3]
        assert updated.addons[0]["price"] == 3.0
        assert first["id"] not in [addon["id"] for addon in (await get_menu_item(item.id)).addons]


@pytest.mark.asyncio
async def test_update_rejects_foreign_addon_id():
    async with memory_db():
        sequences = SequenceGenerator()
        item = await create_menu_item(menu_item_data(addons=1), sequences)

        with pytest.raises(ValueError, match="does not belong"):
            await update_menu_item(item.id, {
                "addons": [{"id": 77, "ingredient_id": 1, "quantity_needed": 1.0, "price": 0}],
            }, sequences)

        stored = await get_menu_item(item.id)
        assert [addon["id"] for addon in stored.addons] == [1]


@pytest.mark.asyncio
async def test_update_rejects_repeated_addon_id():
    async with memory_db():
        sequences = SequenceGenerator()
        item = await create_menu_item(menu_item_data(addons=1), sequences)
        addon = item.addons[0]

        with pytest.raises(ValueError, match="more than once"):
            await update_menu_item(item.id, {
                "addons": [dict(addon), dict(addon, ingredient_id=99)],
            }, sequences)

        stored = await get_menu_item(item.id)
        addon_ids = [a["id"] for a in stored.addons]
        assert addon_ids == [1]
        assert len(set(addon_ids)) == len(addon_ids)


@pytest.mark.asyncio
async def test_update_rejects_null_required_field():
    async with memory_db():
        sequences = SequenceGenerator()
        item = await create_menu_item(menu_item_data(), sequences)

        with pytest.raises(ValueError, match="name"):
            await update_menu_item(item.id, {"name": None}, sequences)

        updated = await update_menu_item(item.id, {"description": None, "web_price": Decimal("13.25")}, sequences)
        assert updated.web_price == Decimal("13.25")


@pytest.mark.asyncio
async def test_missing_menu_item_raises_not_found():
    async with memory_db():
        sequences = SequenceGenerator()
        with pytest.raises(NotFoundError):
            await get_menu_item(404)
        with pytest.raises(NotFoundError):
            await update_menu_item(404, {"name": "Ghost"}, sequences)
        with pytest.raises(NotFoundError):
            await delete_menu_item(404)


@pytest.mark.asyncio
async def test_delete_and_list():
    async with memory_db():
        sequences = SequenceGenerator()
        a = await create_menu_item(menu_item_data("A"), sequences)
        b = await create_menu_item(menu_item_data("B"), sequences)

        await delete_menu_item(a.id)

        assert [m.id for m in await list_menu_items()] == [b.id]
        # Deleted ids are never reissued
        c = await create_menu_item(menu_item_data("C"), sequences)
        assert c.id == 3

import logging
from typing import Any, Dict, List, Optional

from tortoise.transactions import in_transaction

from app.core.config import MENU_ITEM_SEQUENCE, ADDON_SEQUENCE
from app.core.exceptions import IdentityAssignmentFailed, NotFoundError, SequenceError
from app.models.menu import MenuItem
from app.services.sequence_service import SequenceGenerator

log = logging.getLogger(__name__)

# Fields a client may explicitly clear with null on update
NULLABLE_FIELDS = {"description", "ingredients", "addons"}


async def assign_identities_on_create(record: Dict[str, Any], sequences: SequenceGenerator, conn: Any) -> Dict[str, Any]:
    """
    Mints the menu item id and one addon id per addon, in addon order.

    Must run inside the transaction that inserts the record: if any issuance
    fails the caller's transaction rolls back and nothing is persisted.
    """
    try:
        record["id"] = await sequences.next_value(MENU_ITEM_SEQUENCE, conn=conn)
        for addon in record.get("addons", []):
            addon["id"] = await sequences.next_value(ADDON_SEQUENCE, conn=conn)
    except SequenceError as e:
        raise IdentityAssignmentFailed("Could not assign ids to the new menu item.") from e
    return record


async def create_menu_item(data: Dict[str, Any], sequences: SequenceGenerator) -> MenuItem:
    """
    Creates a menu item. Ids are assigned here and only here;
    `data` is the validated request payload without ids.
    """
    record = dict(data)
    record["ingredients"] = [dict(i) for i in record.get("ingredients", [])]
    # Clients never choose addon ids on create
    record["addons"] = [
        {k: v for k, v in dict(a).items() if k != "id"} for a in record.get("addons", [])
    ]

    async with in_transaction() as conn:
        await assign_identities_on_create(record, sequences, conn)
        menu_item = await MenuItem.create(using_db=conn, **record)

    log.info(f"Menu item {menu_item.id} created with {len(menu_item.addons)} addon(s).")
    return menu_item


async def list_menu_items() -> List[MenuItem]:
    return await MenuItem.all().order_by('id')


async def get_menu_item(menu_item_id: int) -> MenuItem:
    menu_item = await MenuItem.get_or_none(id=menu_item_id)
    if not menu_item:
        raise NotFoundError(f"Menu item {menu_item_id} not found.")
    return menu_item


async def _reconcile_addons(
    current: List[Dict[str, Any]],
    incoming: List[Dict[str, Any]],
    sequences: SequenceGenerator,
    conn: Any,
) -> List[Dict[str, Any]]:
    """
    Builds the new addon list for an update. Addons that carry an id must
    already belong to the item and keep it; addons without one get a new id.
    """
    known_ids = {a["id"] for a in current if a.get("id") is not None}
    kept_ids = set()
    result = []
    for addon in incoming:
        addon = dict(addon)
        addon_id: Optional[int] = addon.get("id")
        if addon_id is None:
            try:
                addon["id"] = await sequences.next_value(ADDON_SEQUENCE, conn=conn)
            except SequenceError as e:
                raise IdentityAssignmentFailed("Could not assign ids to the new addons.") from e
        elif addon_id not in known_ids:
            raise ValueError(f"Addon {addon_id} does not belong to this menu item.")
        elif addon_id in kept_ids:
            raise ValueError(f"Addon {addon_id} appears more than once.")
        else:
            kept_ids.add(addon_id)
        result.append(addon)
    return result


async def update_menu_item(menu_item_id: int, changes: Dict[str, Any], sequences: SequenceGenerator) -> MenuItem:
    """
    Applies a partial update. The menu item id is never touched; addon ids
    are only issued for addons that arrive without one.
    """
    changes = {k: v for k, v in changes.items() if k != "id"}
    cleared = sorted(k for k, v in changes.items() if v is None and k not in NULLABLE_FIELDS)
    if cleared:
        raise ValueError(f"Fields cannot be null: {', '.join(cleared)}.")

    async with in_transaction() as conn:
        menu_item = await MenuItem.filter(id=menu_item_id).using_db(conn).select_for_update().first()
        if not menu_item:
            raise NotFoundError(f"Menu item {menu_item_id} not found.")

        if "ingredients" in changes:
            changes["ingredients"] = [dict(i) for i in changes["ingredients"] or []]
        if "addons" in changes:
            changes["addons"] = await _reconcile_addons(menu_item.addons, changes["addons"] or [], sequences, conn)

        for field, value in changes.items():
            setattr(menu_item, field, value)
        await menu_item.save(using_db=conn)

    log.info(f"Menu item {menu_item_id} updated ({', '.join(sorted(changes)) or 'no fields'}).")
    return menu_item


async def delete_menu_item(menu_item_id: int) -> None:
    deleted = await MenuItem.filter(id=menu_item_id).delete()
    if not deleted:
        raise NotFoundError(f"Menu item {menu_item_id} not found.")
    log.info(f"Menu item {menu_item_id} deleted.")

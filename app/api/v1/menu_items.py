import logging
from fastapi import APIRouter, Depends, HTTPException, Response, status
from app.core.exceptions import IdentityAssignmentFailed, NotFoundError
from app.models.menu import MenuItem
from app.schemas.menu import MenuItemRequest, MenuItemResponse, MenuItemUpdateRequest
from app.schemas.response import SuccessResponse
from app.services.menu_service import (
    create_menu_item,
    delete_menu_item,
    get_menu_item,
    list_menu_items,
    update_menu_item,
)
from app.services.sequence_service import SequenceGenerator, get_sequence_generator

log = logging.getLogger(__name__)

router = APIRouter()


def _serialize(menu_item: MenuItem) -> dict:
    return MenuItemResponse(
        id=menu_item.id,
        name=menu_item.name,
        main_category=menu_item.main_category,
        menu_category=menu_item.menu_category,
        description=menu_item.description,
        protein=menu_item.protein,
        web_price=menu_item.web_price,
        third_party_price=menu_item.third_party_price,
        in_house_price=menu_item.in_house_price,
        ingredients=menu_item.ingredients,
        addons=menu_item.addons,
        created_at=str(menu_item.created_at),
        updated_at=str(menu_item.updated_at),
    ).model_dump()


@router.get("/", response_model=SuccessResponse)
async def list_menu_items_endpoint():
    """Lists all menu items ordered by id."""
    try:
        menu_items = await list_menu_items()
        return SuccessResponse(data=[_serialize(m) for m in menu_items])
    except Exception as e:
        log.error(f"Error listing menu items: {e}")
        raise HTTPException(status_code=500, detail="Server failed to list menu items.")


@router.post("/", status_code=status.HTTP_201_CREATED, response_model=SuccessResponse)
async def create_menu_item_endpoint(
    request_data: MenuItemRequest,
    sequences: SequenceGenerator = Depends(get_sequence_generator),
):
    """
    Creates a menu item. The item id and every addon id are issued by the server;
    if any of them cannot be issued nothing is saved and the request can be retried.
    """
    try:
        menu_item = await create_menu_item(request_data.model_dump(), sequences)
        return SuccessResponse(data=_serialize(menu_item))
    except IdentityAssignmentFailed as e:
        log.error(f"Identity assignment failed creating menu item: {e} (cause: {e.__cause__})")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not assign menu item ids. Nothing was saved; retry the request.",
        )
    except ValueError as e:
        log.error(f"Value error creating menu item: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        log.error(f"Error creating menu item: {e}")
        raise HTTPException(status_code=500, detail="Server failed to create menu item.")


@router.get("/{menu_item_id}", response_model=SuccessResponse)
async def get_menu_item_endpoint(menu_item_id: int):
    """Fetches a single menu item."""
    try:
        menu_item = await get_menu_item(menu_item_id)
        return SuccessResponse(data=_serialize(menu_item))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        log.error(f"Error fetching menu item {menu_item_id}: {e}")
        raise HTTPException(status_code=500, detail="Server failed to fetch menu item.")


@router.put("/{menu_item_id}", response_model=SuccessResponse)
async def update_menu_item_endpoint(
    menu_item_id: int,
    payload: MenuItemUpdateRequest,
    sequences: SequenceGenerator = Depends(get_sequence_generator),
):
    """
    Updates the supplied fields. Addons sent with an `id` keep it;
    addons sent without one are new and get an id from the addon sequence.
    """
    try:
        menu_item = await update_menu_item(menu_item_id, payload.model_dump(exclude_unset=True), sequences)
        return SuccessResponse(data=_serialize(menu_item))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except IdentityAssignmentFailed as e:
        log.error(f"Identity assignment failed updating menu item {menu_item_id}: {e} (cause: {e.__cause__})")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not assign addon ids. Nothing was saved; retry the request.",
        )
    except ValueError as e:
        log.error(f"Value error updating menu item {menu_item_id}: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        log.error(f"Error updating menu item {menu_item_id}: {e}")
        raise HTTPException(status_code=500, detail="Server failed to update menu item.")


@router.delete("/{menu_item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_menu_item_endpoint(menu_item_id: int):
    try:
        await delete_menu_item(menu_item_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        log.error(f"Error deleting menu item {menu_item_id}: {e}")
        raise HTTPException(status_code=500, detail="Server failed to delete menu item.")

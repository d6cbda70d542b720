import logging
from fastapi import APIRouter, HTTPException, Response, status
from app.core.exceptions import NotFoundError
from app.models.ingredient import Ingredient
from app.schemas.ingredient import IngredientRequest, IngredientResponse, IngredientUpdateRequest
from app.schemas.response import SuccessResponse
from app.services.ingredient_service import (
    create_ingredient,
    delete_ingredient,
    get_ingredient,
    get_low_stock_ingredients,
    list_ingredients,
    update_ingredient,
)

log = logging.getLogger(__name__)

router = APIRouter()


def _serialize(ingredient: Ingredient) -> dict:
    return IngredientResponse(
        id=ingredient.id,
        name=ingredient.name,
        description=ingredient.description,
        available_quantity=ingredient.available_quantity,
        low_stock_threshold=ingredient.low_stock_threshold,
        updated_user=ingredient.updated_user,
        is_low_stock=ingredient.is_low_stock,
        updated_at=str(ingredient.updated_at),
    ).model_dump()


@router.get("/", response_model=SuccessResponse)
async def list_ingredients_endpoint():
    """Lists all ingredients ordered by id."""
    try:
        ingredients = await list_ingredients()
        return SuccessResponse(data=[_serialize(i) for i in ingredients])
    except Exception as e:
        log.error(f"Error listing ingredients: {e}")
        raise HTTPException(status_code=500, detail="Server failed to list ingredients.")


@router.post("/", status_code=status.HTTP_201_CREATED, response_model=SuccessResponse)
async def create_ingredient_endpoint(request_data: IngredientRequest):
    try:
        ingredient = await create_ingredient(request_data.model_dump())
        return SuccessResponse(data=_serialize(ingredient))
    except Exception as e:
        log.error(f"Error creating ingredient: {e}")
        raise HTTPException(status_code=500, detail="Server failed to create ingredient.")


# Declared before /{ingredient_id} so the literal path wins
@router.get("/low-stock", response_model=SuccessResponse)
async def low_stock_endpoint():
    """Returns ingredients whose available quantity is less than or equal to their threshold."""
    try:
        ingredients = await get_low_stock_ingredients()
        return SuccessResponse(data=[_serialize(i) for i in ingredients])
    except Exception as e:
        log.error(f"Error fetching low-stock ingredients: {e}")
        raise HTTPException(status_code=500, detail="Server failed to fetch low-stock ingredients.")


@router.get("/{ingredient_id}", response_model=SuccessResponse)
async def get_ingredient_endpoint(ingredient_id: int):
    try:
        ingredient = await get_ingredient(ingredient_id)
        return SuccessResponse(data=_serialize(ingredient))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        log.error(f"Error fetching ingredient {ingredient_id}: {e}")
        raise HTTPException(status_code=500, detail="Server failed to fetch ingredient.")


@router.put("/{ingredient_id}", response_model=SuccessResponse)
async def update_ingredient_endpoint(ingredient_id: int, payload: IngredientUpdateRequest):
    try:
        ingredient = await update_ingredient(ingredient_id, payload.model_dump(exclude_unset=True))
        return SuccessResponse(data=_serialize(ingredient))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        log.error(f"Value error updating ingredient {ingredient_id}: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        log.error(f"Error updating ingredient {ingredient_id}: {e}")
        raise HTTPException(status_code=500, detail="Server failed to update ingredient.")


@router.delete("/{ingredient_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_ingredient_endpoint(ingredient_id: int):
    try:
        await delete_ingredient(ingredient_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        log.error(f"Error deleting ingredient {ingredient_id}: {e}")
        raise HTTPException(status_code=500, detail="Server failed to delete ingredient.")

import logging
from typing import Any, Dict, List

from tortoise.expressions import F

from app.core.exceptions import NotFoundError
from app.models.ingredient import Ingredient

log = logging.getLogger(__name__)

NULLABLE_FIELDS = {"description", "updated_user"}


async def create_ingredient(data: Dict[str, Any]) -> Ingredient:
    ingredient = await Ingredient.create(**data)
    log.info(f"Ingredient {ingredient.id} ({ingredient.name}) created.")
    return ingredient


async def list_ingredients() -> List[Ingredient]:
    return await Ingredient.all().order_by('id')


async def get_ingredient(ingredient_id: int) -> Ingredient:
    ingredient = await Ingredient.get_or_none(id=ingredient_id)
    if not ingredient:
        raise NotFoundError(f"Ingredient {ingredient_id} not found.")
    return ingredient


async def update_ingredient(ingredient_id: int, changes: Dict[str, Any]) -> Ingredient:
    """Partial update of the supplied fields."""
    changes = {k: v for k, v in changes.items() if k != "id"}
    cleared = sorted(k for k, v in changes.items() if v is None and k not in NULLABLE_FIELDS)
    if cleared:
        raise ValueError(f"Fields cannot be null: {', '.join(cleared)}.")

    ingredient = await get_ingredient(ingredient_id)
    for field, value in changes.items():
        setattr(ingredient, field, value)
    await ingredient.save()

    if ingredient.is_low_stock:
        log.warning(f"Ingredient {ingredient.id} is low on stock: {ingredient.available_quantity} <= {ingredient.low_stock_threshold}")
    return ingredient


async def delete_ingredient(ingredient_id: int) -> None:
    deleted = await Ingredient.filter(id=ingredient_id).delete()
    if not deleted:
        raise NotFoundError(f"Ingredient {ingredient_id} not found.")
    log.info(f"Ingredient {ingredient_id} deleted.")


async def get_low_stock_ingredients() -> List[Ingredient]:
    """Ingredients whose available quantity is at or below their threshold."""
    return await Ingredient.filter(available_quantity__lte=F("low_stock_threshold")).order_by('id')

# scripts/seed_data.py
import asyncio
from decimal import Decimal
from app.core.db import init_db, close_db
from app.models.ingredient import Ingredient
from app.models.menu import MenuItem
from app.services.ingredient_service import create_ingredient
from app.services.menu_service import create_menu_item
from app.services.sequence_service import get_sequence_generator

INGREDIENTS = [
    {"name": "Oats", "description": "Organic whole grain oats", "available_quantity": 50, "low_stock_threshold": 10},
    {"name": "Paneer", "description": "Fresh cottage cheese", "available_quantity": 3, "low_stock_threshold": 5},
    {"name": "Almond Milk", "description": "Unsweetened", "available_quantity": 20, "low_stock_threshold": 5},
]

async def seed():
    # Ingredients are looked up by name so re-running the script is idempotent
    ids = {}
    for data in INGREDIENTS:
        ingredient = await Ingredient.get_or_none(name=data["name"])
        if not ingredient:
            ingredient = await create_ingredient({**data, "updated_user": "seed@example.com"})
        ids[ingredient.name] = ingredient.id
    print("Ingredients:", ids)

    if await MenuItem.exists(name="Protein Oat Bowl"):
        print("Menu already seeded.")
        return

    sequences = get_sequence_generator()
    bowl = await create_menu_item({
        "name": "Protein Oat Bowl",
        "main_category": "Breakfast",
        "menu_category": "Bowls",
        "description": "Oats with almond milk",
        "protein": 18,
        "web_price": Decimal("9.50"),
        "third_party_price": Decimal("11.00"),
        "in_house_price": Decimal("9.00"),
        "ingredients": [
            {"ingredient_id": ids["Oats"], "quantity_needed": 1},
            {"ingredient_id": ids["Almond Milk"], "quantity_needed": 1},
        ],
        "addons": [
            {"ingredient_id": ids["Paneer"], "quantity_needed": 1, "price": 2.5},
        ],
    }, sequences)
    wrap = await create_menu_item({
        "name": "Paneer Wrap",
        "main_category": "Lunch",
        "menu_category": "Wraps",
        "protein": 22,
        "web_price": Decimal("12.00"),
        "third_party_price": Decimal("14.00"),
        "in_house_price": Decimal("11.50"),
        "ingredients": [{"ingredient_id": ids["Paneer"], "quantity_needed": 2}],
    }, sequences)
    print("Menu items:", bowl.id, wrap.id)

async def main():
    await init_db()
    try:
        await seed()
    finally:
        await close_db()

if __name__ == "__main__":
    asyncio.run(main())

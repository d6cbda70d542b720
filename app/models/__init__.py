# app/models/__init__.py
from .counter import Counter
from .ingredient import Ingredient
from .menu import MenuItem

# Export all models
__all__ = [
    "Counter",
    "Ingredient",
    "MenuItem",
]

from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field


class IngredientRequirement(BaseModel):
    """Quantity of one ingredient consumed by a menu item."""
    ingredient_id: int = Field(..., ge=1, description="ID of the required ingredient.")
    quantity_needed: float = Field(..., gt=0, description="Quantity consumed per serving.")

class AddonRequest(BaseModel):
    """Addon as sent on create. Its id is always assigned by the server."""
    ingredient_id: int = Field(..., ge=1)
    quantity_needed: float = Field(..., gt=0)
    price: float = Field(0, ge=0, description="Extra charge for the addon.")

class AddonUpdateRequest(AddonRequest):
    """Addon as sent on update. Keep `id` to retain an existing addon, omit it to add a new one."""
    id: Optional[int] = None

class AddonResponse(AddonRequest):
    id: int

class MenuItemRequest(BaseModel):
    """Schema for creating a menu item."""
    name: str = Field(..., min_length=1, description="Display name (e.g., Chicken Biryani).")
    main_category: str = Field(..., min_length=1)
    menu_category: str = Field(..., min_length=1)
    description: Optional[str] = None
    protein: float = Field(..., ge=0, description="Protein per serving, in grams.")
    web_price: Decimal = Field(..., ge=0)
    third_party_price: Decimal = Field(..., ge=0, description="Price on delivery platforms.")
    in_house_price: Decimal = Field(..., ge=0)
    ingredients: List[IngredientRequirement] = Field(default_factory=list)
    addons: List[AddonRequest] = Field(default_factory=list)

class MenuItemUpdateRequest(BaseModel):
    """Partial update: only the supplied fields change. The item id never changes."""
    name: Optional[str] = Field(None, min_length=1)
    main_category: Optional[str] = Field(None, min_length=1)
    menu_category: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    protein: Optional[float] = Field(None, ge=0)
    web_price: Optional[Decimal] = Field(None, ge=0)
    third_party_price: Optional[Decimal] = Field(None, ge=0)
    in_house_price: Optional[Decimal] = Field(None, ge=0)
    ingredients: Optional[List[IngredientRequirement]] = None
    addons: Optional[List[AddonUpdateRequest]] = None

class MenuItemResponse(BaseModel):
    id: int
    name: str
    main_category: str
    menu_category: str
    description: Optional[str] = None
    protein: float
    web_price: Decimal
    third_party_price: Decimal
    in_house_price: Decimal
    ingredients: List[IngredientRequirement]
    addons: List[AddonResponse]
    created_at: str
    updated_at: str

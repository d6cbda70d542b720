from typing import Optional
from pydantic import BaseModel, Field


class IngredientRequest(BaseModel):
    name: str = Field(..., min_length=1, description="Name of the ingredient (e.g., Oats).")
    description: Optional[str] = None
    available_quantity: int = Field(..., ge=0, description="Units currently in stock.")
    low_stock_threshold: int = Field(..., ge=0, description="Stock level at or below which the ingredient is low.")
    updated_user: Optional[str] = Field(None, description="Who made the change (e.g., admin@example.com).")

class IngredientUpdateRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    available_quantity: Optional[int] = Field(None, ge=0)
    low_stock_threshold: Optional[int] = Field(None, ge=0)
    updated_user: Optional[str] = None

class IngredientResponse(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    available_quantity: int
    low_stock_threshold: int
    updated_user: Optional[str] = None
    is_low_stock: bool
    updated_at: str

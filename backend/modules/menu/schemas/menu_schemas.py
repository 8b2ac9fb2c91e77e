# backend/modules/menu/schemas/menu_schemas.py

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..models.menu_models import ModifierType


class MenuItemBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    category: Optional[str] = Field(None, max_length=100)
    price: Decimal = Field(..., ge=0, decimal_places=2)
    cost_price: Decimal = Field(Decimal("0"), ge=0, decimal_places=2)
    is_available: bool = True
    preparation_time: int = Field(0, ge=0)
    estimated_prep_time: int = Field(15, ge=0)
    spice_level: Optional[int] = Field(None, ge=0, le=5)
    calories: Optional[int] = Field(None, ge=0)
    allergens: Optional[List[str]] = None
    dietary_tags: Optional[List[str]] = None


class MenuItemCreate(MenuItemBase):
    pass


class MenuItemUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    category: Optional[str] = Field(None, max_length=100)
    price: Optional[Decimal] = Field(None, ge=0, decimal_places=2)
    cost_price: Optional[Decimal] = Field(None, ge=0, decimal_places=2)
    is_available: Optional[bool] = None
    preparation_time: Optional[int] = Field(None, ge=0)
    estimated_prep_time: Optional[int] = Field(None, ge=0)
    spice_level: Optional[int] = Field(None, ge=0, le=5)
    calories: Optional[int] = Field(None, ge=0)
    allergens: Optional[List[str]] = None
    dietary_tags: Optional[List[str]] = None


class MenuItemResponse(MenuItemBase):
    id: int
    restaurant_id: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ModifierCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    price_adjustment: Decimal = Field(Decimal("0"), decimal_places=2)
    modifier_type: ModifierType = ModifierType.ADDITION
    applicable_categories: Optional[List[str]] = None
    is_active: bool = True


class ModifierUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None
    price_adjustment: Optional[Decimal] = Field(None, decimal_places=2)
    modifier_type: Optional[ModifierType] = None
    applicable_categories: Optional[List[str]] = None
    is_active: Optional[bool] = None


class ModifierResponse(ModifierCreate):
    id: int
    restaurant_id: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ItemModifierAttach(BaseModel):
    modifier_id: int
    is_required: bool = False


class ItemModifierResponse(BaseModel):
    modifier_id: int
    is_required: bool
    modifier: ModifierResponse

    model_config = ConfigDict(from_attributes=True)

# backend/modules/inventory/schemas/inventory_schemas.py

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..models.inventory_models import TransactionType


class SupplierCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    contact_person: Optional[str] = Field(None, max_length=100)
    email: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=20)
    address: Optional[str] = None


class SupplierResponse(SupplierCreate):
    id: int
    restaurant_id: int
    is_active: bool

    model_config = ConfigDict(from_attributes=True)


class InventoryItemCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    supplier_id: Optional[int] = None
    unit: str = Field("kg", max_length=20)
    current_stock: Decimal = Field(Decimal("0"), ge=0)
    minimum_stock: Decimal = Field(Decimal("0"), ge=0)
    maximum_stock: Optional[Decimal] = Field(None, ge=0)
    unit_cost: Decimal = Field(Decimal("0"), ge=0)
    category: Optional[str] = Field(None, max_length=100)
    storage_location: Optional[str] = Field(None, max_length=100)
    expiry_date: Optional[date] = None


class InventoryItemUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    supplier_id: Optional[int] = None
    minimum_stock: Optional[Decimal] = Field(None, ge=0)
    maximum_stock: Optional[Decimal] = Field(None, ge=0)
    unit_cost: Optional[Decimal] = Field(None, ge=0)
    category: Optional[str] = Field(None, max_length=100)
    storage_location: Optional[str] = Field(None, max_length=100)
    expiry_date: Optional[date] = None
    is_active: Optional[bool] = None


class InventoryItemResponse(BaseModel):
    id: int
    restaurant_id: int
    supplier_id: Optional[int] = None
    name: str
    description: Optional[str] = None
    unit: str
    current_stock: Decimal
    minimum_stock: Decimal
    maximum_stock: Optional[Decimal] = None
    unit_cost: Decimal
    category: Optional[str] = None
    storage_location: Optional[str] = None
    expiry_date: Optional[date] = None
    is_active: bool
    is_low_stock: bool

    model_config = ConfigDict(from_attributes=True)


class IngredientLink(BaseModel):
    inventory_item_id: int
    quantity_required: Decimal = Field(..., gt=0)
    unit: str = Field(..., max_length=20)


class IngredientResponse(IngredientLink):
    id: int
    menu_item_id: int

    model_config = ConfigDict(from_attributes=True)


class InventoryTransactionCreate(BaseModel):
    transaction_type: TransactionType
    quantity: Decimal
    unit_cost: Optional[Decimal] = Field(None, ge=0)
    reference_id: Optional[int] = None
    notes: Optional[str] = None

    @model_validator(mode="after")
    def check_quantity(self):
        # Adjustments carry a sign; every other movement is a positive amount
        if self.transaction_type == TransactionType.ADJUSTMENT:
            if self.quantity == 0:
                raise ValueError("Adjustment quantity cannot be zero")
        elif self.quantity <= 0:
            raise ValueError("Quantity must be positive")
        return self


class InventoryTransactionResponse(BaseModel):
    id: int
    inventory_item_id: int
    transaction_type: TransactionType
    quantity: Decimal
    unit_cost: Optional[Decimal] = None
    total_cost: Optional[Decimal] = None
    stock_after: Decimal
    reference_id: Optional[int] = None
    notes: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

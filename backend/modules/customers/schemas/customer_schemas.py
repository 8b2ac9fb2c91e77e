# backend/modules/customers/schemas/customer_schemas.py

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator

from ..models.customer_models import LoyaltyTier


class CustomerProfileBase(BaseModel):
    name: Optional[str] = Field(None, max_length=200)
    date_of_birth: Optional[date] = None
    dietary_preferences: Optional[List[str]] = None
    allergens: Optional[List[str]] = None
    favorite_restaurant_id: Optional[int] = None
    preferred_table_size: Optional[int] = Field(None, gt=0)
    notes: Optional[str] = None


class CustomerProfileCreate(CustomerProfileBase):
    """Aggregate counters are deliberately absent; they start at zero."""
    phone: Optional[str] = Field(None, min_length=3, max_length=20)
    email: Optional[EmailStr] = None

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def require_contact(self):
        if not self.phone and not self.email:
            raise ValueError("Either phone or email is required")
        return self


class CustomerProfileUpdate(CustomerProfileBase):
    phone: Optional[str] = Field(None, min_length=3, max_length=20)
    email: Optional[EmailStr] = None

    model_config = ConfigDict(extra="forbid")


class CustomerProfileResponse(CustomerProfileBase):
    id: int
    phone: Optional[str] = None
    email: Optional[str] = None
    total_visits: int
    total_spent: Decimal
    loyalty_points: int
    loyalty_tier: LoyaltyTier
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

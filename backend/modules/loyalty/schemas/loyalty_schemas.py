# backend/modules/loyalty/schemas/loyalty_schemas.py

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class LoyaltyProgramBase(BaseModel):
    """Base loyalty program schema"""
    name: str = Field(..., max_length=100)
    description: Optional[str] = None
    points_per_dollar: Decimal = Field(Decimal("1.00"), ge=0)
    redemption_rate: Decimal = Field(Decimal("0.01"), ge=0)
    minimum_redemption_points: int = Field(100, ge=0)
    is_active: bool = True


class LoyaltyProgramCreate(LoyaltyProgramBase):
    pass


class LoyaltyProgramUpdate(BaseModel):
    name: Optional[str] = Field(None, max_length=100)
    description: Optional[str] = None
    points_per_dollar: Optional[Decimal] = Field(None, ge=0)
    redemption_rate: Optional[Decimal] = Field(None, ge=0)
    minimum_redemption_points: Optional[int] = Field(None, ge=0)
    is_active: Optional[bool] = None


class LoyaltyProgramResponse(LoyaltyProgramBase):
    id: int
    restaurant_id: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PointsPreview(BaseModel):
    order_total: Decimal
    points_earned: int
    points_per_dollar: Decimal
    redemption_rate: Decimal
    minimum_redemption_points: int


class PointsTransactionResponse(BaseModel):
    id: int
    customer_profile_id: int
    restaurant_id: int
    order_id: Optional[int] = None
    points_earned: int
    points_used: int
    points_balance_after: int
    reason: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

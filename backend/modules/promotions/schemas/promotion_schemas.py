# backend/modules/promotions/schemas/promotion_schemas.py

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..models.promotion_models import DiscountType


class CampaignBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    discount_type: DiscountType
    discount_value: Optional[Decimal] = Field(None, gt=0, decimal_places=2)
    minimum_order_amount: Optional[Decimal] = Field(None, ge=0, decimal_places=2)
    applicable_items: Optional[List[int]] = None
    start_date: datetime
    end_date: datetime
    is_active: bool = True
    usage_limit: Optional[int] = Field(None, gt=0)


class CampaignCreate(CampaignBase):
    @model_validator(mode="after")
    def check_discount(self):
        if self.end_date <= self.start_date:
            raise ValueError("end_date must be after start_date")
        if self.discount_type != DiscountType.BUY_ONE_GET_ONE and self.discount_value is None:
            raise ValueError(f"{self.discount_type.value} campaigns need a discount_value")
        if self.discount_type == DiscountType.PERCENTAGE and self.discount_value > 100:
            raise ValueError("Percentage discount cannot exceed 100")
        return self


class CampaignUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    minimum_order_amount: Optional[Decimal] = Field(None, ge=0, decimal_places=2)
    applicable_items: Optional[List[int]] = None
    end_date: Optional[datetime] = None
    is_active: Optional[bool] = None
    usage_limit: Optional[int] = Field(None, gt=0)


class CampaignResponse(CampaignBase):
    id: int
    restaurant_id: int
    current_usage: int
    remaining_uses: Optional[int] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

# backend/modules/analytics/schemas/analytics_schemas.py

from datetime import date, datetime
from decimal import Decimal
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from modules.customers.models.customer_models import LoyaltyTier
from ..models.analytics_models import FeedbackType


class PopularItem(BaseModel):
    menu_item_id: int
    name: str
    times_ordered: int
    total_quantity: int
    total_revenue: Decimal
    average_price: Decimal


class RevenueTrendPoint(BaseModel):
    order_date: date
    total_orders: int
    daily_revenue: Decimal
    average_order_value: Decimal


class LowStockItem(BaseModel):
    id: int
    name: str
    current_stock: Decimal
    minimum_stock: Decimal
    unit: str
    category: Optional[str] = None
    shortage_amount: Decimal


class CustomerLoyaltyEntry(BaseModel):
    id: int
    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    total_visits: int
    total_spent: Decimal
    loyalty_points: int
    favorite_restaurant: Optional[str] = None
    loyalty_tier: LoyaltyTier


class DailySalesSummaryResponse(BaseModel):
    id: int
    restaurant_id: int
    date: date
    total_orders: int
    total_revenue: Decimal
    average_order_value: Decimal
    most_popular_item_id: Optional[int] = None
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class FeedbackCreate(BaseModel):
    order_id: Optional[int] = None
    customer_name: Optional[str] = Field(None, max_length=200)
    customer_email: Optional[EmailStr] = None
    rating: int = Field(..., ge=1, le=5)
    feedback_text: Optional[str] = Field(None, max_length=5000)
    feedback_type: FeedbackType = FeedbackType.OVERALL
    is_public: bool = False


class FeedbackResponse(BaseModel):
    id: int
    restaurant_id: int
    order_id: Optional[int] = None
    customer_name: Optional[str] = None
    rating: int
    feedback_text: Optional[str] = None
    feedback_type: FeedbackType
    is_public: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class FeedbackSummary(BaseModel):
    total_feedback: int
    average_rating: Optional[Decimal] = None
    by_type: Dict[str, Decimal] = {}


class MenuItemAnalyticsResponse(BaseModel):
    menu_item_id: int
    date: date
    times_ordered: int
    total_quantity: int
    total_revenue: Decimal
    average_rating: Optional[Decimal] = None

    model_config = ConfigDict(from_attributes=True)


class StaffPerformanceEntry(BaseModel):
    staff_id: int
    staff_name: Optional[str] = None
    role_name: str
    orders_handled: int
    average_rating: Optional[Decimal] = None
    total_hours_worked: Decimal

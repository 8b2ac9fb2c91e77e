# backend/modules/orders/schemas/order_schemas.py

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..enums.order_enums import (
    NotificationType, OrderSource, OrderStatus, RecipientType,
)


class OrderItemCreate(BaseModel):
    menu_item_id: int
    quantity: int = Field(1, gt=0)
    special_instructions: Optional[str] = None
    modifier_ids: List[int] = []


class OrderCreate(BaseModel):
    items: List[OrderItemCreate] = Field(..., min_length=1)
    customer_profile_id: Optional[int] = None
    table_id: Optional[int] = None
    customer_name: Optional[str] = Field(None, max_length=200)
    customer_phone: Optional[str] = Field(None, max_length=20)
    order_source: OrderSource = OrderSource.QR_CODE
    special_instructions: Optional[str] = None
    loyalty_points_used: int = Field(0, ge=0)
    campaign_id: Optional[int] = None


class OrderStatusUpdate(BaseModel):
    status: OrderStatus
    served_by_staff_id: Optional[int] = None
    preparation_time: Optional[int] = Field(None, ge=0)


class OrderAssignment(BaseModel):
    staff_id: int


class OrderRating(BaseModel):
    rating: int = Field(..., ge=1, le=5)


class OrderItemModifierResponse(BaseModel):
    modifier_id: Optional[int] = None
    name: str
    price_adjustment: Decimal

    model_config = ConfigDict(from_attributes=True)


class OrderItemResponse(BaseModel):
    id: int
    menu_item_id: int
    quantity: int
    unit_price: Decimal
    total_price: Decimal
    special_instructions: Optional[str] = None
    modifiers: List[OrderItemModifierResponse] = []

    model_config = ConfigDict(from_attributes=True)


class OrderResponse(BaseModel):
    id: int
    restaurant_id: int
    customer_profile_id: Optional[int] = None
    table_id: Optional[int] = None
    campaign_id: Optional[int] = None
    customer_name: Optional[str] = None
    status: OrderStatus
    order_source: OrderSource
    subtotal: Decimal
    discount_amount: Decimal
    total_amount: Decimal
    preparation_time: Optional[int] = None
    customer_rating: Optional[int] = None
    assigned_staff_id: Optional[int] = None
    served_by_staff_id: Optional[int] = None
    served_at: Optional[datetime] = None
    loyalty_points_earned: int
    loyalty_points_used: int
    order_items: List[OrderItemResponse] = []
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class OrderNotificationResponse(BaseModel):
    id: int
    order_id: int
    notification_type: NotificationType
    recipient_type: RecipientType
    message: str
    is_read: bool
    sent_at: datetime
    read_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

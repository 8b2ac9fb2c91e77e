# backend/modules/restaurants/schemas/restaurant_schemas.py

from datetime import datetime, time
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..models.restaurant_models import TableStatus


class RestaurantCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    address: Optional[str] = Field(None, max_length=500)
    phone: Optional[str] = Field(None, max_length=20)
    email: Optional[str] = Field(None, max_length=255)


class RestaurantUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    address: Optional[str] = Field(None, max_length=500)
    phone: Optional[str] = Field(None, max_length=20)
    email: Optional[str] = Field(None, max_length=255)
    is_active: Optional[bool] = None


class RestaurantResponse(BaseModel):
    id: int
    owner_id: str
    name: str
    description: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TableCreate(BaseModel):
    table_number: str = Field(..., min_length=1, max_length=20)
    capacity: int = Field(4, gt=0)


class TableStatusUpdate(BaseModel):
    status: TableStatus


class TableResponse(BaseModel):
    id: int
    restaurant_id: int
    table_number: str
    capacity: int
    status: TableStatus
    is_active: bool

    model_config = ConfigDict(from_attributes=True)


class TableAvailability(BaseModel):
    """A table with its effective status for the current time window"""
    id: int
    table_number: str
    capacity: int
    status: TableStatus
    current_status: str
    reservation_time: Optional[time] = None
    reserved_by: Optional[str] = None

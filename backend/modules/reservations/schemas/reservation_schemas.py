# backend/modules/reservations/schemas/reservation_schemas.py

from datetime import date, datetime, time
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from ..models.reservation_models import ReservationStatus


class ReservationCreate(BaseModel):
    customer_name: str = Field(..., min_length=1, max_length=200)
    customer_phone: Optional[str] = Field(None, max_length=20)
    customer_email: Optional[EmailStr] = None
    customer_profile_id: Optional[int] = None
    table_id: Optional[int] = None
    party_size: int = Field(..., gt=0)
    reservation_date: date
    reservation_time: time
    duration_minutes: int = Field(120, gt=0)
    special_requests: Optional[str] = None


class ReservationStatusUpdate(BaseModel):
    status: ReservationStatus
    table_id: Optional[int] = None


class ReservationResponse(BaseModel):
    id: int
    restaurant_id: int
    table_id: Optional[int] = None
    customer_profile_id: Optional[int] = None
    customer_name: str
    customer_phone: Optional[str] = None
    customer_email: Optional[str] = None
    party_size: int
    reservation_date: date
    reservation_time: time
    duration_minutes: int
    status: ReservationStatus
    confirmation_code: str
    special_requests: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

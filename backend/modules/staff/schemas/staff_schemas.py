from datetime import date, datetime, time
from decimal import Decimal
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..enums.staff_enums import ShiftStatus


class StaffRoleUpdate(BaseModel):
    description: Optional[str] = Field(None, max_length=255)
    permissions: Optional[Dict[str, bool]] = None
    hourly_rate: Optional[Decimal] = Field(None, ge=0, decimal_places=2)
    is_active: Optional[bool] = None


class StaffRoleResponse(BaseModel):
    id: int
    restaurant_id: int
    name: str
    description: Optional[str] = None
    permissions: Dict[str, bool] = {}
    hourly_rate: Optional[Decimal] = None
    is_active: bool

    model_config = ConfigDict(from_attributes=True)


class StaffMemberCreate(BaseModel):
    user_id: str = Field(..., min_length=1, max_length=36)
    role_id: int
    employee_id: Optional[str] = Field(None, max_length=50)
    hire_date: Optional[date] = None
    emergency_contact_name: Optional[str] = Field(None, max_length=100)
    emergency_contact_phone: Optional[str] = Field(None, max_length=20)
    notes: Optional[str] = None


class StaffMemberUpdate(BaseModel):
    role_id: Optional[int] = None
    employee_id: Optional[str] = Field(None, max_length=50)
    is_active: Optional[bool] = None
    emergency_contact_name: Optional[str] = Field(None, max_length=100)
    emergency_contact_phone: Optional[str] = Field(None, max_length=20)
    notes: Optional[str] = None


class StaffMemberResponse(BaseModel):
    id: int
    restaurant_id: int
    user_id: str
    role_id: int
    employee_id: Optional[str] = None
    hire_date: Optional[date] = None
    is_active: bool
    notes: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class ShiftCreate(BaseModel):
    staff_id: int
    shift_date: date
    start_time: time
    end_time: Optional[time] = None
    break_duration: int = Field(0, ge=0)
    notes: Optional[str] = None

    @model_validator(mode="after")
    def check_times(self):
        if self.end_time is not None and self.end_time <= self.start_time:
            raise ValueError("end_time must be after start_time")
        return self


class ShiftResponse(BaseModel):
    id: int
    staff_id: int
    shift_date: date
    start_time: time
    end_time: Optional[time] = None
    actual_start_time: Optional[datetime] = None
    actual_end_time: Optional[datetime] = None
    break_duration: int
    status: ShiftStatus
    worked_minutes: Optional[int] = None
    notes: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

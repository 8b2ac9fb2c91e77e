# backend/modules/staff/routes/staff_routes.py

from datetime import date, datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from core.auth import AuthUser, get_current_user
from core.database import get_db
from modules.restaurants.services.access_service import require_member, require_owner
from ..schemas.staff_schemas import (
    ShiftCreate, ShiftResponse, StaffMemberCreate, StaffMemberResponse,
    StaffMemberUpdate, StaffRoleResponse, StaffRoleUpdate,
)
from ..services.staff_service import StaffService

router = APIRouter(prefix="/restaurants/{restaurant_id}/staff", tags=["Staff"])


class ClockOutRequest(BaseModel):
    at: Optional[datetime] = None
    break_minutes: Optional[int] = Field(None, ge=0)


# Roles
@router.get("/roles", response_model=List[StaffRoleResponse])
async def list_roles(
    restaurant_id: int,
    include_inactive: bool = Query(False),
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    require_member(db, restaurant_id, current_user)
    return StaffService(db, restaurant_id).list_roles(include_inactive)


@router.patch("/roles/{role_id}", response_model=StaffRoleResponse)
async def update_role(
    restaurant_id: int,
    role_id: int,
    data: StaffRoleUpdate,
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    require_owner(db, restaurant_id, current_user)
    return StaffService(db, restaurant_id).update_role(role_id, data)


# Members
@router.get("/members", response_model=List[StaffMemberResponse])
async def list_staff(
    restaurant_id: int,
    active_only: bool = Query(True),
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    require_member(db, restaurant_id, current_user)
    return StaffService(db, restaurant_id).list_staff(active_only)


@router.post("/members", response_model=StaffMemberResponse, status_code=status.HTTP_201_CREATED)
async def add_staff_member(
    restaurant_id: int,
    data: StaffMemberCreate,
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    require_owner(db, restaurant_id, current_user)
    return StaffService(db, restaurant_id).add_staff_member(data)


@router.patch("/members/{staff_id}", response_model=StaffMemberResponse)
async def update_staff_member(
    restaurant_id: int,
    staff_id: int,
    data: StaffMemberUpdate,
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    require_owner(db, restaurant_id, current_user)
    return StaffService(db, restaurant_id).update_staff_member(staff_id, data)


# Shifts
@router.get("/shifts", response_model=List[ShiftResponse])
async def list_shifts(
    restaurant_id: int,
    start: Optional[date] = Query(None),
    end: Optional[date] = Query(None),
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    require_member(db, restaurant_id, current_user)
    return StaffService(db, restaurant_id).list_shifts(start, end)


@router.post("/shifts", response_model=ShiftResponse, status_code=status.HTTP_201_CREATED)
async def schedule_shift(
    restaurant_id: int,
    data: ShiftCreate,
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    require_owner(db, restaurant_id, current_user)
    return StaffService(db, restaurant_id).schedule_shift(data)


@router.post("/shifts/{shift_id}/clock-in", response_model=ShiftResponse)
async def clock_in(
    restaurant_id: int,
    shift_id: int,
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    require_member(db, restaurant_id, current_user)
    return StaffService(db, restaurant_id).clock_in(shift_id)


@router.post("/shifts/{shift_id}/clock-out", response_model=ShiftResponse)
async def clock_out(
    restaurant_id: int,
    shift_id: int,
    data: Optional[ClockOutRequest] = None,
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    require_member(db, restaurant_id, current_user)
    data = data or ClockOutRequest()
    return StaffService(db, restaurant_id).clock_out(shift_id, data.at, data.break_minutes)


@router.post("/shifts/{shift_id}/cancel", response_model=ShiftResponse)
async def cancel_shift(
    restaurant_id: int,
    shift_id: int,
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    require_owner(db, restaurant_id, current_user)
    return StaffService(db, restaurant_id).cancel_shift(shift_id)

# backend/modules/reservations/routes/reservation_routes.py

"""
Reservation API routes.
"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from core.auth import AuthUser, get_current_user
from core.database import get_db
from modules.restaurants.schemas.restaurant_schemas import TableAvailability
from modules.restaurants.services.access_service import require_member
from ..models.reservation_models import ReservationStatus
from ..schemas.reservation_schemas import (
    ReservationCreate, ReservationResponse, ReservationStatusUpdate,
)
from ..services.reservation_service import ReservationService

router = APIRouter(prefix="/restaurants/{restaurant_id}", tags=["Reservations"])


@router.post(
    "/reservations", response_model=ReservationResponse, status_code=status.HTTP_201_CREATED
)
async def create_reservation(
    restaurant_id: int, data: ReservationCreate, db: Session = Depends(get_db)
):
    """Book a table. Guests may book without an account."""
    return ReservationService(db, restaurant_id).create_reservation(data)


@router.get("/reservations", response_model=List[ReservationResponse])
async def list_reservations(
    restaurant_id: int,
    on_date: Optional[date] = Query(None, alias="date"),
    status: Optional[ReservationStatus] = Query(None),
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    require_member(db, restaurant_id, current_user)
    return ReservationService(db, restaurant_id).list_reservations(on_date, status)


@router.patch("/reservations/{reservation_id}/status", response_model=ReservationResponse)
async def update_reservation_status(
    restaurant_id: int,
    reservation_id: int,
    data: ReservationStatusUpdate,
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    require_member(db, restaurant_id, current_user)
    return ReservationService(db, restaurant_id).update_status(reservation_id, data)


@router.get("/table-availability", response_model=List[TableAvailability])
async def get_table_availability(
    restaurant_id: int,
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    require_member(db, restaurant_id, current_user)
    return ReservationService(db, restaurant_id).get_table_availability()

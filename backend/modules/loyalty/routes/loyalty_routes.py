# backend/modules/loyalty/routes/loyalty_routes.py

from decimal import Decimal
from typing import List

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from core.auth import AuthUser, get_current_user
from core.database import get_db
from modules.restaurants.services.access_service import (
    get_restaurant_or_404, require_member, require_owner,
)
from ..schemas.loyalty_schemas import (
    LoyaltyProgramCreate, LoyaltyProgramResponse, LoyaltyProgramUpdate,
    PointsPreview, PointsTransactionResponse,
)
from ..services.loyalty_service import LoyaltyService

router = APIRouter(prefix="/restaurants/{restaurant_id}/loyalty", tags=["Loyalty"])


@router.get("/programs", response_model=List[LoyaltyProgramResponse])
async def list_programs(
    restaurant_id: int,
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    require_member(db, restaurant_id, current_user)
    return LoyaltyService(db, restaurant_id).list_programs()


@router.post("/programs", response_model=LoyaltyProgramResponse, status_code=status.HTTP_201_CREATED)
async def create_program(
    restaurant_id: int,
    data: LoyaltyProgramCreate,
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    """Create a loyalty program. An active program replaces the current one."""
    require_owner(db, restaurant_id, current_user)
    return LoyaltyService(db, restaurant_id).create_program(data)


@router.patch("/programs/{program_id}", response_model=LoyaltyProgramResponse)
async def update_program(
    restaurant_id: int,
    program_id: int,
    data: LoyaltyProgramUpdate,
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    require_owner(db, restaurant_id, current_user)
    return LoyaltyService(db, restaurant_id).update_program(program_id, data)


@router.get("/points-preview", response_model=PointsPreview)
async def preview_points(
    restaurant_id: int,
    order_total: Decimal = Query(..., ge=0),
    db: Session = Depends(get_db),
):
    """Points a diner would earn for an order of this total"""
    get_restaurant_or_404(db, restaurant_id)
    return LoyaltyService(db, restaurant_id).preview_points(order_total)


@router.get("/customers/{profile_id}/transactions", response_model=List[PointsTransactionResponse])
async def list_points_transactions(
    restaurant_id: int,
    profile_id: int,
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    require_member(db, restaurant_id, current_user)
    return LoyaltyService(db, restaurant_id).list_transactions(profile_id)

# backend/modules/promotions/routers/promotion_router.py

from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from core.auth import AuthUser, get_current_user
from core.database import get_db
from modules.restaurants.services.access_service import get_restaurant_or_404, require_owner
from ..schemas.promotion_schemas import CampaignCreate, CampaignResponse, CampaignUpdate
from ..services.campaign_service import CampaignService

router = APIRouter(prefix="/restaurants/{restaurant_id}/campaigns", tags=["Promotions"])


@router.get("/active", response_model=List[CampaignResponse])
async def list_running_campaigns(restaurant_id: int, db: Session = Depends(get_db)):
    """Campaigns a guest can claim right now"""
    get_restaurant_or_404(db, restaurant_id)
    return CampaignService(db, restaurant_id).list_campaigns(running_at=datetime.utcnow())


@router.get("/", response_model=List[CampaignResponse])
async def list_campaigns(
    restaurant_id: int,
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    require_owner(db, restaurant_id, current_user)
    return CampaignService(db, restaurant_id).list_campaigns()


@router.post("/", response_model=CampaignResponse, status_code=status.HTTP_201_CREATED)
async def create_campaign(
    restaurant_id: int,
    data: CampaignCreate,
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    require_owner(db, restaurant_id, current_user)
    return CampaignService(db, restaurant_id).create_campaign(data)


@router.get("/{campaign_id}", response_model=CampaignResponse)
async def get_campaign(
    restaurant_id: int,
    campaign_id: int,
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    require_owner(db, restaurant_id, current_user)
    return CampaignService(db, restaurant_id).get_campaign(campaign_id)


@router.patch("/{campaign_id}", response_model=CampaignResponse)
async def update_campaign(
    restaurant_id: int,
    campaign_id: int,
    data: CampaignUpdate,
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    require_owner(db, restaurant_id, current_user)
    return CampaignService(db, restaurant_id).update_campaign(campaign_id, data)

# backend/modules/analytics/routers/analytics_router.py

"""
Restaurant reporting and feedback endpoints.
"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from core.auth import AuthUser, get_current_user
from core.database import get_db
from modules.restaurants.services.access_service import require_member, require_owner
from ..models.analytics_models import FeedbackType
from ..schemas.analytics_schemas import (
    CustomerLoyaltyEntry, DailySalesSummaryResponse, FeedbackCreate, FeedbackResponse,
    FeedbackSummary, LowStockItem, MenuItemAnalyticsResponse, PopularItem, RevenueTrendPoint,
    StaffPerformanceEntry,
)
from ..services.feedback_service import FeedbackService
from ..services.reporting_service import ReportingService

router = APIRouter(prefix="/restaurants/{restaurant_id}/analytics", tags=["Analytics"])


@router.get("/popular-items", response_model=List[PopularItem])
async def get_popular_items(
    restaurant_id: int,
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    require_member(db, restaurant_id, current_user)
    return ReportingService(db, restaurant_id).popular_items(limit=limit)


@router.get("/revenue-trends", response_model=List[RevenueTrendPoint])
async def get_revenue_trends(
    restaurant_id: int,
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    require_owner(db, restaurant_id, current_user)
    return ReportingService(db, restaurant_id).revenue_trends()


@router.get("/low-stock", response_model=List[LowStockItem])
async def get_low_stock(
    restaurant_id: int,
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    require_member(db, restaurant_id, current_user)
    return ReportingService(db, restaurant_id).low_stock()


@router.get("/customer-loyalty", response_model=List[CustomerLoyaltyEntry])
async def get_customer_loyalty(
    restaurant_id: int,
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    require_member(db, restaurant_id, current_user)
    return ReportingService(db, restaurant_id).customer_loyalty()


@router.get("/daily-sales", response_model=List[DailySalesSummaryResponse])
async def list_daily_sales(
    restaurant_id: int,
    start: Optional[date] = Query(None),
    end: Optional[date] = Query(None),
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    require_owner(db, restaurant_id, current_user)
    return ReportingService(db, restaurant_id).list_daily_summaries(start, end)


@router.post("/daily-sales/refresh", response_model=DailySalesSummaryResponse)
async def refresh_daily_sales(
    restaurant_id: int,
    day: Optional[date] = Query(None, description="Defaults to today"),
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    require_owner(db, restaurant_id, current_user)
    return ReportingService(db, restaurant_id).refresh_daily_summary(day)


@router.get("/menu-items/{item_id}/daily", response_model=List[MenuItemAnalyticsResponse])
async def get_menu_item_daily(
    restaurant_id: int,
    item_id: int,
    start: Optional[date] = Query(None),
    end: Optional[date] = Query(None),
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    require_member(db, restaurant_id, current_user)
    return ReportingService(db, restaurant_id).menu_item_daily(item_id, start, end)


@router.get("/staff-performance", response_model=List[StaffPerformanceEntry])
async def get_staff_performance(
    restaurant_id: int,
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    require_owner(db, restaurant_id, current_user)
    return ReportingService(db, restaurant_id).staff_performance()


# Feedback
@router.post("/feedback", response_model=FeedbackResponse, status_code=status.HTTP_201_CREATED)
async def submit_feedback(restaurant_id: int, data: FeedbackCreate, db: Session = Depends(get_db)):
    """Leave feedback for a restaurant. No account required."""
    return FeedbackService(db, restaurant_id).submit_feedback(data)


@router.get("/feedback", response_model=List[FeedbackResponse])
async def list_feedback(
    restaurant_id: int,
    feedback_type: Optional[FeedbackType] = Query(None),
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    require_member(db, restaurant_id, current_user)
    return FeedbackService(db, restaurant_id).list_feedback(feedback_type=feedback_type)


@router.get("/feedback/public", response_model=List[FeedbackResponse])
async def list_public_feedback(restaurant_id: int, db: Session = Depends(get_db)):
    return FeedbackService(db, restaurant_id).list_feedback(public_only=True)


@router.get("/feedback/summary", response_model=FeedbackSummary)
async def get_feedback_summary(
    restaurant_id: int,
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    require_member(db, restaurant_id, current_user)
    return FeedbackService(db, restaurant_id).summary()

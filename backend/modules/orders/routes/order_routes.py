# backend/modules/orders/routes/order_routes.py

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from core.auth import AuthUser, get_current_user
from core.database import get_db
from modules.restaurants.services.access_service import require_member
from ..enums.order_enums import OrderStatus
from ..schemas.order_schemas import (
    OrderAssignment, OrderCreate, OrderNotificationResponse, OrderRating,
    OrderResponse, OrderStatusUpdate,
)
from ..services.order_service import OrderService

router = APIRouter(prefix="/restaurants/{restaurant_id}/orders", tags=["Orders"])


@router.post("/", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
async def place_order(restaurant_id: int, data: OrderCreate, db: Session = Depends(get_db)):
    """
    Place an order. Open to guests (QR-code ordering) and staff alike.
    """
    return OrderService(db, restaurant_id).create_order(data)


@router.get("/", response_model=List[OrderResponse])
async def list_orders(
    restaurant_id: int,
    status: Optional[OrderStatus] = Query(None, description="Filter by status"),
    since: Optional[datetime] = Query(None, description="Only orders created after this time"),
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    require_member(db, restaurant_id, current_user)
    return OrderService(db, restaurant_id).list_orders(status, since, limit)


@router.get("/notifications", response_model=List[OrderNotificationResponse])
async def list_notifications(
    restaurant_id: int,
    unread_only: bool = Query(False),
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    require_member(db, restaurant_id, current_user)
    return OrderService(db, restaurant_id).list_notifications(unread_only)


@router.post("/notifications/{notification_id}/read", response_model=OrderNotificationResponse)
async def mark_notification_read(
    restaurant_id: int,
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    require_member(db, restaurant_id, current_user)
    return OrderService(db, restaurant_id).mark_notification_read(notification_id)


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(
    restaurant_id: int,
    order_id: int,
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    require_member(db, restaurant_id, current_user)
    return OrderService(db, restaurant_id).get_order(order_id)


@router.patch("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(
    restaurant_id: int,
    order_id: int,
    data: OrderStatusUpdate,
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    """
    Update order status. Moving an order into served credits the linked
    customer profile exactly once.
    """
    require_member(db, restaurant_id, current_user)
    return OrderService(db, restaurant_id).update_status(order_id, data)


@router.post("/{order_id}/assign", response_model=OrderResponse)
async def assign_order(
    restaurant_id: int,
    order_id: int,
    data: OrderAssignment,
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    require_member(db, restaurant_id, current_user)
    return OrderService(db, restaurant_id).assign_staff(order_id, data.staff_id)


@router.post("/{order_id}/rating", response_model=OrderResponse)
async def rate_order(
    restaurant_id: int, order_id: int, data: OrderRating, db: Session = Depends(get_db)
):
    return OrderService(db, restaurant_id).rate_order(order_id, data.rating)

# backend/modules/restaurants/routes/restaurant_routes.py

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from core.auth import AuthUser, get_current_user
from core.database import get_db
from ..schemas.restaurant_schemas import (
    RestaurantCreate, RestaurantUpdate, RestaurantResponse,
    TableCreate, TableStatusUpdate, TableResponse,
)
from ..services.access_service import require_member, require_owner
from ..services.restaurant_service import RestaurantService

router = APIRouter(prefix="/restaurants", tags=["Restaurants"])


def get_restaurant_service(db: Session = Depends(get_db)) -> RestaurantService:
    return RestaurantService(db)


@router.post("/", response_model=RestaurantResponse, status_code=status.HTTP_201_CREATED)
async def create_restaurant(
    data: RestaurantCreate,
    service: RestaurantService = Depends(get_restaurant_service),
    current_user: AuthUser = Depends(get_current_user),
):
    """Create a restaurant owned by the current user. Default staff roles are seeded."""
    return service.create_restaurant(data, current_user)


@router.get("/", response_model=List[RestaurantResponse])
async def list_my_restaurants(
    service: RestaurantService = Depends(get_restaurant_service),
    current_user: AuthUser = Depends(get_current_user),
):
    return service.list_owned(current_user)


@router.get("/{restaurant_id}", response_model=RestaurantResponse)
async def get_restaurant(
    restaurant_id: int,
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    return require_member(db, restaurant_id, current_user)


@router.patch("/{restaurant_id}", response_model=RestaurantResponse)
async def update_restaurant(
    restaurant_id: int,
    data: RestaurantUpdate,
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    restaurant = require_owner(db, restaurant_id, current_user)
    return RestaurantService(db).update_restaurant(restaurant, data)


# Tables
@router.post(
    "/{restaurant_id}/tables",
    response_model=TableResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_table(
    restaurant_id: int,
    data: TableCreate,
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    require_owner(db, restaurant_id, current_user)
    return RestaurantService(db).add_table(restaurant_id, data)


@router.get("/{restaurant_id}/tables", response_model=List[TableResponse])
async def list_tables(
    restaurant_id: int,
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    require_member(db, restaurant_id, current_user)
    return RestaurantService(db).list_tables(restaurant_id)


@router.patch("/{restaurant_id}/tables/{table_id}/status", response_model=TableResponse)
async def update_table_status(
    restaurant_id: int,
    table_id: int,
    data: TableStatusUpdate,
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    require_member(db, restaurant_id, current_user)
    return RestaurantService(db).update_table_status(restaurant_id, table_id, data)

# backend/modules/menu/routes/menu_routes.py

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from core.auth import AuthUser, get_current_user
from core.database import get_db
from modules.restaurants.services.access_service import get_restaurant_or_404, require_owner
from ..schemas.menu_schemas import (
    ItemModifierAttach, ItemModifierResponse, MenuItemCreate, MenuItemResponse,
    MenuItemUpdate, ModifierCreate, ModifierResponse, ModifierUpdate,
)
from ..services.menu_service import MenuService

router = APIRouter(prefix="/restaurants/{restaurant_id}/menu", tags=["Menu Management"])


@router.get("/items", response_model=List[MenuItemResponse])
async def list_menu_items(
    restaurant_id: int,
    category: Optional[str] = Query(None, description="Filter by category"),
    available_only: bool = Query(True, description="Only items currently available"),
    db: Session = Depends(get_db),
):
    """Public menu listing used by QR-code ordering"""
    get_restaurant_or_404(db, restaurant_id)
    return MenuService(db, restaurant_id).list_items(category, available_only)


@router.get("/items/{item_id}", response_model=MenuItemResponse)
async def get_menu_item(restaurant_id: int, item_id: int, db: Session = Depends(get_db)):
    return MenuService(db, restaurant_id).get_item(item_id)


@router.post("/items", response_model=MenuItemResponse, status_code=status.HTTP_201_CREATED)
async def create_menu_item(
    restaurant_id: int,
    data: MenuItemCreate,
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    require_owner(db, restaurant_id, current_user)
    return MenuService(db, restaurant_id).create_item(data)


@router.patch("/items/{item_id}", response_model=MenuItemResponse)
async def update_menu_item(
    restaurant_id: int,
    item_id: int,
    data: MenuItemUpdate,
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    require_owner(db, restaurant_id, current_user)
    return MenuService(db, restaurant_id).update_item(item_id, data)


@router.delete("/items/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_menu_item(
    restaurant_id: int,
    item_id: int,
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    require_owner(db, restaurant_id, current_user)
    MenuService(db, restaurant_id).delete_item(item_id)


# Modifiers
@router.get("/modifiers", response_model=List[ModifierResponse])
async def list_modifiers(
    restaurant_id: int,
    active_only: bool = Query(True),
    db: Session = Depends(get_db),
):
    get_restaurant_or_404(db, restaurant_id)
    return MenuService(db, restaurant_id).list_modifiers(active_only)


@router.post("/modifiers", response_model=ModifierResponse, status_code=status.HTTP_201_CREATED)
async def create_modifier(
    restaurant_id: int,
    data: ModifierCreate,
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    require_owner(db, restaurant_id, current_user)
    return MenuService(db, restaurant_id).create_modifier(data)


@router.patch("/modifiers/{modifier_id}", response_model=ModifierResponse)
async def update_modifier(
    restaurant_id: int,
    modifier_id: int,
    data: ModifierUpdate,
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    require_owner(db, restaurant_id, current_user)
    return MenuService(db, restaurant_id).update_modifier(modifier_id, data)


@router.get("/items/{item_id}/modifiers", response_model=List[ItemModifierResponse])
async def list_item_modifiers(restaurant_id: int, item_id: int, db: Session = Depends(get_db)):
    """Modifiers a guest can choose for the item"""
    return MenuService(db, restaurant_id).list_item_modifiers(item_id, active_only=True)


@router.put("/items/{item_id}/modifiers", response_model=ItemModifierResponse)
async def attach_item_modifier(
    restaurant_id: int,
    item_id: int,
    data: ItemModifierAttach,
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    require_owner(db, restaurant_id, current_user)
    return MenuService(db, restaurant_id).attach_modifier(item_id, data.modifier_id, data.is_required)


@router.delete("/items/{item_id}/modifiers/{modifier_id}", status_code=status.HTTP_204_NO_CONTENT)
async def detach_item_modifier(
    restaurant_id: int,
    item_id: int,
    modifier_id: int,
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    require_owner(db, restaurant_id, current_user)
    MenuService(db, restaurant_id).detach_modifier(item_id, modifier_id)

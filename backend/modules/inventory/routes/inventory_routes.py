# backend/modules/inventory/routes/inventory_routes.py

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from core.auth import AuthUser, get_current_user
from core.database import get_db
from modules.restaurants.services.access_service import require_member, require_owner
from ..schemas.inventory_schemas import (
    IngredientLink, IngredientResponse, InventoryItemCreate, InventoryItemResponse,
    InventoryItemUpdate, InventoryTransactionCreate, InventoryTransactionResponse,
    SupplierCreate, SupplierResponse,
)
from ..services.inventory_service import InventoryService

router = APIRouter(prefix="/restaurants/{restaurant_id}/inventory", tags=["Inventory Management"])


# Suppliers
@router.get("/suppliers", response_model=List[SupplierResponse])
async def list_suppliers(
    restaurant_id: int,
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    require_member(db, restaurant_id, current_user)
    return InventoryService(db, restaurant_id).list_suppliers()


@router.post("/suppliers", response_model=SupplierResponse, status_code=status.HTTP_201_CREATED)
async def create_supplier(
    restaurant_id: int,
    data: SupplierCreate,
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    require_owner(db, restaurant_id, current_user)
    return InventoryService(db, restaurant_id).create_supplier(data)


# Items
@router.get("/items", response_model=List[InventoryItemResponse])
async def list_inventory_items(
    restaurant_id: int,
    category: Optional[str] = Query(None),
    active_only: bool = Query(True),
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    require_member(db, restaurant_id, current_user)
    return InventoryService(db, restaurant_id).list_items(category, active_only)


@router.post("/items", response_model=InventoryItemResponse, status_code=status.HTTP_201_CREATED)
async def create_inventory_item(
    restaurant_id: int,
    data: InventoryItemCreate,
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    require_owner(db, restaurant_id, current_user)
    return InventoryService(db, restaurant_id).create_item(data)


@router.patch("/items/{item_id}", response_model=InventoryItemResponse)
async def update_inventory_item(
    restaurant_id: int,
    item_id: int,
    data: InventoryItemUpdate,
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    require_owner(db, restaurant_id, current_user)
    return InventoryService(db, restaurant_id).update_item(item_id, data)


# Stock movements
@router.post(
    "/items/{item_id}/transactions",
    response_model=InventoryTransactionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def record_inventory_transaction(
    restaurant_id: int,
    item_id: int,
    data: InventoryTransactionCreate,
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    require_member(db, restaurant_id, current_user)
    return InventoryService(db, restaurant_id).record_transaction(item_id, data, current_user.id)


@router.get("/items/{item_id}/transactions", response_model=List[InventoryTransactionResponse])
async def list_inventory_transactions(
    restaurant_id: int,
    item_id: int,
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    require_member(db, restaurant_id, current_user)
    return InventoryService(db, restaurant_id).list_transactions(item_id)


# Recipes
@router.post(
    "/menu-items/{menu_item_id}/ingredients",
    response_model=IngredientResponse,
    status_code=status.HTTP_201_CREATED,
)
async def link_ingredient(
    restaurant_id: int,
    menu_item_id: int,
    data: IngredientLink,
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    require_owner(db, restaurant_id, current_user)
    return InventoryService(db, restaurant_id).link_ingredient(menu_item_id, data)


@router.get("/menu-items/{menu_item_id}/ingredients", response_model=List[IngredientResponse])
async def list_ingredients(
    restaurant_id: int,
    menu_item_id: int,
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    require_member(db, restaurant_id, current_user)
    return InventoryService(db, restaurant_id).list_ingredients(menu_item_id)

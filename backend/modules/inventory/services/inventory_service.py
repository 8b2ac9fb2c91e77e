# backend/modules/inventory/services/inventory_service.py

import logging
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.orm import Session

from core.exceptions import NotFoundError, ValidationError
from modules.menu.models.menu_models import MenuItem
from ..models.inventory_models import (
    InventoryItem, InventoryTransaction, MenuItemIngredient, Supplier, TransactionType,
)
from ..schemas.inventory_schemas import (
    IngredientLink, InventoryItemCreate, InventoryItemUpdate,
    InventoryTransactionCreate, SupplierCreate,
)

logger = logging.getLogger(__name__)

# Direction applied to current_stock for each movement type
STOCK_DIRECTION = {
    TransactionType.PURCHASE: 1,
    TransactionType.ADJUSTMENT: 1,
    TransactionType.USAGE: -1,
    TransactionType.WASTE: -1,
}


class InventoryService:
    def __init__(self, db: Session, restaurant_id: int):
        self.db = db
        self.restaurant_id = restaurant_id

    # Suppliers
    def create_supplier(self, data: SupplierCreate) -> Supplier:
        supplier = Supplier(restaurant_id=self.restaurant_id, **data.model_dump())
        self.db.add(supplier)
        self.db.commit()
        self.db.refresh(supplier)
        return supplier

    def list_suppliers(self) -> List[Supplier]:
        return (
            self.db.query(Supplier)
            .filter(Supplier.restaurant_id == self.restaurant_id, Supplier.is_active.is_(True))
            .order_by(Supplier.name)
            .all()
        )

    # Items
    def create_item(self, data: InventoryItemCreate) -> InventoryItem:
        if data.supplier_id is not None:
            self._get_supplier(data.supplier_id)
        item = InventoryItem(restaurant_id=self.restaurant_id, **data.model_dump())
        self.db.add(item)
        self.db.commit()
        self.db.refresh(item)
        logger.info(f"Created inventory item {item.id} '{item.name}' for restaurant {self.restaurant_id}")
        return item

    def get_item(self, item_id: int, for_update: bool = False) -> InventoryItem:
        query = self.db.query(InventoryItem).filter(
            InventoryItem.id == item_id, InventoryItem.restaurant_id == self.restaurant_id
        )
        if for_update:
            query = query.with_for_update()
        item = query.first()
        if not item:
            raise NotFoundError(f"Inventory item {item_id} not found")
        return item

    def list_items(self, category: Optional[str] = None, active_only: bool = True) -> List[InventoryItem]:
        query = self.db.query(InventoryItem).filter(InventoryItem.restaurant_id == self.restaurant_id)
        if active_only:
            query = query.filter(InventoryItem.is_active.is_(True))
        if category:
            query = query.filter(InventoryItem.category == category)
        return query.order_by(InventoryItem.name).all()

    def update_item(self, item_id: int, data: InventoryItemUpdate) -> InventoryItem:
        item = self.get_item(item_id)
        updates = data.model_dump(exclude_unset=True)
        if updates.get("supplier_id") is not None:
            self._get_supplier(updates["supplier_id"])
        for field, value in updates.items():
            setattr(item, field, value)
        self.db.commit()
        self.db.refresh(item)
        return item

    # Stock movements
    def record_transaction(
        self, item_id: int, data: InventoryTransactionCreate, user_id: Optional[str] = None
    ) -> InventoryTransaction:
        """
        Record a stock movement and apply it to current_stock.

        Purchases and adjustments add (adjustments may be negative), usage
        and waste subtract. A movement that would take stock below zero is
        rejected.
        """
        item = self.get_item(item_id, for_update=True)
        change = data.quantity * STOCK_DIRECTION[data.transaction_type]
        new_stock = Decimal(str(item.current_stock or 0)) + change
        if new_stock < 0:
            raise ValidationError(
                f"Insufficient stock for '{item.name}': {item.current_stock} {item.unit} available"
            )

        unit_cost = data.unit_cost if data.unit_cost is not None else item.unit_cost
        transaction = InventoryTransaction(
            inventory_item_id=item.id,
            transaction_type=data.transaction_type,
            quantity=data.quantity,
            unit_cost=unit_cost,
            total_cost=(abs(data.quantity) * Decimal(str(unit_cost or 0))).quantize(Decimal("0.01")),
            stock_after=new_stock,
            reference_id=data.reference_id,
            notes=data.notes,
            created_by=user_id,
        )
        item.current_stock = new_stock
        if data.transaction_type == TransactionType.PURCHASE and data.unit_cost is not None:
            item.unit_cost = data.unit_cost
        self.db.add(transaction)
        self.db.commit()
        self.db.refresh(transaction)

        if item.is_low_stock:
            logger.warning(
                f"Inventory item {item.id} '{item.name}' is low: {new_stock} {item.unit} "
                f"(minimum {item.minimum_stock})"
            )
        return transaction

    def list_transactions(self, item_id: int) -> List[InventoryTransaction]:
        self.get_item(item_id)
        return (
            self.db.query(InventoryTransaction)
            .filter(InventoryTransaction.inventory_item_id == item_id)
            .order_by(InventoryTransaction.created_at.desc(), InventoryTransaction.id.desc())
            .all()
        )

    # Recipes
    def link_ingredient(self, menu_item_id: int, data: IngredientLink) -> MenuItemIngredient:
        menu_item = (
            self.db.query(MenuItem)
            .filter(MenuItem.id == menu_item_id, MenuItem.restaurant_id == self.restaurant_id)
            .first()
        )
        if not menu_item:
            raise NotFoundError(f"Menu item {menu_item_id} not found")
        self.get_item(data.inventory_item_id)

        link = MenuItemIngredient(menu_item_id=menu_item_id, **data.model_dump())
        self.db.add(link)
        self.db.commit()
        self.db.refresh(link)
        return link

    def list_ingredients(self, menu_item_id: int) -> List[MenuItemIngredient]:
        return (
            self.db.query(MenuItemIngredient)
            .join(MenuItem, MenuItemIngredient.menu_item_id == MenuItem.id)
            .filter(
                MenuItemIngredient.menu_item_id == menu_item_id,
                MenuItem.restaurant_id == self.restaurant_id,
            )
            .all()
        )

    def _get_supplier(self, supplier_id: int) -> Supplier:
        supplier = (
            self.db.query(Supplier)
            .filter(Supplier.id == supplier_id, Supplier.restaurant_id == self.restaurant_id)
            .first()
        )
        if not supplier:
            raise ValidationError(f"Supplier {supplier_id} does not belong to this restaurant")
        return supplier

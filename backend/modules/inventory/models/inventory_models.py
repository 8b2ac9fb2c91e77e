# backend/modules/inventory/models/inventory_models.py

from sqlalchemy import (Column, Integer, String, ForeignKey, Date, Numeric,
                        Text, Boolean, Enum as SQLEnum, Index, CheckConstraint)
from sqlalchemy.orm import relationship
from core.database import Base
from core.mixins import TimestampMixin
from enum import Enum


class TransactionType(str, Enum):
    PURCHASE = "purchase"
    USAGE = "usage"
    WASTE = "waste"
    ADJUSTMENT = "adjustment"


class Supplier(Base, TimestampMixin):
    """Vendor that supplies inventory items"""
    __tablename__ = "suppliers"

    id = Column(Integer, primary_key=True, index=True)
    restaurant_id = Column(Integer, ForeignKey("restaurants.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(200), nullable=False, index=True)
    contact_person = Column(String(100), nullable=True)
    email = Column(String(255), nullable=True)
    phone = Column(String(20), nullable=True)
    address = Column(Text, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)

    items = relationship("InventoryItem", back_populates="supplier")

    def __repr__(self):
        return f"<Supplier(id={self.id}, name='{self.name}')>"


class InventoryItem(Base, TimestampMixin):
    """Stock-tracked ingredient or supply"""
    __tablename__ = "inventory_items"

    id = Column(Integer, primary_key=True, index=True)
    restaurant_id = Column(Integer, ForeignKey("restaurants.id", ondelete="CASCADE"), nullable=False, index=True)
    supplier_id = Column(Integer, ForeignKey("suppliers.id", ondelete="SET NULL"), nullable=True)
    name = Column(String(200), nullable=False, index=True)
    description = Column(Text, nullable=True)
    unit = Column(String(20), nullable=False, default="kg")  # kg, liters, pieces, etc.
    current_stock = Column(Numeric(10, 3), nullable=False, default=0)
    minimum_stock = Column(Numeric(10, 3), nullable=False, default=0)
    maximum_stock = Column(Numeric(10, 3), nullable=True)
    unit_cost = Column(Numeric(10, 2), nullable=False, default=0)
    category = Column(String(100), nullable=True)  # vegetables, meat, dairy, etc.
    storage_location = Column(String(100), nullable=True)
    expiry_date = Column(Date, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)

    supplier = relationship("Supplier", back_populates="items")
    transactions = relationship("InventoryTransaction", back_populates="inventory_item", cascade="all, delete-orphan")

    __table_args__ = (
        CheckConstraint("current_stock >= 0", name="ck_inventory_items_stock_non_negative"),
        Index("ix_inventory_items_restaurant_active", "restaurant_id", "is_active"),
    )

    @property
    def is_low_stock(self) -> bool:
        return (self.current_stock or 0) <= (self.minimum_stock or 0)

    def __repr__(self):
        return f"<InventoryItem(id={self.id}, name='{self.name}', stock={self.current_stock} {self.unit})>"


class MenuItemIngredient(Base):
    """Quantity of an inventory item used by one portion of a menu item"""
    __tablename__ = "menu_item_ingredients"

    id = Column(Integer, primary_key=True, index=True)
    menu_item_id = Column(Integer, ForeignKey("menu_items.id", ondelete="CASCADE"), nullable=False, index=True)
    inventory_item_id = Column(Integer, ForeignKey("inventory_items.id", ondelete="CASCADE"), nullable=False)
    quantity_required = Column(Numeric(10, 3), nullable=False)
    unit = Column(String(20), nullable=False)

    menu_item = relationship("MenuItem", back_populates="ingredients")
    inventory_item = relationship("InventoryItem")

    __table_args__ = (
        CheckConstraint("quantity_required > 0", name="ck_menu_item_ingredients_quantity"),
    )


class InventoryTransaction(Base, TimestampMixin):
    """Stock movement; current_stock is adjusted when one is recorded"""
    __tablename__ = "inventory_transactions"

    id = Column(Integer, primary_key=True, index=True)
    inventory_item_id = Column(Integer, ForeignKey("inventory_items.id", ondelete="CASCADE"), nullable=False, index=True)
    transaction_type = Column(
        SQLEnum(TransactionType, values_callable=lambda obj: [e.value for e in obj], name="inventory_transaction_type"),
        nullable=False,
    )
    quantity = Column(Numeric(10, 3), nullable=False)
    unit_cost = Column(Numeric(10, 2), nullable=True)
    total_cost = Column(Numeric(10, 2), nullable=True)
    stock_after = Column(Numeric(10, 3), nullable=False)
    reference_id = Column(Integer, nullable=True)  # order id for usage
    notes = Column(Text, nullable=True)
    created_by = Column(String(36), nullable=True)

    inventory_item = relationship("InventoryItem", back_populates="transactions")

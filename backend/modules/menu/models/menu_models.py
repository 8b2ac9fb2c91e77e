# backend/modules/menu/models/menu_models.py

from datetime import datetime
from enum import Enum

from sqlalchemy import (Column, Integer, String, ForeignKey, Numeric, Text, DateTime,
                        Boolean, JSON, CheckConstraint, Index, UniqueConstraint)
from sqlalchemy.orm import relationship
from core.database import Base
from core.mixins import TimestampMixin


class ModifierType(str, Enum):
    ADDITION = "addition"
    SUBSTITUTION = "substitution"
    REMOVAL = "removal"


class MenuItem(Base, TimestampMixin):
    """Individual menu items"""
    __tablename__ = "menu_items"

    id = Column(Integer, primary_key=True, index=True)
    restaurant_id = Column(Integer, ForeignKey("restaurants.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(200), nullable=False, index=True)
    description = Column(Text, nullable=True)
    category = Column(String(100), nullable=True, index=True)
    price = Column(Numeric(10, 2), nullable=False)
    cost_price = Column(Numeric(10, 2), default=0)

    # Status and availability
    is_available = Column(Boolean, nullable=False, default=True)

    # Preparation
    preparation_time = Column(Integer, default=0)  # minutes
    estimated_prep_time = Column(Integer, default=15)  # minutes
    spice_level = Column(Integer, nullable=True)

    # Nutritional and dietary info
    calories = Column(Integer, nullable=True)
    allergens = Column(JSON, nullable=True)  # List of allergens
    dietary_tags = Column(JSON, nullable=True)  # vegetarian, vegan, gluten-free, etc.

    ingredients = relationship("MenuItemIngredient", back_populates="menu_item", cascade="all, delete-orphan")
    modifier_links = relationship("MenuItemModifier", back_populates="menu_item", cascade="all, delete-orphan")

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_menu_items_price_non_negative"),
        CheckConstraint("spice_level >= 0 AND spice_level <= 5", name="ck_menu_items_spice_level"),
        Index("ix_menu_items_restaurant_category", "restaurant_id", "category"),
    )

    @property
    def margin(self):
        if self.price is None:
            return None
        return self.price - (self.cost_price or 0)

    def __repr__(self):
        return f"<MenuItem(id={self.id}, name='{self.name}', price={self.price})>"


class MenuModifier(Base, TimestampMixin):
    """Customization such as "extra cheese" or "no onions", priced as an adjustment"""
    __tablename__ = "menu_modifiers"

    id = Column(Integer, primary_key=True, index=True)
    restaurant_id = Column(Integer, ForeignKey("restaurants.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    price_adjustment = Column(Numeric(8, 2), nullable=False, default=0)
    modifier_type = Column(String(20), nullable=False, default=ModifierType.ADDITION.value)
    applicable_categories = Column(JSON, nullable=True)  # None means every category
    is_active = Column(Boolean, nullable=False, default=True)

    item_links = relationship("MenuItemModifier", back_populates="modifier", cascade="all, delete-orphan")

    __table_args__ = (
        CheckConstraint(
            "modifier_type IN ('addition', 'substitution', 'removal')",
            name="ck_menu_modifiers_type",
        ),
        UniqueConstraint("restaurant_id", "name", name="uq_menu_modifiers_restaurant_name"),
    )

    def applies_to(self, category) -> bool:
        if not self.applicable_categories:
            return True
        return category in self.applicable_categories

    def __repr__(self):
        return f"<MenuModifier(id={self.id}, name='{self.name}', adjustment={self.price_adjustment})>"


class MenuItemModifier(Base):
    """Modifier offered on a menu item"""
    __tablename__ = "menu_item_modifiers"

    id = Column(Integer, primary_key=True, index=True)
    menu_item_id = Column(Integer, ForeignKey("menu_items.id", ondelete="CASCADE"), nullable=False, index=True)
    modifier_id = Column(Integer, ForeignKey("menu_modifiers.id", ondelete="CASCADE"), nullable=False, index=True)
    is_required = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    menu_item = relationship("MenuItem", back_populates="modifier_links")
    modifier = relationship("MenuModifier", back_populates="item_links")

    __table_args__ = (
        UniqueConstraint("menu_item_id", "modifier_id", name="uq_menu_item_modifiers_item_modifier"),
    )

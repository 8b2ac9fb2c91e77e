# backend/modules/restaurants/models/restaurant_models.py

from sqlalchemy import (
    Column, Integer, String, Boolean, ForeignKey, Text,
    Enum as SQLEnum, UniqueConstraint, Index, CheckConstraint,
)
from sqlalchemy.orm import relationship
from core.database import Base
from core.mixins import TimestampMixin
from enum import Enum


class TableStatus(str, Enum):
    AVAILABLE = "available"
    OCCUPIED = "occupied"
    RESERVED = "reserved"
    CLEANING = "cleaning"
    OUT_OF_ORDER = "out_of_order"


class Restaurant(Base, TimestampMixin):
    """A restaurant account owned by an auth user"""
    __tablename__ = "restaurants"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(String(36), nullable=False, index=True)  # auth user id
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    address = Column(String(500), nullable=True)
    phone = Column(String(20), nullable=True)
    email = Column(String(255), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    tables = relationship("RestaurantTable", back_populates="restaurant", cascade="all, delete-orphan")
    staff_roles = relationship("StaffRole", back_populates="restaurant", cascade="all, delete-orphan")
    loyalty_programs = relationship("LoyaltyProgram", back_populates="restaurant", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Restaurant(id={self.id}, name='{self.name}')>"


class RestaurantTable(Base, TimestampMixin):
    """A dining table that can be reserved or seated"""
    __tablename__ = "tables"

    id = Column(Integer, primary_key=True, index=True)
    restaurant_id = Column(Integer, ForeignKey("restaurants.id", ondelete="CASCADE"), nullable=False)
    table_number = Column(String(20), nullable=False)
    capacity = Column(Integer, nullable=False, default=4)
    status = Column(
        SQLEnum(TableStatus, values_callable=lambda obj: [e.value for e in obj], name="table_status"),
        nullable=False,
        default=TableStatus.AVAILABLE,
    )
    is_active = Column(Boolean, default=True, nullable=False)

    restaurant = relationship("Restaurant", back_populates="tables")

    __table_args__ = (
        UniqueConstraint("restaurant_id", "table_number", name="uq_tables_restaurant_number"),
        CheckConstraint("capacity > 0", name="ck_tables_capacity_positive"),
        Index("ix_tables_status", "status"),
    )

    def __repr__(self):
        return f"<RestaurantTable(id={self.id}, number='{self.table_number}')>"

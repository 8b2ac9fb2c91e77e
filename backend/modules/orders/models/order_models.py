from datetime import datetime

from sqlalchemy import (Column, Integer, String, ForeignKey, DateTime,
                        Numeric, Text, Boolean, Index, CheckConstraint)
from sqlalchemy.orm import relationship
from core.database import Base
from core.mixins import TimestampMixin
from ..enums.order_enums import OrderStatus, OrderSource


class Order(Base, TimestampMixin):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    restaurant_id = Column(Integer, ForeignKey("restaurants.id", ondelete="CASCADE"),
                           nullable=False, index=True)
    customer_profile_id = Column(Integer, ForeignKey("customer_profiles.id", ondelete="SET NULL"),
                                 nullable=True, index=True)
    table_id = Column(Integer, ForeignKey("tables.id", ondelete="SET NULL"), nullable=True)
    campaign_id = Column(Integer, ForeignKey("promotional_campaigns.id", ondelete="SET NULL"), nullable=True)
    customer_name = Column(String(200), nullable=True)
    customer_phone = Column(String(20), nullable=True)
    status = Column(String(20), nullable=False, default=OrderStatus.PENDING.value, index=True)
    order_source = Column(String(20), nullable=False, default=OrderSource.QR_CODE.value)
    special_instructions = Column(Text, nullable=True)

    # Pricing
    subtotal = Column(Numeric(10, 2), nullable=False, default=0)
    discount_amount = Column(Numeric(10, 2), nullable=False, default=0)
    total_amount = Column(Numeric(10, 2), nullable=False, default=0)

    # Service
    preparation_time = Column(Integer, nullable=True)  # minutes
    customer_rating = Column(Integer, nullable=True)
    assigned_staff_id = Column(Integer, ForeignKey("restaurant_staff.id", ondelete="SET NULL"), nullable=True)
    served_by_staff_id = Column(Integer, ForeignKey("restaurant_staff.id", ondelete="SET NULL"), nullable=True)
    served_at = Column(DateTime, nullable=True)

    # Loyalty snapshot, fixed at creation and applied once when served
    loyalty_points_earned = Column(Integer, nullable=False, default=0)
    loyalty_points_used = Column(Integer, nullable=False, default=0)

    order_items = relationship("OrderItem", back_populates="order", cascade="all, delete-orphan")
    customer_profile = relationship("CustomerProfile", back_populates="orders")
    table = relationship("RestaurantTable")
    notifications = relationship("OrderNotification", back_populates="order", cascade="all, delete-orphan")

    __table_args__ = (
        CheckConstraint("customer_rating >= 1 AND customer_rating <= 5", name="ck_orders_customer_rating"),
        CheckConstraint("total_amount >= 0", name="ck_orders_total_non_negative"),
        CheckConstraint("loyalty_points_used >= 0", name="ck_orders_points_used_non_negative"),
        Index("ix_orders_restaurant_created", "restaurant_id", "created_at"),
    )

    def __repr__(self):
        return f"<Order(id={self.id}, status='{self.status}', total={self.total_amount})>"


class OrderItem(Base, TimestampMixin):
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    menu_item_id = Column(Integer, ForeignKey("menu_items.id"), nullable=False, index=True)
    quantity = Column(Integer, nullable=False, default=1)
    unit_price = Column(Numeric(10, 2), nullable=False)
    total_price = Column(Numeric(10, 2), nullable=False)
    special_instructions = Column(Text, nullable=True)

    order = relationship("Order", back_populates="order_items")
    menu_item = relationship("MenuItem")
    modifiers = relationship("OrderItemModifier", back_populates="order_item", cascade="all, delete-orphan")

    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_order_items_quantity_positive"),
    )


class OrderItemModifier(Base):
    """Modifier chosen for an order line, with its name and price at ordering time"""
    __tablename__ = "order_item_modifiers"

    id = Column(Integer, primary_key=True, index=True)
    order_item_id = Column(Integer, ForeignKey("order_items.id", ondelete="CASCADE"), nullable=False, index=True)
    modifier_id = Column(Integer, ForeignKey("menu_modifiers.id", ondelete="SET NULL"), nullable=True)
    name = Column(String(100), nullable=False)
    price_adjustment = Column(Numeric(8, 2), nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    order_item = relationship("OrderItem", back_populates="modifiers")


class OrderNotification(Base):
    __tablename__ = "order_notifications"

    id = Column(Integer, primary_key=True, index=True)
    restaurant_id = Column(Integer, ForeignKey("restaurants.id", ondelete="CASCADE"), nullable=False, index=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    notification_type = Column(String(30), nullable=False)
    recipient_type = Column(String(20), nullable=False)
    message = Column(Text, nullable=False)
    is_read = Column(Boolean, nullable=False, default=False)
    sent_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    read_at = Column(DateTime, nullable=True)

    order = relationship("Order", back_populates="notifications")

    __table_args__ = (
        Index("ix_order_notifications_restaurant_unread", "restaurant_id", "is_read"),
    )

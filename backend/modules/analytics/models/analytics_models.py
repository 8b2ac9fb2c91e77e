# backend/modules/analytics/models/analytics_models.py

from datetime import datetime
from enum import Enum

from sqlalchemy import (Column, Integer, String, ForeignKey, Date, DateTime,
                        Numeric, Text, Boolean, Enum as SQLEnum, UniqueConstraint,
                        CheckConstraint)
from sqlalchemy.orm import relationship
from core.database import Base
from core.mixins import TimestampMixin


class FeedbackType(str, Enum):
    FOOD = "food"
    SERVICE = "service"
    AMBIANCE = "ambiance"
    OVERALL = "overall"


class DailySalesSummary(Base, TimestampMixin):
    """Per-restaurant totals for one calendar day"""
    __tablename__ = "daily_sales_summary"

    id = Column(Integer, primary_key=True, index=True)
    restaurant_id = Column(Integer, ForeignKey("restaurants.id", ondelete="CASCADE"), nullable=False)
    date = Column(Date, nullable=False, index=True)
    total_orders = Column(Integer, nullable=False, default=0)
    total_revenue = Column(Numeric(12, 2), nullable=False, default=0)
    average_order_value = Column(Numeric(10, 2), nullable=False, default=0)
    most_popular_item_id = Column(Integer, ForeignKey("menu_items.id", ondelete="SET NULL"), nullable=True)

    most_popular_item = relationship("MenuItem")

    __table_args__ = (
        UniqueConstraint("restaurant_id", "date", name="uq_daily_sales_summary_restaurant_date"),
    )


class MenuItemAnalytics(Base, TimestampMixin):
    """Per-item sales for one calendar day, rebuilt with the daily summary"""
    __tablename__ = "menu_item_analytics"

    id = Column(Integer, primary_key=True, index=True)
    menu_item_id = Column(Integer, ForeignKey("menu_items.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    times_ordered = Column(Integer, nullable=False, default=0)
    total_quantity = Column(Integer, nullable=False, default=0)
    total_revenue = Column(Numeric(10, 2), nullable=False, default=0)
    average_rating = Column(Numeric(3, 2), nullable=True)

    __table_args__ = (
        UniqueConstraint("menu_item_id", "date", name="uq_menu_item_analytics_item_date"),
    )


class CustomerFeedback(Base):
    __tablename__ = "customer_feedback"

    id = Column(Integer, primary_key=True, index=True)
    restaurant_id = Column(Integer, ForeignKey("restaurants.id", ondelete="CASCADE"), nullable=False, index=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="SET NULL"), nullable=True)
    customer_name = Column(String(200), nullable=True)
    customer_email = Column(String(255), nullable=True)
    rating = Column(Integer, nullable=False)
    feedback_text = Column(Text, nullable=True)
    feedback_type = Column(
        SQLEnum(FeedbackType, values_callable=lambda obj: [e.value for e in obj], name="feedback_type"),
        nullable=False,
        default=FeedbackType.OVERALL,
    )
    is_public = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    __table_args__ = (
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_customer_feedback_rating"),
    )

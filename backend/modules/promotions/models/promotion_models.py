# backend/modules/promotions/models/promotion_models.py

from datetime import datetime
from enum import Enum

from sqlalchemy import (Column, Integer, String, ForeignKey, DateTime, Numeric, Text,
                        Boolean, JSON, CheckConstraint, Index)
from core.database import Base
from core.mixins import TimestampMixin


class DiscountType(str, Enum):
    PERCENTAGE = "percentage"
    FIXED_AMOUNT = "fixed_amount"
    BUY_ONE_GET_ONE = "buy_one_get_one"


class PromotionalCampaign(Base, TimestampMixin):
    __tablename__ = "promotional_campaigns"

    id = Column(Integer, primary_key=True, index=True)
    restaurant_id = Column(Integer, ForeignKey("restaurants.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)

    discount_type = Column(String(20), nullable=False)
    discount_value = Column(Numeric(10, 2), nullable=True)  # percent or dollars; unused for BOGO
    minimum_order_amount = Column(Numeric(10, 2), nullable=True)
    applicable_items = Column(JSON, nullable=True)  # menu item ids; None means the whole order

    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)

    usage_limit = Column(Integer, nullable=True)
    current_usage = Column(Integer, nullable=False, default=0)

    __table_args__ = (
        CheckConstraint(
            "discount_type IN ('percentage', 'fixed_amount', 'buy_one_get_one')",
            name="ck_promotional_campaigns_discount_type",
        ),
        CheckConstraint("end_date > start_date", name="ck_promotional_campaigns_dates"),
        CheckConstraint("current_usage >= 0", name="ck_promotional_campaigns_usage_non_negative"),
        Index("ix_promotional_campaigns_restaurant_dates", "restaurant_id", "start_date", "end_date"),
    )

    def is_running(self, at: datetime) -> bool:
        return bool(self.is_active) and self.start_date <= at <= self.end_date

    @property
    def remaining_uses(self):
        if self.usage_limit is None:
            return None
        return max(self.usage_limit - (self.current_usage or 0), 0)

    def __repr__(self):
        return f"<PromotionalCampaign(id={self.id}, name='{self.name}', type='{self.discount_type}')>"

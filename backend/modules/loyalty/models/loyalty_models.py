# backend/modules/loyalty/models/loyalty_models.py

"""
Loyalty program models
"""

from sqlalchemy import (
    Column,
    Integer,
    String,
    Boolean,
    ForeignKey,
    Numeric,
    Text,
    Index,
    CheckConstraint,
)
from sqlalchemy.orm import relationship
from core.database import Base
from core.mixins import TimestampMixin


class LoyaltyProgram(Base, TimestampMixin):
    """Loyalty program configuration"""
    __tablename__ = "loyalty_programs"

    id = Column(Integer, primary_key=True, index=True)
    restaurant_id = Column(Integer, ForeignKey("restaurants.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    description = Column(Text)
    points_per_dollar = Column(Numeric(10, 2), nullable=False, default=1.0)
    redemption_rate = Column(Numeric(10, 4), nullable=False, default=0.01)  # dollars per point
    minimum_redemption_points = Column(Integer, nullable=False, default=100)
    is_active = Column(Boolean, nullable=False, default=True)

    # Relationships
    restaurant = relationship("Restaurant", back_populates="loyalty_programs")

    __table_args__ = (
        CheckConstraint("points_per_dollar >= 0", name="ck_loyalty_programs_rate_non_negative"),
        CheckConstraint("minimum_redemption_points >= 0", name="ck_loyalty_programs_min_points"),
    )

    def __repr__(self):
        return f"<LoyaltyProgram(id={self.id}, name='{self.name}')>"


class LoyaltyPointsTransaction(Base, TimestampMixin):
    """
    Audit trail of points credited and debited when orders are served.

    Never read back to compute a balance; CustomerProfile.loyalty_points is
    the running total.
    """
    __tablename__ = "loyalty_points_transactions"

    id = Column(Integer, primary_key=True, index=True)
    customer_profile_id = Column(Integer, ForeignKey("customer_profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    restaurant_id = Column(Integer, ForeignKey("restaurants.id", ondelete="CASCADE"), nullable=False)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="SET NULL"), nullable=True, index=True)

    points_earned = Column(Integer, nullable=False, default=0)
    points_used = Column(Integer, nullable=False, default=0)
    points_balance_after = Column(Integer, nullable=False)
    reason = Column(String(200), nullable=False, default="order_served")

    customer_profile = relationship("CustomerProfile")
    order = relationship("Order")

    __table_args__ = (
        Index("ix_loyalty_points_transactions_profile_date", "customer_profile_id", "created_at"),
    )

    @property
    def points_change(self) -> int:
        return self.points_earned - self.points_used

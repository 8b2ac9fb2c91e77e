# backend/modules/customers/models/customer_models.py

from enum import Enum

from sqlalchemy import (Column, Integer, String, ForeignKey, Date, Numeric,
                        Text, JSON, CheckConstraint)
from sqlalchemy.orm import relationship
from core.database import Base
from core.mixins import TimestampMixin


class LoyaltyTier(str, Enum):
    """Customer loyalty tier levels, derived from visit count"""
    BRONZE = "Bronze"
    SILVER = "Silver"
    GOLD = "Gold"
    VIP = "VIP"


# Minimum total_visits for each tier, highest first
TIER_THRESHOLDS = (
    (LoyaltyTier.VIP, 50),
    (LoyaltyTier.GOLD, 20),
    (LoyaltyTier.SILVER, 10),
)


def tier_for_visits(total_visits: int) -> LoyaltyTier:
    for tier, minimum in TIER_THRESHOLDS:
        if (total_visits or 0) >= minimum:
            return tier
    return LoyaltyTier.BRONZE


class CustomerProfile(Base, TimestampMixin):
    """
    Diner profile shared across restaurants.

    total_visits, total_spent and loyalty_points are running aggregates. They
    are only ever incremented by the order-served handler.
    """
    __tablename__ = "customer_profiles"

    id = Column(Integer, primary_key=True, index=True)
    phone = Column(String(20), unique=True, nullable=True, index=True)
    email = Column(String(255), unique=True, nullable=True, index=True)
    name = Column(String(200), nullable=True)
    date_of_birth = Column(Date, nullable=True)

    # Preferences
    dietary_preferences = Column(JSON, nullable=True)
    allergens = Column(JSON, nullable=True)
    favorite_restaurant_id = Column(Integer, ForeignKey("restaurants.id", ondelete="SET NULL"), nullable=True)
    preferred_table_size = Column(Integer, nullable=True)
    notes = Column(Text, nullable=True)

    # Aggregates
    total_visits = Column(Integer, nullable=False, default=0)
    total_spent = Column(Numeric(12, 2), nullable=False, default=0)
    loyalty_points = Column(Integer, nullable=False, default=0)

    orders = relationship("Order", back_populates="customer_profile")
    favorite_restaurant = relationship("Restaurant")

    __table_args__ = (
        CheckConstraint("total_visits >= 0", name="ck_customer_profiles_visits_non_negative"),
    )

    @property
    def loyalty_tier(self) -> LoyaltyTier:
        return tier_for_visits(self.total_visits)

    def __repr__(self):
        return f"<CustomerProfile(id={self.id}, name='{self.name}', points={self.loyalty_points})>"

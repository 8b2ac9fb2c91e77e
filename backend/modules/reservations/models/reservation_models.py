# backend/modules/reservations/models/reservation_models.py

from sqlalchemy import (
    Column, Integer, String, ForeignKey, Date, Time, Text,
    Enum as SQLEnum, Index, CheckConstraint
)
from sqlalchemy.orm import relationship
from core.database import Base
from core.mixins import TimestampMixin
import enum


class ReservationStatus(str, enum.Enum):
    """Reservation status enum"""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    SEATED = "seated"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no_show"


# Statuses that hold a table
ACTIVE_RESERVATION_STATUSES = (ReservationStatus.CONFIRMED, ReservationStatus.SEATED)


class TableReservation(Base, TimestampMixin):
    """A booking of one table for a party"""
    __tablename__ = "table_reservations"

    id = Column(Integer, primary_key=True, index=True)
    restaurant_id = Column(Integer, ForeignKey("restaurants.id", ondelete="CASCADE"), nullable=False, index=True)
    table_id = Column(Integer, ForeignKey("tables.id", ondelete="SET NULL"), nullable=True, index=True)
    customer_profile_id = Column(Integer, ForeignKey("customer_profiles.id", ondelete="SET NULL"), nullable=True)

    # Guest details
    customer_name = Column(String(200), nullable=False)
    customer_phone = Column(String(20), nullable=True)
    customer_email = Column(String(255), nullable=True)

    # Reservation details
    party_size = Column(Integer, nullable=False)
    reservation_date = Column(Date, nullable=False, index=True)
    reservation_time = Column(Time, nullable=False)
    duration_minutes = Column(Integer, nullable=False, default=120)
    status = Column(
        SQLEnum(ReservationStatus, values_callable=lambda obj: [e.value for e in obj], name="reservation_status"),
        nullable=False,
        default=ReservationStatus.PENDING,
    )
    confirmation_code = Column(String(20), unique=True, index=True)
    special_requests = Column(Text, nullable=True)

    table = relationship("RestaurantTable")
    customer_profile = relationship("CustomerProfile")

    __table_args__ = (
        CheckConstraint("party_size > 0", name="ck_table_reservations_party_size"),
        CheckConstraint("duration_minutes > 0", name="ck_table_reservations_duration"),
        Index("ix_table_reservations_restaurant_date", "restaurant_id", "reservation_date"),
    )

    def __repr__(self):
        return f"<TableReservation(id={self.id}, date={self.reservation_date}, time={self.reservation_time}, status={self.status})>"

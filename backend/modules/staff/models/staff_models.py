from sqlalchemy import (
    Column, Integer, String, ForeignKey, DateTime, Date, Time, Boolean, JSON,
    Numeric, Text, Enum as SQLEnum, UniqueConstraint, CheckConstraint, Index,
)
from sqlalchemy.orm import relationship
from datetime import date
from core.database import Base
from core.mixins import TimestampMixin
from ..enums.staff_enums import ShiftStatus


class StaffRole(Base, TimestampMixin):
    __tablename__ = "staff_roles"
    id = Column(Integer, primary_key=True, index=True)
    restaurant_id = Column(Integer, ForeignKey("restaurants.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(50), nullable=False)
    description = Column(String(255))
    permissions = Column(JSON, default=dict)  # flag name -> bool
    hourly_rate = Column(Numeric(10, 2))
    is_active = Column(Boolean, default=True, nullable=False)

    restaurant = relationship("Restaurant", back_populates="staff_roles")
    staff_members = relationship("RestaurantStaff", back_populates="role")

    __table_args__ = (
        UniqueConstraint("restaurant_id", "name", name="uq_staff_roles_restaurant_name"),
    )

    def has_permission(self, flag: str) -> bool:
        return bool((self.permissions or {}).get(flag))

    def __repr__(self):
        return f"<StaffRole(id={self.id}, name='{self.name}')>"


class RestaurantStaff(Base, TimestampMixin):
    __tablename__ = "restaurant_staff"
    id = Column(Integer, primary_key=True, index=True)
    restaurant_id = Column(Integer, ForeignKey("restaurants.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(36), nullable=False, index=True)  # auth user id
    role_id = Column(Integer, ForeignKey("staff_roles.id", ondelete="CASCADE"), nullable=False)
    employee_id = Column(String(50))
    hire_date = Column(Date, default=date.today)
    is_active = Column(Boolean, default=True, nullable=False)
    emergency_contact_name = Column(String(100))
    emergency_contact_phone = Column(String(20))
    notes = Column(Text)

    role = relationship("StaffRole", back_populates="staff_members")
    shifts = relationship("StaffShift", back_populates="staff_member", cascade="all, delete-orphan")

    __table_args__ = (
        UniqueConstraint("restaurant_id", "user_id", name="uq_restaurant_staff_user"),
    )


class StaffShift(Base, TimestampMixin):
    __tablename__ = "staff_shifts"
    id = Column(Integer, primary_key=True, index=True)
    staff_id = Column(Integer, ForeignKey("restaurant_staff.id", ondelete="CASCADE"), nullable=False)
    shift_date = Column(Date, nullable=False)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time)
    actual_start_time = Column(DateTime)
    actual_end_time = Column(DateTime)
    break_duration = Column(Integer, default=0)  # minutes
    status = Column(
        SQLEnum(ShiftStatus, values_callable=lambda obj: [e.value for e in obj], name="shift_status"),
        default=ShiftStatus.SCHEDULED,
        nullable=False,
    )
    notes = Column(Text)

    staff_member = relationship("RestaurantStaff", back_populates="shifts")

    __table_args__ = (
        CheckConstraint("break_duration >= 0", name="ck_staff_shifts_break_non_negative"),
        Index("ix_staff_shifts_staff_date", "staff_id", "shift_date"),
    )

    @property
    def worked_minutes(self):
        if not (self.actual_start_time and self.actual_end_time):
            return None
        elapsed = (self.actual_end_time - self.actual_start_time).total_seconds() / 60
        return max(int(elapsed) - (self.break_duration or 0), 0)

# backend/modules/staff/services/staff_service.py

import logging
from datetime import datetime, date
from typing import List, Optional

from sqlalchemy.orm import Session

from core.exceptions import ConflictError, NotFoundError, ValidationError
from ..enums.staff_enums import ShiftStatus
from ..models.staff_models import RestaurantStaff, StaffRole, StaffShift
from ..schemas.staff_schemas import (
    ShiftCreate, StaffMemberCreate, StaffMemberUpdate, StaffRoleUpdate,
)

logger = logging.getLogger(__name__)


class StaffService:
    """Staff roles, memberships and shifts for a single restaurant"""

    def __init__(self, db: Session, restaurant_id: int):
        self.db = db
        self.restaurant_id = restaurant_id

    # ========== Roles ==========

    def list_roles(self, include_inactive: bool = False) -> List[StaffRole]:
        query = self.db.query(StaffRole).filter(StaffRole.restaurant_id == self.restaurant_id)
        if not include_inactive:
            query = query.filter(StaffRole.is_active.is_(True))
        return query.order_by(StaffRole.id).all()

    def get_role(self, role_id: int) -> StaffRole:
        role = (
            self.db.query(StaffRole)
            .filter(StaffRole.id == role_id, StaffRole.restaurant_id == self.restaurant_id)
            .first()
        )
        if not role:
            raise NotFoundError(f"Staff role {role_id} not found")
        return role

    def update_role(self, role_id: int, data: StaffRoleUpdate) -> StaffRole:
        role = self.get_role(role_id)
        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(role, field, value)
        self.db.commit()
        self.db.refresh(role)
        return role

    # ========== Staff members ==========

    def add_staff_member(self, data: StaffMemberCreate) -> RestaurantStaff:
        role = self.get_role(data.role_id)
        if not role.is_active:
            raise ValidationError(f"Role '{role.name}' is inactive")

        existing = (
            self.db.query(RestaurantStaff)
            .filter(
                RestaurantStaff.restaurant_id == self.restaurant_id,
                RestaurantStaff.user_id == data.user_id,
            )
            .first()
        )
        if existing:
            raise ConflictError("User is already a staff member of this restaurant")

        values = data.model_dump(exclude_none=True)
        member = RestaurantStaff(restaurant_id=self.restaurant_id, **values)
        self.db.add(member)
        self.db.commit()
        self.db.refresh(member)
        logger.info(f"Added user {data.user_id} to restaurant {self.restaurant_id} as {role.name}")
        return member

    def get_staff_member(self, staff_id: int) -> RestaurantStaff:
        member = (
            self.db.query(RestaurantStaff)
            .filter(
                RestaurantStaff.id == staff_id,
                RestaurantStaff.restaurant_id == self.restaurant_id,
            )
            .first()
        )
        if not member:
            raise NotFoundError(f"Staff member {staff_id} not found")
        return member

    def list_staff(self, active_only: bool = True) -> List[RestaurantStaff]:
        query = self.db.query(RestaurantStaff).filter(
            RestaurantStaff.restaurant_id == self.restaurant_id
        )
        if active_only:
            query = query.filter(RestaurantStaff.is_active.is_(True))
        return query.order_by(RestaurantStaff.id).all()

    def update_staff_member(self, staff_id: int, data: StaffMemberUpdate) -> RestaurantStaff:
        member = self.get_staff_member(staff_id)
        updates = data.model_dump(exclude_unset=True)
        if "role_id" in updates and updates["role_id"] != member.role_id:
            role = self.get_role(updates["role_id"])
            if not role.is_active:
                raise ValidationError(f"Role '{role.name}' is inactive")
        for field, value in updates.items():
            setattr(member, field, value)
        self.db.commit()
        self.db.refresh(member)
        return member

    # ========== Shifts ==========

    def schedule_shift(self, data: ShiftCreate) -> StaffShift:
        member = self.get_staff_member(data.staff_id)
        if not member.is_active:
            raise ValidationError("Cannot schedule shifts for an inactive staff member")

        shift = StaffShift(**data.model_dump())
        self.db.add(shift)
        self.db.commit()
        self.db.refresh(shift)
        return shift

    def get_shift(self, shift_id: int) -> StaffShift:
        shift = (
            self.db.query(StaffShift)
            .join(RestaurantStaff, StaffShift.staff_id == RestaurantStaff.id)
            .filter(
                StaffShift.id == shift_id,
                RestaurantStaff.restaurant_id == self.restaurant_id,
            )
            .first()
        )
        if not shift:
            raise NotFoundError(f"Shift {shift_id} not found")
        return shift

    def list_shifts(
        self, start: Optional[date] = None, end: Optional[date] = None
    ) -> List[StaffShift]:
        query = (
            self.db.query(StaffShift)
            .join(RestaurantStaff, StaffShift.staff_id == RestaurantStaff.id)
            .filter(RestaurantStaff.restaurant_id == self.restaurant_id)
        )
        if start:
            query = query.filter(StaffShift.shift_date >= start)
        if end:
            query = query.filter(StaffShift.shift_date <= end)
        return query.order_by(StaffShift.shift_date, StaffShift.start_time).all()

    def clock_in(self, shift_id: int, at: Optional[datetime] = None) -> StaffShift:
        shift = self.get_shift(shift_id)
        if shift.status != ShiftStatus.SCHEDULED:
            raise ConflictError(f"Cannot clock in to a shift that is {shift.status.value}")
        shift.actual_start_time = at or datetime.utcnow()
        shift.status = ShiftStatus.IN_PROGRESS
        self.db.commit()
        self.db.refresh(shift)
        return shift

    def clock_out(
        self, shift_id: int, at: Optional[datetime] = None, break_minutes: Optional[int] = None
    ) -> StaffShift:
        shift = self.get_shift(shift_id)
        if shift.status != ShiftStatus.IN_PROGRESS:
            raise ConflictError(f"Cannot clock out of a shift that is {shift.status.value}")
        ended = at or datetime.utcnow()
        if ended < shift.actual_start_time:
            raise ValidationError("Clock-out time is before clock-in time")
        if break_minutes is not None:
            if break_minutes < 0:
                raise ValidationError("Break duration cannot be negative")
            shift.break_duration = break_minutes
        shift.actual_end_time = ended
        shift.status = ShiftStatus.COMPLETED
        self.db.commit()
        self.db.refresh(shift)
        return shift

    def cancel_shift(self, shift_id: int) -> StaffShift:
        shift = self.get_shift(shift_id)
        if shift.status != ShiftStatus.SCHEDULED:
            raise ConflictError(f"Cannot cancel a shift that is {shift.status.value}")
        shift.status = ShiftStatus.CANCELLED
        self.db.commit()
        self.db.refresh(shift)
        return shift

# backend/tests/factories/staff.py

from datetime import date, time
from decimal import Decimal

import factory
from factory import Sequence, SubFactory
from .base import BaseFactory
from .restaurant import RestaurantFactory
from modules.staff.enums.staff_enums import ShiftStatus
from modules.staff.models.staff_models import RestaurantStaff, StaffRole, StaffShift


class StaffRoleFactory(BaseFactory):
    class Meta:
        model = StaffRole

    restaurant_id = factory.LazyAttribute(lambda obj: RestaurantFactory().id)
    name = Sequence(lambda n: f"Role {n}")
    description = "Test role"
    permissions = {}
    hourly_rate = Decimal("15.00")
    is_active = True


class StaffMemberFactory(BaseFactory):
    """Factory for staff members; the role's restaurant is reused."""

    class Meta:
        model = RestaurantStaff

    role = SubFactory(StaffRoleFactory)
    restaurant_id = factory.LazyAttribute(lambda obj: obj.role.restaurant_id)
    user_id = Sequence(lambda n: f"staff-user-{n}")
    employee_id = Sequence(lambda n: f"EMP{n:03d}")
    is_active = True


class StaffShiftFactory(BaseFactory):
    class Meta:
        model = StaffShift

    staff_member = SubFactory(StaffMemberFactory)
    shift_date = date(2024, 6, 14)
    start_time = time(9, 0)
    end_time = time(17, 0)
    break_duration = 0
    status = ShiftStatus.SCHEDULED

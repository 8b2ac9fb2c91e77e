from .staff_models import StaffRole, RestaurantStaff, StaffShift

__all__ = ["StaffRole", "RestaurantStaff", "StaffShift"]

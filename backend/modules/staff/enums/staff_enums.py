from enum import Enum


class ShiftStatus(str, Enum):
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class DefaultRoleName(str, Enum):
    MANAGER = "Manager"
    WAITER = "Waiter"
    CHEF = "Chef"
    CASHIER = "Cashier"

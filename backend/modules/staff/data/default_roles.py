# backend/modules/staff/data/default_roles.py

from decimal import Decimal

from ..enums.staff_enums import DefaultRoleName


# Roles every new restaurant starts with
DEFAULT_STAFF_ROLES = [
    {
        "name": DefaultRoleName.MANAGER.value,
        "description": "Restaurant manager with full access",
        "permissions": {
            "manage_staff": True,
            "manage_menu": True,
            "view_reports": True,
            "manage_inventory": True,
            "process_orders": True,
        },
        "hourly_rate": Decimal("25.00"),
    },
    {
        "name": DefaultRoleName.WAITER.value,
        "description": "Front-of-house staff serving customers",
        "permissions": {
            "process_orders": True,
            "view_menu": True,
            "update_order_status": True,
        },
        "hourly_rate": Decimal("15.00"),
    },
    {
        "name": DefaultRoleName.CHEF.value,
        "description": "Kitchen staff preparing food",
        "permissions": {
            "view_orders": True,
            "update_order_status": True,
            "manage_inventory": True,
        },
        "hourly_rate": Decimal("20.00"),
    },
    {
        "name": DefaultRoleName.CASHIER.value,
        "description": "Handle payments and customer service",
        "permissions": {
            "process_orders": True,
            "view_reports": True,
            "handle_payments": True,
        },
        "hourly_rate": Decimal("14.00"),
    },
]

# backend/tests/factories/__init__.py

"""
Shared test factories for the ZapDine backend.

These factories provide reusable test data generation for all modules.
"""

from .base import BaseFactory, bind_factory_session
from .auth import ProfileFactory
from .customer import CustomerProfileFactory
from .inventory import InventoryFactory
from .loyalty import LoyaltyProgramFactory
from .menu import MenuItemFactory, MenuItemModifierFactory, MenuModifierFactory
from .order import OrderFactory, OrderItemFactory
from .promotion import CampaignFactory
from .restaurant import RestaurantFactory, RestaurantTableFactory
from .staff import StaffMemberFactory, StaffRoleFactory, StaffShiftFactory

__all__ = [
    # Base
    'BaseFactory',
    'bind_factory_session',

    # Auth
    'ProfileFactory',

    # Restaurants
    'RestaurantFactory',
    'RestaurantTableFactory',

    # Menu & Inventory
    'MenuItemFactory',
    'MenuModifierFactory',
    'MenuItemModifierFactory',
    'InventoryFactory',

    # Orders
    'OrderFactory',
    'OrderItemFactory',

    # Promotions
    'CampaignFactory',

    # Customers & Loyalty
    'CustomerProfileFactory',
    'LoyaltyProgramFactory',

    # Staff
    'StaffRoleFactory',
    'StaffMemberFactory',
    'StaffShiftFactory',
]

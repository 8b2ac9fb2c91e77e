# backend/modules/restaurants/models/__init__.py

from .restaurant_models import Restaurant, RestaurantTable, TableStatus

__all__ = ["Restaurant", "RestaurantTable", "TableStatus"]

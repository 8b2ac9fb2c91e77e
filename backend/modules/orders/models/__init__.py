from .order_models import Order, OrderItem, OrderNotification

__all__ = ["Order", "OrderItem", "OrderNotification"]

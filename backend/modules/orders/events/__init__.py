from .order_events import OrderServedEvent, ORDER_SERVED

__all__ = ["OrderServedEvent", "ORDER_SERVED"]

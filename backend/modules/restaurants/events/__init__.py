from .restaurant_events import RestaurantCreatedEvent, RESTAURANT_CREATED

__all__ = ["RestaurantCreatedEvent", "RESTAURANT_CREATED"]

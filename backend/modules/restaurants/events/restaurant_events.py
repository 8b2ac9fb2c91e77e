# backend/modules/restaurants/events/restaurant_events.py

from dataclasses import dataclass, field

from core.events import DomainEvent

RESTAURANT_CREATED = "restaurant.created"


@dataclass
class RestaurantCreatedEvent(DomainEvent):
    """Emitted once a restaurant row has been inserted"""

    restaurant_id: int
    owner_id: str
    event_type: str = field(init=False, default=RESTAURANT_CREATED)

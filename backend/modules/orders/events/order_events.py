# backend/modules/orders/events/order_events.py

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

from core.events import DomainEvent

ORDER_SERVED = "order.served"


@dataclass
class OrderServedEvent(DomainEvent):
    """
    Emitted once per order, on the status write that moves it into served.

    Carries the snapshot values the loyalty bookkeeping needs so handlers do
    not have to reload the order.
    """

    order_id: int
    restaurant_id: int
    customer_profile_id: Optional[int]
    total_amount: Decimal
    loyalty_points_earned: int
    loyalty_points_used: int
    event_type: str = field(init=False, default=ORDER_SERVED)

    @property
    def points_delta(self) -> int:
        return (self.loyalty_points_earned or 0) - (self.loyalty_points_used or 0)

# backend/modules/loyalty/services/order_served_handler.py

import logging

from sqlalchemy import update
from sqlalchemy.orm import Session

from modules.customers.models.customer_models import CustomerProfile
from modules.orders.events.order_events import OrderServedEvent
from ..models.loyalty_models import LoyaltyPointsTransaction

logger = logging.getLogger(__name__)


def on_order_served(db: Session, event: OrderServedEvent):
    """
    Credit the order's customer profile: one visit, the order total, and the
    net points (earned minus used).

    The counters are incremented in a single UPDATE on the caller's session,
    so they commit or roll back together with the status change. An order
    without a profile, or whose profile no longer exists, changes nothing.
    """
    if event.customer_profile_id is None:
        logger.debug(f"Order {event.order_id} served without a customer profile")
        return

    result = db.execute(
        update(CustomerProfile)
        .where(CustomerProfile.id == event.customer_profile_id)
        .values(
            total_visits=CustomerProfile.total_visits + 1,
            total_spent=CustomerProfile.total_spent + event.total_amount,
            loyalty_points=CustomerProfile.loyalty_points + event.points_delta,
        )
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        logger.warning(
            f"Customer profile {event.customer_profile_id} for order {event.order_id} not found"
        )
        return

    balance = (
        db.query(CustomerProfile.loyalty_points)
        .filter(CustomerProfile.id == event.customer_profile_id)
        .scalar()
    )
    db.add(
        LoyaltyPointsTransaction(
            customer_profile_id=event.customer_profile_id,
            restaurant_id=event.restaurant_id,
            order_id=event.order_id,
            points_earned=event.loyalty_points_earned,
            points_used=event.loyalty_points_used,
            points_balance_after=balance,
        )
    )
    db.flush()
    logger.info(
        f"Credited profile {event.customer_profile_id} for order {event.order_id}: "
        f"{event.points_delta:+d} points, balance {balance}"
    )

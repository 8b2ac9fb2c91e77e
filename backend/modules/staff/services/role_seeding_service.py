# backend/modules/staff/services/role_seeding_service.py

import copy
import logging
from typing import List

from sqlalchemy.orm import Session

from modules.restaurants.events.restaurant_events import RestaurantCreatedEvent
from ..data.default_roles import DEFAULT_STAFF_ROLES
from ..models.staff_models import StaffRole

logger = logging.getLogger(__name__)


def seed_default_roles(db: Session, restaurant_id: int) -> List[StaffRole]:
    """
    Insert the default staff roles for a restaurant.

    Roles whose name already exists for the restaurant are left untouched, so
    running this twice never produces duplicates. Nothing is committed here;
    the caller owns the transaction.

    Returns:
        The roles that were inserted
    """
    existing = {
        name
        for (name,) in db.query(StaffRole.name)
        .filter(StaffRole.restaurant_id == restaurant_id)
        .all()
    }

    created = []
    for role_data in DEFAULT_STAFF_ROLES:
        if role_data["name"] in existing:
            continue
        role = StaffRole(restaurant_id=restaurant_id, **copy.deepcopy(role_data))
        db.add(role)
        created.append(role)

    if created:
        db.flush()
        logger.info(
            f"Seeded {len(created)} default staff roles for restaurant {restaurant_id}"
        )
    else:
        logger.debug(f"Default staff roles already present for restaurant {restaurant_id}")
    return created


def on_restaurant_created(db: Session, event: RestaurantCreatedEvent):
    """restaurant.created handler"""
    seed_default_roles(db, event.restaurant_id)

# backend/modules/restaurants/services/access_service.py

"""
Row-level access rules for restaurant-scoped data.

Owners manage everything belonging to their restaurant; active staff members
may read it. Public access (ordering, reservations, feedback) is decided at
the route level and never reaches these checks.
"""

import logging

from sqlalchemy.orm import Session

from core.auth import AuthUser
from core.exceptions import NotFoundError, PermissionDeniedError
from ..models.restaurant_models import Restaurant

logger = logging.getLogger(__name__)


def get_restaurant_or_404(db: Session, restaurant_id: int) -> Restaurant:
    restaurant = db.query(Restaurant).filter(Restaurant.id == restaurant_id).first()
    if not restaurant:
        raise NotFoundError(f"Restaurant {restaurant_id} not found")
    return restaurant


def is_owner(restaurant: Restaurant, user: AuthUser) -> bool:
    return restaurant.owner_id == user.id


def is_active_staff(db: Session, restaurant_id: int, user: AuthUser) -> bool:
    # Imported here to keep the staff module free to import restaurants
    from modules.staff.models.staff_models import RestaurantStaff

    return (
        db.query(RestaurantStaff.id)
        .filter(
            RestaurantStaff.restaurant_id == restaurant_id,
            RestaurantStaff.user_id == user.id,
            RestaurantStaff.is_active.is_(True),
        )
        .first()
        is not None
    )


def require_owner(db: Session, restaurant_id: int, user: AuthUser) -> Restaurant:
    """Return the restaurant if the caller owns it."""
    restaurant = get_restaurant_or_404(db, restaurant_id)
    if not is_owner(restaurant, user):
        logger.warning(f"User {user.id} denied owner access to restaurant {restaurant_id}")
        raise PermissionDeniedError("Only the restaurant owner can perform this action")
    return restaurant


def require_member(db: Session, restaurant_id: int, user: AuthUser) -> Restaurant:
    """Return the restaurant if the caller owns it or is active staff there."""
    restaurant = get_restaurant_or_404(db, restaurant_id)
    if is_owner(restaurant, user) or is_active_staff(db, restaurant_id, user):
        return restaurant
    logger.warning(f"User {user.id} denied access to restaurant {restaurant_id}")
    raise PermissionDeniedError("You do not have access to this restaurant")

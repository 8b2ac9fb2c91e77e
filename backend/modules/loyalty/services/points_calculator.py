# backend/modules/loyalty/services/points_calculator.py

"""
Loyalty point arithmetic.

The rate for a restaurant comes from its first active loyalty program. A
restaurant without one earns at the configured default rate (one point per
dollar) and redeems at one cent per point.
"""

import logging
from decimal import Decimal, ROUND_CEILING, ROUND_FLOOR
from typing import Optional, Union

from sqlalchemy.orm import Session

from core.config import settings
from core.exceptions import ValidationError
from ..models.loyalty_models import LoyaltyProgram

logger = logging.getLogger(__name__)

Amount = Union[Decimal, float, int, str]


def _to_decimal(value: Amount) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def get_active_program(db: Session, restaurant_id: int) -> Optional[LoyaltyProgram]:
    return (
        db.query(LoyaltyProgram)
        .filter(
            LoyaltyProgram.restaurant_id == restaurant_id,
            LoyaltyProgram.is_active.is_(True),
        )
        .order_by(LoyaltyProgram.id)
        .first()
    )


def calculate_loyalty_points(db: Session, order_total: Amount, restaurant_id: int) -> int:
    """floor(order_total * points_per_dollar), never negative"""
    program = get_active_program(db, restaurant_id)
    if program is not None and program.points_per_dollar is not None:
        rate = _to_decimal(program.points_per_dollar)
    else:
        rate = _to_decimal(settings.default_points_per_dollar)

    points = (_to_decimal(order_total) * rate).to_integral_value(rounding=ROUND_FLOOR)
    return max(int(points), 0)


def _redemption_rate(db: Session, restaurant_id: int) -> Decimal:
    program = get_active_program(db, restaurant_id)
    if program is not None and program.redemption_rate is not None:
        return _to_decimal(program.redemption_rate)
    return _to_decimal(settings.default_redemption_rate)


def redemption_value(db: Session, points: int, restaurant_id: int) -> Decimal:
    """Dollar value of ``points`` at the restaurant's redemption rate"""
    rate = _redemption_rate(db, restaurant_id)
    return (Decimal(points) * rate).quantize(Decimal("0.01"))


def points_for_amount(db: Session, amount: Amount, restaurant_id: int) -> int:
    """Fewest points whose redemption value covers ``amount``"""
    rate = _redemption_rate(db, restaurant_id)
    if rate <= 0:
        return 0
    points = (_to_decimal(amount) / rate).to_integral_value(rounding=ROUND_CEILING)
    return max(int(points), 0)


def minimum_redemption_points(db: Session, restaurant_id: int) -> int:
    program = get_active_program(db, restaurant_id)
    if program is not None and program.minimum_redemption_points is not None:
        return program.minimum_redemption_points
    return settings.default_minimum_redemption_points


def validate_points_redemption(
    db: Session, restaurant_id: int, points_used: int, available_points: int
) -> None:
    """Raise ValidationError unless ``points_used`` may be spent on an order."""
    if points_used == 0:
        return
    if points_used < 0:
        raise ValidationError("Points used cannot be negative")

    minimum = minimum_redemption_points(db, restaurant_id)
    if points_used < minimum:
        raise ValidationError(f"At least {minimum} points are required to redeem")
    if points_used > available_points:
        raise ValidationError(
            f"Insufficient loyalty points: {available_points} available, {points_used} requested"
        )

# backend/modules/loyalty/services/loyalty_service.py

import logging
from decimal import Decimal
from typing import List

from sqlalchemy.orm import Session

from core.config import settings
from core.exceptions import NotFoundError
from ..models.loyalty_models import LoyaltyPointsTransaction, LoyaltyProgram
from ..schemas.loyalty_schemas import (
    LoyaltyProgramCreate, LoyaltyProgramUpdate, PointsPreview,
)
from .points_calculator import calculate_loyalty_points, get_active_program

logger = logging.getLogger(__name__)


class LoyaltyService:
    """Loyalty program configuration for a single restaurant"""

    def __init__(self, db: Session, restaurant_id: int):
        self.db = db
        self.restaurant_id = restaurant_id

    def create_program(self, data: LoyaltyProgramCreate) -> LoyaltyProgram:
        program = LoyaltyProgram(restaurant_id=self.restaurant_id, **data.model_dump())
        self.db.add(program)
        self.db.flush()
        if program.is_active:
            self._deactivate_others(program.id)
        self.db.commit()
        self.db.refresh(program)
        logger.info(f"Created loyalty program {program.id} for restaurant {self.restaurant_id}")
        return program

    def list_programs(self) -> List[LoyaltyProgram]:
        return (
            self.db.query(LoyaltyProgram)
            .filter(LoyaltyProgram.restaurant_id == self.restaurant_id)
            .order_by(LoyaltyProgram.id)
            .all()
        )

    def get_program(self, program_id: int) -> LoyaltyProgram:
        program = (
            self.db.query(LoyaltyProgram)
            .filter(
                LoyaltyProgram.id == program_id,
                LoyaltyProgram.restaurant_id == self.restaurant_id,
            )
            .first()
        )
        if not program:
            raise NotFoundError(f"Loyalty program {program_id} not found")
        return program

    def update_program(self, program_id: int, data: LoyaltyProgramUpdate) -> LoyaltyProgram:
        program = self.get_program(program_id)
        updates = data.model_dump(exclude_unset=True)
        for field, value in updates.items():
            setattr(program, field, value)
        if updates.get("is_active"):
            self._deactivate_others(program.id)
        self.db.commit()
        self.db.refresh(program)
        return program

    def preview_points(self, order_total: Decimal) -> PointsPreview:
        program = get_active_program(self.db, self.restaurant_id)
        return PointsPreview(
            order_total=order_total,
            points_earned=calculate_loyalty_points(self.db, order_total, self.restaurant_id),
            points_per_dollar=(
                program.points_per_dollar if program else Decimal(str(settings.default_points_per_dollar))
            ),
            redemption_rate=(
                program.redemption_rate if program else Decimal(str(settings.default_redemption_rate))
            ),
            minimum_redemption_points=(
                program.minimum_redemption_points
                if program else settings.default_minimum_redemption_points
            ),
        )

    def list_transactions(self, customer_profile_id: int) -> List[LoyaltyPointsTransaction]:
        return (
            self.db.query(LoyaltyPointsTransaction)
            .filter(
                LoyaltyPointsTransaction.restaurant_id == self.restaurant_id,
                LoyaltyPointsTransaction.customer_profile_id == customer_profile_id,
            )
            .order_by(LoyaltyPointsTransaction.created_at.desc(), LoyaltyPointsTransaction.id.desc())
            .all()
        )

    def _deactivate_others(self, program_id: int):
        # Only one program per restaurant is consulted for rates
        (
            self.db.query(LoyaltyProgram)
            .filter(
                LoyaltyProgram.restaurant_id == self.restaurant_id,
                LoyaltyProgram.id != program_id,
                LoyaltyProgram.is_active.is_(True),
            )
            .update({LoyaltyProgram.is_active: False}, synchronize_session="fetch")
        )

# backend/modules/analytics/services/feedback_service.py

import logging
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from core.exceptions import NotFoundError, ValidationError
from modules.orders.models.order_models import Order
from modules.restaurants.models.restaurant_models import Restaurant
from ..models.analytics_models import CustomerFeedback, FeedbackType
from ..schemas.analytics_schemas import FeedbackCreate, FeedbackSummary

logger = logging.getLogger(__name__)


class FeedbackService:
    def __init__(self, db: Session, restaurant_id: int):
        self.db = db
        self.restaurant_id = restaurant_id

    def submit_feedback(self, data: FeedbackCreate) -> CustomerFeedback:
        if not self.db.query(Restaurant.id).filter(Restaurant.id == self.restaurant_id).first():
            raise NotFoundError(f"Restaurant {self.restaurant_id} not found")
        if data.order_id is not None:
            order = (
                self.db.query(Order.id)
                .filter(Order.id == data.order_id, Order.restaurant_id == self.restaurant_id)
                .first()
            )
            if not order:
                raise ValidationError(f"Order {data.order_id} does not belong to this restaurant")

        feedback = CustomerFeedback(restaurant_id=self.restaurant_id, **data.model_dump())
        self.db.add(feedback)
        self.db.commit()
        self.db.refresh(feedback)
        logger.info(
            f"Feedback {feedback.id} ({feedback.feedback_type.value}, {feedback.rating}/5) "
            f"for restaurant {self.restaurant_id}"
        )
        return feedback

    def list_feedback(
        self, public_only: bool = False, feedback_type: Optional[FeedbackType] = None
    ) -> List[CustomerFeedback]:
        query = self.db.query(CustomerFeedback).filter(
            CustomerFeedback.restaurant_id == self.restaurant_id
        )
        if public_only:
            query = query.filter(CustomerFeedback.is_public.is_(True))
        if feedback_type:
            query = query.filter(CustomerFeedback.feedback_type == feedback_type)
        return query.order_by(CustomerFeedback.created_at.desc(), CustomerFeedback.id.desc()).all()

    def summary(self) -> FeedbackSummary:
        rows = (
            self.db.query(
                CustomerFeedback.feedback_type,
                func.count(CustomerFeedback.id),
                func.avg(CustomerFeedback.rating),
            )
            .filter(CustomerFeedback.restaurant_id == self.restaurant_id)
            .group_by(CustomerFeedback.feedback_type)
            .all()
        )
        total = sum(count for _, count, _ in rows)
        if not total:
            return FeedbackSummary(total_feedback=0)

        weighted = sum(Decimal(str(avg)) * count for _, count, avg in rows)
        return FeedbackSummary(
            total_feedback=total,
            average_rating=(weighted / total).quantize(Decimal("0.01")),
            by_type={
                feedback_type.value: Decimal(str(avg)).quantize(Decimal("0.01"))
                for feedback_type, _, avg in rows
            },
        )

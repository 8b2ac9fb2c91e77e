# backend/modules/promotions/services/campaign_service.py

"""
Campaign management and checkout discounts.

An order claims at most one campaign. Claiming increments the campaign's
usage counter with a guarded UPDATE so a usage limit cannot be overshot by
concurrent orders; cancelling the order gives the use back.
"""

import logging
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional

from sqlalchemy import or_, update
from sqlalchemy.orm import Session

from core.exceptions import ConflictError, NotFoundError, ValidationError
from ..models.promotion_models import DiscountType, PromotionalCampaign
from ..schemas.promotion_schemas import CampaignCreate, CampaignUpdate

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


def calculate_campaign_discount(campaign: PromotionalCampaign, order_items) -> Decimal:
    """
    Discount ``campaign`` gives on the priced order lines.

    Only lines for the campaign's applicable items count; a campaign with no
    item list applies to every line. Buy-one-get-one makes every second unit
    of an eligible line free. The result never exceeds the eligible amount.
    """
    applicable = set(campaign.applicable_items or [])
    eligible = [
        line for line in order_items
        if not applicable or line.menu_item_id in applicable
    ]
    eligible_total = sum(
        (Decimal(str(line.total_price)) for line in eligible), Decimal("0")
    )
    value = Decimal(str(campaign.discount_value or 0))

    if campaign.discount_type == DiscountType.PERCENTAGE.value:
        discount = eligible_total * value / 100
    elif campaign.discount_type == DiscountType.FIXED_AMOUNT.value:
        discount = value
    elif campaign.discount_type == DiscountType.BUY_ONE_GET_ONE.value:
        discount = sum(
            (Decimal(str(line.unit_price)) * (line.quantity // 2) for line in eligible),
            Decimal("0"),
        )
    else:
        logger.warning(f"Unknown discount type {campaign.discount_type} on campaign {campaign.id}")
        discount = Decimal("0")

    return min(discount, eligible_total).quantize(CENTS, rounding=ROUND_HALF_UP)


class CampaignService:
    """Promotional campaigns for a single restaurant"""

    def __init__(self, db: Session, restaurant_id: int):
        self.db = db
        self.restaurant_id = restaurant_id

    def create_campaign(self, data: CampaignCreate) -> PromotionalCampaign:
        values = data.model_dump()
        values["discount_type"] = data.discount_type.value
        campaign = PromotionalCampaign(restaurant_id=self.restaurant_id, **values)
        self.db.add(campaign)
        self.db.commit()
        self.db.refresh(campaign)
        logger.info(f"Created campaign {campaign.id} for restaurant {self.restaurant_id}")
        return campaign

    def get_campaign(self, campaign_id: int) -> PromotionalCampaign:
        campaign = (
            self.db.query(PromotionalCampaign)
            .filter(
                PromotionalCampaign.id == campaign_id,
                PromotionalCampaign.restaurant_id == self.restaurant_id,
            )
            .first()
        )
        if not campaign:
            raise NotFoundError(f"Campaign {campaign_id} not found")
        return campaign

    def list_campaigns(self, running_at: Optional[datetime] = None) -> List[PromotionalCampaign]:
        """All campaigns, or only those running at ``running_at`` with uses left"""
        query = self.db.query(PromotionalCampaign).filter(
            PromotionalCampaign.restaurant_id == self.restaurant_id
        )
        if running_at is not None:
            query = query.filter(
                PromotionalCampaign.is_active.is_(True),
                PromotionalCampaign.start_date <= running_at,
                PromotionalCampaign.end_date >= running_at,
                or_(
                    PromotionalCampaign.usage_limit.is_(None),
                    PromotionalCampaign.current_usage < PromotionalCampaign.usage_limit,
                ),
            )
        return query.order_by(PromotionalCampaign.start_date.desc(), PromotionalCampaign.id).all()

    def update_campaign(self, campaign_id: int, data: CampaignUpdate) -> PromotionalCampaign:
        campaign = self.get_campaign(campaign_id)
        updates = data.model_dump(exclude_unset=True)
        if updates.get("end_date") is not None and updates["end_date"] <= campaign.start_date:
            raise ValidationError("end_date must be after start_date")
        for field, value in updates.items():
            setattr(campaign, field, value)
        self.db.commit()
        self.db.refresh(campaign)
        return campaign

    # ========== Checkout ==========

    def claim(self, campaign_id: int, order_items, subtotal: Decimal,
              at: Optional[datetime] = None) -> Decimal:
        """
        Use one redemption of a campaign for an order and return its discount.

        The usage counter is incremented in the caller's transaction; the
        caller commits or rolls back.
        """
        at = at or datetime.utcnow()
        campaign = self.get_campaign(campaign_id)
        if not campaign.is_running(at):
            raise ValidationError(f"Campaign '{campaign.name}' is not running")
        if campaign.minimum_order_amount is not None and subtotal < campaign.minimum_order_amount:
            raise ValidationError(
                f"Campaign '{campaign.name}' needs an order of at least {campaign.minimum_order_amount}"
            )

        discount = calculate_campaign_discount(campaign, order_items)
        if discount <= 0:
            raise ValidationError(f"Campaign '{campaign.name}' does not apply to this order")

        result = self.db.execute(
            update(PromotionalCampaign)
            .where(
                PromotionalCampaign.id == campaign.id,
                or_(
                    PromotionalCampaign.usage_limit.is_(None),
                    PromotionalCampaign.current_usage < PromotionalCampaign.usage_limit,
                ),
            )
            .values(current_usage=PromotionalCampaign.current_usage + 1)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            raise ConflictError(f"Campaign '{campaign.name}' has reached its usage limit")

        logger.info(f"Campaign {campaign.id} claimed for a discount of {discount}")
        return discount

    def release(self, campaign_id: int) -> None:
        """Give back one use, in the caller's transaction"""
        self.db.execute(
            update(PromotionalCampaign)
            .where(
                PromotionalCampaign.id == campaign_id,
                PromotionalCampaign.current_usage > 0,
            )
            .values(current_usage=PromotionalCampaign.current_usage - 1)
            .execution_options(synchronize_session=False)
        )

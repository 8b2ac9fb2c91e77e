# backend/modules/promotions/models/__init__.py

from .promotion_models import DiscountType, PromotionalCampaign

__all__ = ["DiscountType", "PromotionalCampaign"]

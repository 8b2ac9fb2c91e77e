from .customer_models import CustomerProfile, LoyaltyTier

__all__ = ["CustomerProfile", "LoyaltyTier"]

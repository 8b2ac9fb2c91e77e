# backend/modules/loyalty/models/__init__.py

from .loyalty_models import LoyaltyProgram, LoyaltyPointsTransaction

__all__ = ["LoyaltyProgram", "LoyaltyPointsTransaction"]

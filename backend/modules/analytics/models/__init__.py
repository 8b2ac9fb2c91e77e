# backend/modules/analytics/models/__init__.py

from .analytics_models import CustomerFeedback, DailySalesSummary, FeedbackType, MenuItemAnalytics

__all__ = ["CustomerFeedback", "DailySalesSummary", "FeedbackType", "MenuItemAnalytics"]

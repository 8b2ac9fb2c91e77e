# backend/modules/analytics/routers/__init__.py

from .analytics_router import router

__all__ = ["router"]

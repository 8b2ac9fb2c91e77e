# backend/modules/promotions/routers/__init__.py

from .promotion_router import router

__all__ = ["router"]

# backend/modules/email/routers/__init__.py

from .email_router import router

__all__ = ["router"]

from .staff_routes import router

__all__ = ["router"]

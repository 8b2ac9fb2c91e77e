from .customer_routes import router

__all__ = ["router"]

from .restaurant_routes import router

__all__ = ["router"]

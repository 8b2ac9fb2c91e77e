from .inventory_routes import router

__all__ = ["router"]

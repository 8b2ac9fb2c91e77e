from .loyalty_routes import router

__all__ = ["router"]

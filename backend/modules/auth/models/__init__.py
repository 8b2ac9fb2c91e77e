from .profile_models import Profile

__all__ = ["Profile"]

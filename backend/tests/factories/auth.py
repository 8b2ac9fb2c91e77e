# backend/tests/factories/auth.py

from factory import Sequence
from .base import BaseFactory
from modules.auth.models.profile_models import Profile


class ProfileFactory(BaseFactory):
    class Meta:
        model = Profile

    user_id = Sequence(lambda n: f"user-{n}")
    email = Sequence(lambda n: f"user{n}@example.com")
    username = Sequence(lambda n: f"user_{n}")
    full_name = "Test User"

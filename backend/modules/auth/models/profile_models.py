# backend/modules/auth/models/profile_models.py

from sqlalchemy import Column, Integer, String

from core.database import Base
from core.mixins import TimestampMixin


class Profile(Base, TimestampMixin):
    """
    Application profile for an identity-provider account.

    ``user_id`` is the provider's user id (the access token subject). The
    username is what people may sign in with instead of their email.
    """
    __tablename__ = "profiles"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(36), unique=True, nullable=False, index=True)
    email = Column(String(255), nullable=True, index=True)
    username = Column(String(50), unique=True, nullable=True, index=True)
    full_name = Column(String(200), nullable=True)

    def __repr__(self):
        return f"<Profile(id={self.id}, username='{self.username}')>"

# backend/modules/customers/services/customer_service.py

import logging
from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from core.exceptions import ConflictError, NotFoundError, ValidationError
from ..models.customer_models import CustomerProfile
from ..schemas.customer_schemas import CustomerProfileCreate, CustomerProfileUpdate

logger = logging.getLogger(__name__)


class CustomerService:
    def __init__(self, db: Session):
        self.db = db

    def create_profile(self, data: CustomerProfileCreate) -> CustomerProfile:
        self._ensure_contact_unique(data.phone, data.email)

        profile = CustomerProfile(**data.model_dump())
        profile.total_visits = 0
        profile.total_spent = 0
        profile.loyalty_points = 0
        self.db.add(profile)
        self.db.commit()
        self.db.refresh(profile)
        logger.info(f"Created customer profile {profile.id}")
        return profile

    def get_profile(self, profile_id: int) -> CustomerProfile:
        profile = self.db.query(CustomerProfile).filter(CustomerProfile.id == profile_id).first()
        if not profile:
            raise NotFoundError(f"Customer profile {profile_id} not found")
        return profile

    def find_profile(
        self, phone: Optional[str] = None, email: Optional[str] = None
    ) -> Optional[CustomerProfile]:
        if not phone and not email:
            raise ValidationError("Provide a phone number or email to look up a profile")
        filters = []
        if phone:
            filters.append(CustomerProfile.phone == phone)
        if email:
            filters.append(CustomerProfile.email == email)
        return self.db.query(CustomerProfile).filter(or_(*filters)).first()

    def update_profile(self, profile_id: int, data: CustomerProfileUpdate) -> CustomerProfile:
        profile = self.get_profile(profile_id)
        updates = data.model_dump(exclude_unset=True)
        self._ensure_contact_unique(
            updates.get("phone"), updates.get("email"), exclude_id=profile.id
        )
        for field, value in updates.items():
            setattr(profile, field, value)
        self.db.commit()
        self.db.refresh(profile)
        return profile

    def _ensure_contact_unique(
        self, phone: Optional[str], email: Optional[str], exclude_id: Optional[int] = None
    ):
        for column, value, label in (
            (CustomerProfile.phone, phone, "phone number"),
            (CustomerProfile.email, email, "email"),
        ):
            if not value:
                continue
            query = self.db.query(CustomerProfile.id).filter(column == value)
            if exclude_id is not None:
                query = query.filter(CustomerProfile.id != exclude_id)
            if query.first():
                raise ConflictError(f"A customer profile with this {label} already exists")

# backend/modules/customers/routes/customer_routes.py

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from core.auth import AuthUser, get_current_user
from core.database import get_db
from core.exceptions import NotFoundError
from ..schemas.customer_schemas import (
    CustomerProfileCreate, CustomerProfileResponse, CustomerProfileUpdate,
)
from ..services.customer_service import CustomerService

router = APIRouter(prefix="/customers", tags=["Customers"])


@router.post("/", response_model=CustomerProfileResponse, status_code=status.HTTP_201_CREATED)
async def create_customer_profile(data: CustomerProfileCreate, db: Session = Depends(get_db)):
    """Create a diner profile. Open to guests ordering by QR code."""
    return CustomerService(db).create_profile(data)


@router.get("/lookup", response_model=CustomerProfileResponse)
async def lookup_customer_profile(
    phone: Optional[str] = Query(None),
    email: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    profile = CustomerService(db).find_profile(phone=phone, email=email)
    if not profile:
        raise NotFoundError("Customer profile not found")
    return profile


@router.get("/{profile_id}", response_model=CustomerProfileResponse)
async def get_customer_profile(
    profile_id: int,
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    return CustomerService(db).get_profile(profile_id)


@router.patch("/{profile_id}", response_model=CustomerProfileResponse)
async def update_customer_profile(
    profile_id: int,
    data: CustomerProfileUpdate,
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    return CustomerService(db).update_profile(profile_id, data)

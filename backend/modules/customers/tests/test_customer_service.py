# backend/modules/customers/tests/test_customer_service.py

import pytest
from pydantic import ValidationError as SchemaValidationError

from core.exceptions import ConflictError, ValidationError
from modules.customers.models.customer_models import LoyaltyTier, tier_for_visits
from modules.customers.schemas.customer_schemas import CustomerProfileCreate, CustomerProfileUpdate
from modules.customers.services.customer_service import CustomerService
from tests.factories import CustomerProfileFactory


@pytest.fixture
def service(db_session):
    return CustomerService(db_session)


class TestCustomerProfiles:
    def test_new_profile_starts_at_zero(self, service):
        profile = service.create_profile(CustomerProfileCreate(name="Ana", phone="+15550001"))

        assert profile.total_visits == 0
        assert profile.loyalty_points == 0
        assert profile.loyalty_tier == LoyaltyTier.BRONZE

    def test_aggregates_not_accepted(self):
        with pytest.raises(SchemaValidationError):
            CustomerProfileCreate(phone="+15550001", loyalty_points=1000)
        with pytest.raises(SchemaValidationError):
            CustomerProfileUpdate(total_spent=50)

    def test_contact_required(self):
        with pytest.raises(SchemaValidationError):
            CustomerProfileCreate(name="Nobody")

    def test_duplicate_phone_rejected(self, service):
        CustomerProfileFactory(phone="+15550001")
        with pytest.raises(ConflictError):
            service.create_profile(CustomerProfileCreate(phone="+15550001"))

    def test_update_keeps_own_contact(self, service):
        profile = CustomerProfileFactory(phone="+15550001", email="ana@example.com")

        updated = service.update_profile(
            profile.id, CustomerProfileUpdate(phone="+15550001", name="Ana Maria")
        )

        assert updated.name == "Ana Maria"

    def test_update_to_taken_email_rejected(self, service):
        CustomerProfileFactory(email="taken@example.com")
        profile = CustomerProfileFactory()

        with pytest.raises(ConflictError):
            service.update_profile(profile.id, CustomerProfileUpdate(email="taken@example.com"))

    def test_find_by_email_or_phone(self, service):
        profile = CustomerProfileFactory(phone="+15550009", email="find@example.com")

        assert service.find_profile(phone="+15550009").id == profile.id
        assert service.find_profile(email="find@example.com").id == profile.id
        assert service.find_profile(phone="+19999999") is None
        with pytest.raises(ValidationError):
            service.find_profile()


class TestLoyaltyTier:
    @pytest.mark.parametrize(
        "visits,tier",
        [
            (0, LoyaltyTier.BRONZE),
            (9, LoyaltyTier.BRONZE),
            (10, LoyaltyTier.SILVER),
            (20, LoyaltyTier.GOLD),
            (75, LoyaltyTier.VIP),
        ],
    )
    def test_tier_for_visits(self, visits, tier):
        assert tier_for_visits(visits) == tier


class TestCustomerApi:
    def test_guest_can_create_profile(self, client):
        response = client.post("/api/v1/customers/", json={"name": "Ana", "email": "ana@example.com"})

        assert response.status_code == 201
        assert response.json()["loyalty_points"] == 0
        assert response.json()["loyalty_tier"] == "Bronze"

    def test_aggregates_in_payload_rejected(self, client):
        response = client.post(
            "/api/v1/customers/", json={"email": "ana@example.com", "loyalty_points": 5000}
        )
        assert response.status_code == 422

    def test_patch_cannot_touch_points(self, client, auth_headers):
        profile = CustomerProfileFactory(loyalty_points=10)

        response = client.patch(
            f"/api/v1/customers/{profile.id}", json={"loyalty_points": 9999}, headers=auth_headers()
        )

        assert response.status_code == 422

    def test_lookup_requires_auth(self, client):
        assert client.get("/api/v1/customers/lookup", params={"phone": "+1555"}).status_code == 401

# backend/modules/staff/tests/test_role_seeding.py

"""
Default staff roles seeded for new restaurants
"""

from decimal import Decimal

import pytest

from core.auth import AuthUser
from core.events import clear_event_handlers, register_event_handler
from modules.restaurants.events.restaurant_events import RESTAURANT_CREATED
from modules.restaurants.models.restaurant_models import Restaurant
from modules.restaurants.schemas.restaurant_schemas import RestaurantCreate
from modules.restaurants.services.restaurant_service import RestaurantService
from modules.staff.models.staff_models import StaffRole
from modules.staff.services.role_seeding_service import seed_default_roles
from tests.factories import RestaurantFactory, StaffRoleFactory

DEFAULT_ROLE_NAMES = {"Manager", "Waiter", "Chef", "Cashier"}


def role_names(db, restaurant_id):
    return {
        name
        for (name,) in db.query(StaffRole.name).filter(StaffRole.restaurant_id == restaurant_id)
    }


class TestRoleSeeding:
    def test_new_restaurant_gets_four_roles(self, db_session):
        restaurant = RestaurantService(db_session).create_restaurant(
            RestaurantCreate(name="Casa Lola"), AuthUser(id="owner-1")
        )

        roles = db_session.query(StaffRole).filter(StaffRole.restaurant_id == restaurant.id).all()

        assert len(roles) == 4
        assert {r.name for r in roles} == DEFAULT_ROLE_NAMES
        rates = {r.name: r.hourly_rate for r in roles}
        assert rates["Manager"] == Decimal("25.00")
        assert rates["Waiter"] == Decimal("15.00")
        assert rates["Chef"] == Decimal("20.00")
        assert rates["Cashier"] == Decimal("14.00")

    def test_default_permissions(self, db_session):
        restaurant = RestaurantService(db_session).create_restaurant(
            RestaurantCreate(name="Casa Lola"), AuthUser(id="owner-1")
        )
        manager = (
            db_session.query(StaffRole)
            .filter(StaffRole.restaurant_id == restaurant.id, StaffRole.name == "Manager")
            .one()
        )
        cashier = (
            db_session.query(StaffRole)
            .filter(StaffRole.restaurant_id == restaurant.id, StaffRole.name == "Cashier")
            .one()
        )

        assert manager.has_permission("manage_staff")
        assert cashier.has_permission("handle_payments")
        assert not cashier.has_permission("manage_staff")

    def test_seeding_is_idempotent(self, db_session):
        restaurant = RestaurantFactory()

        first = seed_default_roles(db_session, restaurant.id)
        second = seed_default_roles(db_session, restaurant.id)
        db_session.commit()

        assert len(first) == 4
        assert second == []
        assert db_session.query(StaffRole).filter(StaffRole.restaurant_id == restaurant.id).count() == 4

    def test_existing_role_is_kept(self, db_session):
        restaurant = RestaurantFactory()
        StaffRoleFactory(restaurant_id=restaurant.id, name="Chef", hourly_rate=Decimal("30.00"))

        created = seed_default_roles(db_session, restaurant.id)
        db_session.commit()

        assert {r.name for r in created} == {"Manager", "Waiter", "Cashier"}
        chef = (
            db_session.query(StaffRole)
            .filter(StaffRole.restaurant_id == restaurant.id, StaffRole.name == "Chef")
            .one()
        )
        assert chef.hourly_rate == Decimal("30.00")

    def test_roles_are_per_restaurant(self, db_session):
        service = RestaurantService(db_session)
        owner = AuthUser(id="owner-1")
        first = service.create_restaurant(RestaurantCreate(name="One"), owner)
        second = service.create_restaurant(RestaurantCreate(name="Two"), owner)

        assert role_names(db_session, first.id) == DEFAULT_ROLE_NAMES
        assert role_names(db_session, second.id) == DEFAULT_ROLE_NAMES
        assert db_session.query(StaffRole).count() == 8

    def test_failed_seeding_rolls_back_restaurant(self, db_session):
        clear_event_handlers()

        def broken(db, event):
            raise RuntimeError("seeding failed")

        register_event_handler(RESTAURANT_CREATED, broken)

        with pytest.raises(RuntimeError):
            RestaurantService(db_session).create_restaurant(
                RestaurantCreate(name="Casa Lola"), AuthUser(id="owner-1")
            )

        assert db_session.query(Restaurant).count() == 0


class TestRoleSeedingApi:
    def test_create_restaurant_endpoint_seeds_roles(self, client, auth_headers):
        headers = auth_headers("owner-9")

        response = client.post("/api/v1/restaurants/", json={"name": "Casa Lola"}, headers=headers)
        assert response.status_code == 201
        restaurant = response.json()
        assert restaurant["owner_id"] == "owner-9"

        roles = client.get(f"/api/v1/restaurants/{restaurant['id']}/staff/roles", headers=headers)

        assert roles.status_code == 200
        assert {r["name"] for r in roles.json()} == DEFAULT_ROLE_NAMES

    def test_create_restaurant_requires_auth(self, client):
        response = client.post("/api/v1/restaurants/", json={"name": "Casa Lola"})
        assert response.status_code == 401

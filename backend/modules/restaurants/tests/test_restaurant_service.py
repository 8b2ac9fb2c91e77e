# backend/modules/restaurants/tests/test_restaurant_service.py

import pytest

from core.auth import AuthUser
from core.exceptions import ConflictError, NotFoundError, PermissionDeniedError
from modules.restaurants.models.restaurant_models import TableStatus
from modules.restaurants.schemas.restaurant_schemas import (
    RestaurantCreate, RestaurantUpdate, TableCreate, TableStatusUpdate,
)
from modules.restaurants.services.access_service import require_member, require_owner
from modules.restaurants.services.restaurant_service import RestaurantService
from tests.factories import RestaurantFactory, RestaurantTableFactory, StaffMemberFactory, StaffRoleFactory

OWNER = AuthUser(id="owner-1", email="owner@example.com")


@pytest.fixture
def service(db_session):
    return RestaurantService(db_session)


class TestRestaurantService:
    def test_create_and_list_owned(self, service):
        created = service.create_restaurant(RestaurantCreate(name="Casa Lola"), OWNER)
        service.create_restaurant(RestaurantCreate(name="Other"), AuthUser(id="owner-2"))

        owned = service.list_owned(OWNER)

        assert [r.id for r in owned] == [created.id]
        assert created.owner_id == "owner-1"
        assert created.is_active is True

    def test_update_restaurant(self, service):
        restaurant = RestaurantFactory()
        updated = service.update_restaurant(restaurant, RestaurantUpdate(name="Renamed"))
        assert updated.name == "Renamed"

    def test_table_numbers_unique_per_restaurant(self, service):
        restaurant = RestaurantFactory()
        service.add_table(restaurant.id, TableCreate(table_number="A1", capacity=2))

        with pytest.raises(ConflictError):
            service.add_table(restaurant.id, TableCreate(table_number="A1"))

        # Another restaurant may reuse the number
        service.add_table(RestaurantFactory().id, TableCreate(table_number="A1"))

    def test_update_table_status(self, service):
        table = RestaurantTableFactory()
        updated = service.update_table_status(
            table.restaurant_id, table.id, TableStatusUpdate(status=TableStatus.OCCUPIED)
        )
        assert updated.status == TableStatus.OCCUPIED

    def test_table_of_other_restaurant(self, service):
        table = RestaurantTableFactory()
        with pytest.raises(NotFoundError):
            service.update_table_status(
                RestaurantFactory().id, table.id, TableStatusUpdate(status=TableStatus.OCCUPIED)
            )


class TestAccessRules:
    def test_owner_has_full_access(self, db_session):
        restaurant = RestaurantFactory()
        assert require_owner(db_session, restaurant.id, OWNER).id == restaurant.id
        assert require_member(db_session, restaurant.id, OWNER).id == restaurant.id

    def test_active_staff_is_member_not_owner(self, db_session):
        restaurant = RestaurantFactory()
        StaffMemberFactory(role=StaffRoleFactory(restaurant_id=restaurant.id), user_id="waiter-1")
        waiter = AuthUser(id="waiter-1")

        assert require_member(db_session, restaurant.id, waiter).id == restaurant.id
        with pytest.raises(PermissionDeniedError):
            require_owner(db_session, restaurant.id, waiter)

    def test_inactive_staff_denied(self, db_session):
        restaurant = RestaurantFactory()
        StaffMemberFactory(
            role=StaffRoleFactory(restaurant_id=restaurant.id), user_id="former-1", is_active=False
        )
        with pytest.raises(PermissionDeniedError):
            require_member(db_session, restaurant.id, AuthUser(id="former-1"))

    def test_missing_restaurant(self, db_session):
        with pytest.raises(NotFoundError):
            require_member(db_session, 404, OWNER)


class TestRestaurantApi:
    def test_tables_flow(self, client, auth_headers):
        headers = auth_headers("owner-1")
        restaurant = client.post("/api/v1/restaurants/", json={"name": "Casa Lola"}, headers=headers).json()
        base = f"/api/v1/restaurants/{restaurant['id']}/tables"

        created = client.post(base, json={"table_number": "A1", "capacity": 2}, headers=headers)
        assert created.status_code == 201
        assert client.post(base, json={"table_number": "A1"}, headers=headers).status_code == 409

        listed = client.get(base, headers=headers)
        assert [t["table_number"] for t in listed.json()] == ["A1"]

    def test_outsider_cannot_read(self, client, auth_headers):
        restaurant = RestaurantFactory()
        response = client.get(f"/api/v1/restaurants/{restaurant.id}", headers=auth_headers("stranger"))
        assert response.status_code == 403

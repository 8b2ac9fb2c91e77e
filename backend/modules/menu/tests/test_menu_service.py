# backend/modules/menu/tests/test_menu_service.py

from decimal import Decimal

import pytest

from core.exceptions import ConflictError, NotFoundError, ValidationError
from modules.menu.models.menu_models import ModifierType
from modules.menu.schemas.menu_schemas import (
    MenuItemCreate, MenuItemUpdate, ModifierCreate, ModifierUpdate,
)
from modules.menu.services.menu_service import MenuService
from tests.factories import (
    MenuItemFactory, MenuItemModifierFactory, MenuModifierFactory, RestaurantFactory,
)


@pytest.fixture
def restaurant(db_session):
    return RestaurantFactory()


@pytest.fixture
def service(db_session, restaurant):
    return MenuService(db_session, restaurant.id)


class TestMenuService:
    def test_create_item(self, service, restaurant):
        item = service.create_item(
            MenuItemCreate(name="Tacos", category="Main Courses", price=Decimal("9.90"),
                           cost_price=Decimal("3.10"), dietary_tags=["gluten-free"])
        )

        assert item.restaurant_id == restaurant.id
        assert item.margin == Decimal("6.80")
        assert item.dietary_tags == ["gluten-free"]

    def test_list_filters(self, service, restaurant):
        MenuItemFactory(restaurant_id=restaurant.id, name="Flan", category="Desserts")
        MenuItemFactory(restaurant_id=restaurant.id, name="Churros", category="Desserts", is_available=False)
        MenuItemFactory(restaurant_id=restaurant.id, name="Lemonade", category="Beverages")
        MenuItemFactory(name="Elsewhere", category="Desserts")

        desserts = service.list_items(category="Desserts")
        assert [i.name for i in desserts] == ["Churros", "Flan"]
        assert [i.name for i in service.list_items(category="Desserts", available_only=True)] == ["Flan"]

    def test_update_availability(self, service, restaurant):
        item = MenuItemFactory(restaurant_id=restaurant.id)
        updated = service.update_item(item.id, MenuItemUpdate(is_available=False))
        assert updated.is_available is False

    def test_items_scoped_to_restaurant(self, service):
        other = MenuItemFactory()
        with pytest.raises(NotFoundError):
            service.get_item(other.id)

    def test_negative_price_rejected(self):
        with pytest.raises(ValueError):
            MenuItemCreate(name="Free lunch", price=Decimal("-1"))


class TestModifiers:
    def test_create_modifier(self, service, restaurant):
        modifier = service.create_modifier(
            ModifierCreate(name="Extra cheese", price_adjustment=Decimal("1.50"))
        )

        assert modifier.restaurant_id == restaurant.id
        assert modifier.modifier_type == ModifierType.ADDITION.value
        assert modifier.price_adjustment == Decimal("1.50")

    def test_duplicate_name_conflicts(self, service, restaurant):
        MenuModifierFactory(restaurant_id=restaurant.id, name="No onions")
        with pytest.raises(ConflictError):
            service.create_modifier(ModifierCreate(name="No onions"))

    def test_update_and_list_active(self, service, restaurant):
        cheese = MenuModifierFactory(restaurant_id=restaurant.id, name="Extra cheese")
        MenuModifierFactory(restaurant_id=restaurant.id, name="Bacon")
        MenuModifierFactory(name="Elsewhere")

        service.update_modifier(cheese.id, ModifierUpdate(is_active=False))

        assert [m.name for m in service.list_modifiers()] == ["Bacon", "Extra cheese"]
        assert [m.name for m in service.list_modifiers(active_only=True)] == ["Bacon"]

    def test_attach_is_idempotent(self, service, restaurant):
        item = MenuItemFactory(restaurant_id=restaurant.id)
        modifier = MenuModifierFactory(restaurant_id=restaurant.id)

        service.attach_modifier(item.id, modifier.id)
        link = service.attach_modifier(item.id, modifier.id, is_required=True)

        links = service.list_item_modifiers(item.id)
        assert [entry.id for entry in links] == [link.id]
        assert links[0].is_required is True

    def test_attach_respects_categories(self, service, restaurant):
        soda = MenuItemFactory(restaurant_id=restaurant.id, category="Beverages")
        cheese = MenuModifierFactory(
            restaurant_id=restaurant.id, applicable_categories=["Main Courses"]
        )
        with pytest.raises(ValidationError, match="does not apply"):
            service.attach_modifier(soda.id, cheese.id)

    def test_other_restaurants_modifier_not_found(self, service, restaurant):
        item = MenuItemFactory(restaurant_id=restaurant.id)
        with pytest.raises(NotFoundError):
            service.attach_modifier(item.id, MenuModifierFactory().id)

    def test_detach(self, service, restaurant):
        link = MenuItemModifierFactory(menu_item__restaurant_id=restaurant.id)
        item_id, modifier_id = link.menu_item_id, link.modifier_id

        service.detach_modifier(item_id, modifier_id)

        assert service.list_item_modifiers(item_id) == []
        with pytest.raises(NotFoundError):
            service.detach_modifier(item_id, modifier_id)

class TestMenuApi:
    def test_public_listing_hides_unavailable(self, client, restaurant):
        MenuItemFactory(restaurant_id=restaurant.id, name="Flan")
        MenuItemFactory(restaurant_id=restaurant.id, name="Churros", is_available=False)

        response = client.get(f"/api/v1/restaurants/{restaurant.id}/menu/items")

        assert response.status_code == 200
        assert [i["name"] for i in response.json()] == ["Flan"]

    def test_only_owner_edits_menu(self, client, auth_headers, restaurant):
        payload = {"name": "Tacos", "price": "9.90"}
        url = f"/api/v1/restaurants/{restaurant.id}/menu/items"

        assert client.post(url, json=payload, headers=auth_headers("someone-else")).status_code == 403

        created = client.post(url, json=payload, headers=auth_headers("owner-1"))
        assert created.status_code == 201
        assert created.json()["price"] == "9.90"

    def test_unknown_restaurant(self, client):
        assert client.get("/api/v1/restaurants/999/menu/items").status_code == 404

    def test_item_modifiers_listed_for_guests(self, client, auth_headers, restaurant):
        item = MenuItemFactory(restaurant_id=restaurant.id)
        headers = auth_headers("owner-1")
        base = f"/api/v1/restaurants/{restaurant.id}/menu"

        created = client.post(
            f"{base}/modifiers", json={"name": "Extra cheese", "price_adjustment": "1.50"},
            headers=headers,
        )
        assert created.status_code == 201
        modifier_id = created.json()["id"]

        attached = client.put(
            f"{base}/items/{item.id}/modifiers",
            json={"modifier_id": modifier_id, "is_required": False},
            headers=headers,
        )
        assert attached.status_code == 200

        listed = client.get(f"{base}/items/{item.id}/modifiers")
        assert listed.status_code == 200
        assert [m["modifier"]["name"] for m in listed.json()] == ["Extra cheese"]
        assert listed.json()[0]["modifier"]["price_adjustment"] == "1.50"

    def test_only_owner_manages_modifiers(self, client, auth_headers, restaurant):
        response = client.post(
            f"/api/v1/restaurants/{restaurant.id}/menu/modifiers",
            json={"name": "Extra cheese"},
            headers=auth_headers("someone-else"),
        )
        assert response.status_code == 403

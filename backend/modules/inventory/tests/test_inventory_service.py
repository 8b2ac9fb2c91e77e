# backend/modules/inventory/tests/test_inventory_service.py

from decimal import Decimal

import pytest

from core.exceptions import NotFoundError, ValidationError
from modules.inventory.models.inventory_models import TransactionType
from modules.inventory.schemas.inventory_schemas import (
    IngredientLink, InventoryItemCreate, InventoryTransactionCreate, SupplierCreate,
)
from modules.inventory.services.inventory_service import InventoryService
from tests.factories import InventoryFactory, MenuItemFactory, RestaurantFactory


@pytest.fixture
def restaurant(db_session):
    return RestaurantFactory()


@pytest.fixture
def service(db_session, restaurant):
    return InventoryService(db_session, restaurant.id)


@pytest.fixture
def tomatoes(restaurant):
    return InventoryFactory(restaurant_id=restaurant.id, name="Tomatoes")


def movement(kind, quantity, **kwargs):
    return InventoryTransactionCreate(transaction_type=kind, quantity=Decimal(quantity), **kwargs)


class TestStockMovements:
    def test_purchase_adds_stock_and_updates_cost(self, service, tomatoes, db_session):
        txn = service.record_transaction(
            tomatoes.id, movement(TransactionType.PURCHASE, "5", unit_cost=Decimal("4.00")), user_id="owner-1"
        )

        db_session.refresh(tomatoes)
        assert tomatoes.current_stock == Decimal("15.000")
        assert tomatoes.unit_cost == Decimal("4.00")
        assert txn.stock_after == Decimal("15.000")
        assert txn.total_cost == Decimal("20.00")
        assert txn.created_by == "owner-1"

    def test_usage_and_waste_subtract(self, service, tomatoes, db_session):
        service.record_transaction(tomatoes.id, movement(TransactionType.USAGE, "3"))
        service.record_transaction(tomatoes.id, movement(TransactionType.WASTE, "1.5"))

        db_session.refresh(tomatoes)
        assert tomatoes.current_stock == Decimal("5.500")
        assert len(service.list_transactions(tomatoes.id)) == 2

    def test_negative_adjustment(self, service, tomatoes, db_session):
        service.record_transaction(tomatoes.id, movement(TransactionType.ADJUSTMENT, "-2"))
        db_session.refresh(tomatoes)
        assert tomatoes.current_stock == Decimal("8.000")

    def test_stock_never_negative(self, service, tomatoes, db_session):
        with pytest.raises(ValidationError, match="Insufficient stock"):
            service.record_transaction(tomatoes.id, movement(TransactionType.USAGE, "11"))

        db_session.refresh(tomatoes)
        assert tomatoes.current_stock == Decimal("10.000")

    def test_quantity_sign_rules(self):
        with pytest.raises(ValueError):
            movement(TransactionType.USAGE, "-1")
        with pytest.raises(ValueError):
            movement(TransactionType.ADJUSTMENT, "0")

    def test_low_stock_flag(self, service, tomatoes, db_session):
        assert tomatoes.is_low_stock is False
        service.record_transaction(tomatoes.id, movement(TransactionType.USAGE, "8"))
        db_session.refresh(tomatoes)
        assert tomatoes.is_low_stock is True


class TestItemsAndSuppliers:
    def test_supplier_must_belong_to_restaurant(self, service, db_session):
        other = InventoryService(db_session, RestaurantFactory().id).create_supplier(
            SupplierCreate(name="Elsewhere Farms")
        )
        with pytest.raises(ValidationError):
            service.create_item(InventoryItemCreate(name="Basil", supplier_id=other.id))

    def test_create_item_with_supplier(self, service):
        supplier = service.create_supplier(SupplierCreate(name="Green Farms"))
        item = service.create_item(
            InventoryItemCreate(name="Basil", supplier_id=supplier.id, current_stock=Decimal("1"))
        )
        assert item.supplier_id == supplier.id
        assert [s.name for s in service.list_suppliers()] == ["Green Farms"]

    def test_items_scoped_to_restaurant(self, service):
        other = InventoryFactory()
        with pytest.raises(NotFoundError):
            service.get_item(other.id)

    def test_link_ingredient(self, service, restaurant, tomatoes):
        dish = MenuItemFactory(restaurant_id=restaurant.id)

        service.link_ingredient(
            dish.id, IngredientLink(inventory_item_id=tomatoes.id, quantity_required=Decimal("0.2"), unit="kg")
        )

        ingredients = service.list_ingredients(dish.id)
        assert len(ingredients) == 1
        assert ingredients[0].inventory_item_id == tomatoes.id

    def test_link_foreign_menu_item(self, service, tomatoes):
        with pytest.raises(NotFoundError):
            service.link_ingredient(
                MenuItemFactory().id,
                IngredientLink(inventory_item_id=tomatoes.id, quantity_required=Decimal("1"), unit="kg"),
            )


class TestInventoryApi:
    def test_staff_records_usage(self, client, auth_headers, restaurant, tomatoes):
        response = client.post(
            f"/api/v1/restaurants/{restaurant.id}/inventory/items/{tomatoes.id}/transactions",
            json={"transaction_type": "usage", "quantity": "2"},
            headers=auth_headers("owner-1"),
        )
        assert response.status_code == 201
        assert Decimal(response.json()["stock_after"]) == Decimal("8")

    def test_outsider_denied(self, client, auth_headers, restaurant):
        response = client.get(
            f"/api/v1/restaurants/{restaurant.id}/inventory/items", headers=auth_headers("stranger")
        )
        assert response.status_code == 403

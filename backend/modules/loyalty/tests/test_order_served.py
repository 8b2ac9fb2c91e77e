# backend/modules/loyalty/tests/test_order_served.py

"""
Loyalty bookkeeping when orders are served
"""

from decimal import Decimal

import pytest
from sqlalchemy import update

from core.events import register_event_handler
from core.exceptions import ConflictError
from modules.customers.models.customer_models import CustomerProfile
from modules.loyalty.models.loyalty_models import LoyaltyPointsTransaction
from modules.loyalty.services.order_served_handler import on_order_served
from modules.orders.enums.order_enums import OrderStatus
from modules.orders.events.order_events import ORDER_SERVED, OrderServedEvent
from modules.orders.models.order_models import Order
from modules.orders.schemas.order_schemas import OrderCreate, OrderItemCreate, OrderStatusUpdate
from modules.orders.services.order_service import OrderService
from tests.factories import CustomerProfileFactory, MenuItemFactory, RestaurantFactory


@pytest.fixture
def restaurant(db_session):
    return RestaurantFactory()


@pytest.fixture
def menu_item(restaurant):
    return MenuItemFactory(restaurant_id=restaurant.id, price=Decimal("20.00"))


@pytest.fixture
def profile(db_session):
    return CustomerProfileFactory(loyalty_points=500, total_spent=Decimal("10.00"), total_visits=2)


@pytest.fixture
def order_service(db_session, restaurant):
    return OrderService(db_session, restaurant.id)


def place_order(order_service, menu_item, profile=None, quantity=3, points_used=0):
    return order_service.create_order(
        OrderCreate(
            items=[OrderItemCreate(menu_item_id=menu_item.id, quantity=quantity)],
            customer_profile_id=profile.id if profile else None,
            loyalty_points_used=points_used,
        )
    )


def serve(order_service, order):
    return order_service.update_status(order.id, OrderStatusUpdate(status=OrderStatus.SERVED))


class TestOrderServedBookkeeping:
    """Serving an order credits the customer exactly once"""

    def test_serving_credits_profile(self, db_session, order_service, menu_item, profile):
        # 3 x 20.00 = 60.00, minus 200 points at 0.01 = 58.00; earns 58 points
        order = place_order(order_service, menu_item, profile, points_used=200)
        assert order.total_amount == Decimal("58.00")
        assert order.loyalty_points_earned == 58
        assert order.loyalty_points_used == 200

        served = serve(order_service, order)

        assert served.status == OrderStatus.SERVED.value
        assert served.served_at is not None
        db_session.refresh(profile)
        assert profile.loyalty_points == 500 + 58 - 200
        assert profile.total_spent == Decimal("68.00")
        assert profile.total_visits == 3

    def test_creating_order_does_not_touch_profile(self, db_session, order_service, menu_item, profile):
        place_order(order_service, menu_item, profile, points_used=200)

        db_session.refresh(profile)
        assert profile.loyalty_points == 500
        assert profile.total_visits == 2

    def test_second_save_at_served_is_noop(self, db_session, order_service, menu_item, profile):
        order = place_order(order_service, menu_item, profile)
        serve(order_service, order)
        serve(order_service, order)

        db_session.refresh(profile)
        assert profile.loyalty_points == 500 + 60
        assert profile.total_visits == 3
        assert db_session.query(LoyaltyPointsTransaction).count() == 1

    def test_intermediate_statuses_do_not_credit(self, db_session, order_service, menu_item, profile):
        order = place_order(order_service, menu_item, profile)
        for status in (OrderStatus.CONFIRMED, OrderStatus.PREPARING, OrderStatus.READY):
            order_service.update_status(order.id, OrderStatusUpdate(status=status))

        db_session.refresh(profile)
        assert profile.total_visits == 2

        serve(order_service, order)
        db_session.refresh(profile)
        assert profile.total_visits == 3

    def test_stale_status_write_is_rejected(self, db_session, order_service, menu_item, profile):
        order = place_order(order_service, menu_item, profile)
        # Another request served the order after this session loaded it
        db_session.execute(
            update(Order)
            .where(Order.id == order.id)
            .values(status=OrderStatus.SERVED.value)
            .execution_options(synchronize_session=False)
        )
        assert order.status == OrderStatus.PENDING.value

        with pytest.raises(ConflictError):
            serve(order_service, order)

        db_session.refresh(profile)
        assert profile.total_visits == 2
        assert db_session.query(LoyaltyPointsTransaction).count() == 0

    def test_served_order_cannot_change_status(self, order_service, menu_item, profile):
        order = place_order(order_service, menu_item, profile)
        serve(order_service, order)

        with pytest.raises(ConflictError):
            order_service.update_status(order.id, OrderStatusUpdate(status=OrderStatus.CANCELLED))

    def test_order_without_profile(self, db_session, order_service, menu_item):
        order = place_order(order_service, menu_item)
        assert order.loyalty_points_earned == 0

        serve(order_service, order)

        assert db_session.query(LoyaltyPointsTransaction).count() == 0

    def test_audit_transaction_recorded(self, db_session, order_service, menu_item, profile, restaurant):
        order = place_order(order_service, menu_item, profile, points_used=100)
        serve(order_service, order)

        entry = db_session.query(LoyaltyPointsTransaction).one()
        assert entry.order_id == order.id
        assert entry.restaurant_id == restaurant.id
        assert entry.points_earned == 59
        assert entry.points_used == 100
        assert entry.points_change == -41
        assert entry.points_balance_after == 459

    def test_failing_handler_rolls_back_status(self, db_session, order_service, menu_item, profile):
        def broken_handler(db, event):
            raise RuntimeError("handler failed")

        register_event_handler(ORDER_SERVED, broken_handler)
        order = place_order(order_service, menu_item, profile)

        with pytest.raises(RuntimeError):
            serve(order_service, order)

        db_session.refresh(order)
        db_session.refresh(profile)
        assert order.status == OrderStatus.PENDING.value
        assert profile.total_visits == 2


class TestOnOrderServedHandler:
    def make_event(self, restaurant, profile_id, total="15.00", earned=15, used=0):
        return OrderServedEvent(
            order_id=None,
            restaurant_id=restaurant.id,
            customer_profile_id=profile_id,
            total_amount=Decimal(total),
            loyalty_points_earned=earned,
            loyalty_points_used=used,
        )

    def test_missing_profile_is_noop(self, db_session, restaurant):
        on_order_served(db_session, self.make_event(restaurant, 9999))
        assert db_session.query(LoyaltyPointsTransaction).count() == 0

    def test_no_profile_is_noop(self, db_session, restaurant):
        on_order_served(db_session, self.make_event(restaurant, None))
        assert db_session.query(LoyaltyPointsTransaction).count() == 0

    def test_increments_counters(self, db_session, restaurant, profile):
        on_order_served(db_session, self.make_event(restaurant, profile.id, earned=15, used=5))
        db_session.commit()

        refreshed = db_session.get(CustomerProfile, profile.id)
        db_session.refresh(refreshed)
        assert refreshed.loyalty_points == 510
        assert refreshed.total_spent == Decimal("25.00")
        assert refreshed.total_visits == 3

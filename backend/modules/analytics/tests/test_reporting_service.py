# backend/modules/analytics/tests/test_reporting_service.py

"""
Reporting queries over orders, inventory and customer profiles.

Orders are inserted with explicit timestamps and every report is run with a
pinned ``today`` so the windows are deterministic.
"""

from datetime import date, datetime
from decimal import Decimal

import pytest

from core.exceptions import NotFoundError
from modules.analytics.models.analytics_models import DailySalesSummary
from modules.analytics.services.reporting_service import ReportingService
from modules.customers.models.customer_models import LoyaltyTier
from modules.orders.enums.order_enums import OrderStatus
from modules.staff.enums.staff_enums import ShiftStatus
from tests.factories import (
    CustomerProfileFactory, InventoryFactory, MenuItemFactory, OrderFactory, OrderItemFactory,
    ProfileFactory, RestaurantFactory, StaffMemberFactory, StaffRoleFactory, StaffShiftFactory,
)

TODAY = date(2024, 6, 14)


@pytest.fixture
def restaurant(db_session):
    return RestaurantFactory(name="Casa Lola")


@pytest.fixture
def service(db_session, restaurant):
    return ReportingService(db_session, restaurant.id)


@pytest.fixture
def menu(restaurant):
    return {
        "burger": MenuItemFactory(restaurant_id=restaurant.id, name="Burger", price=Decimal("12.50")),
        "soda": MenuItemFactory(restaurant_id=restaurant.id, name="Soda", price=Decimal("2.25")),
    }


def add_order(restaurant, created_at, lines, status=OrderStatus.SERVED, **kwargs):
    subtotal = sum(item.price * quantity for item, quantity in lines)
    order = OrderFactory(
        restaurant_id=restaurant.id,
        status=status.value,
        subtotal=subtotal,
        created_at=created_at,
        **kwargs,
    )
    for item, quantity in lines:
        OrderItemFactory(order=order, menu_item_id=item.id, quantity=quantity, unit_price=item.price)
    return order


@pytest.fixture
def sales(restaurant, menu):
    burger, soda = menu["burger"], menu["soda"]
    return [
        add_order(restaurant, datetime(2024, 6, 10, 12, 0), [(burger, 2), (soda, 1)],
                  status=OrderStatus.PENDING),
        add_order(restaurant, datetime(2024, 6, 12, 13, 0), [(burger, 1)]),
        add_order(restaurant, datetime(2024, 6, 12, 20, 0), [(soda, 5)], status=OrderStatus.CANCELLED),
        add_order(restaurant, datetime(2024, 4, 1, 19, 0), [(soda, 1)]),
    ]


class TestPopularItems:
    def test_ranked_by_times_ordered(self, service, menu, sales):
        items = service.popular_items(today=TODAY)

        assert [i.name for i in items] == ["Burger", "Soda"]
        burger = items[0]
        assert burger.times_ordered == 2
        assert burger.total_quantity == 3
        assert burger.total_revenue == Decimal("37.50")
        assert burger.average_price == Decimal("12.50")

    def test_cancelled_and_old_orders_excluded(self, service, menu, sales):
        soda = {i.name: i for i in service.popular_items(today=TODAY)}["Soda"]

        assert soda.times_ordered == 1
        assert soda.total_quantity == 1
        assert soda.total_revenue == Decimal("2.25")

    def test_other_restaurants_ignored(self, service, sales):
        other = RestaurantFactory()
        dish = MenuItemFactory(restaurant_id=other.id, name="Paella")
        add_order(other, datetime(2024, 6, 13, 12, 0), [(dish, 10)])

        assert "Paella" not in {i.name for i in service.popular_items(today=TODAY)}


class TestRevenueTrends:
    def test_daily_points_newest_first(self, service, sales):
        points = service.revenue_trends(today=TODAY)

        assert [p.order_date for p in points] == [date(2024, 6, 12), date(2024, 6, 10), date(2024, 4, 1)]
        assert points[0].total_orders == 1
        assert points[0].daily_revenue == Decimal("12.50")
        assert points[1].daily_revenue == Decimal("27.25")

    def test_window_is_ninety_days(self, service, sales):
        points = service.revenue_trends(today=date(2024, 8, 1))
        assert date(2024, 4, 1) not in {p.order_date for p in points}


class TestDailySummary:
    def test_refresh_computes_totals(self, service, menu, sales):
        summary = service.refresh_daily_summary(date(2024, 6, 12))

        assert summary.total_orders == 1
        assert summary.total_revenue == Decimal("12.50")
        assert summary.average_order_value == Decimal("12.50")
        assert summary.most_popular_item_id == menu["burger"].id

    def test_refresh_replaces_existing_row(self, db_session, service, sales):
        service.refresh_daily_summary(date(2024, 6, 12))
        service.refresh_daily_summary(date(2024, 6, 12))
        service.refresh_daily_summary(date(2024, 6, 10))

        assert db_session.query(DailySalesSummary).count() == 2
        assert [s.date for s in service.list_daily_summaries()] == [date(2024, 6, 12), date(2024, 6, 10)]

    def test_empty_day(self, service):
        summary = service.refresh_daily_summary(date(2024, 1, 1))

        assert summary.total_orders == 0
        assert summary.total_revenue == Decimal("0.00")
        assert summary.most_popular_item_id is None


class TestLowStock:
    def test_largest_shortage_first(self, service, restaurant):
        InventoryFactory(restaurant_id=restaurant.id, name="Tomatoes",
                         current_stock=Decimal("1"), minimum_stock=Decimal("2"))
        InventoryFactory(restaurant_id=restaurant.id, name="Flour",
                         current_stock=Decimal("0"), minimum_stock=Decimal("5"))
        InventoryFactory(restaurant_id=restaurant.id, name="Milk",
                         current_stock=Decimal("10"), minimum_stock=Decimal("2"))
        InventoryFactory(restaurant_id=restaurant.id, name="Saffron", is_active=False,
                         current_stock=Decimal("0"), minimum_stock=Decimal("1"))

        items = service.low_stock()

        assert [i.name for i in items] == ["Flour", "Tomatoes"]
        assert items[0].shortage_amount == Decimal("5")


class TestCustomerLoyalty:
    def test_customers_with_orders_here(self, service, restaurant):
        regular = CustomerProfileFactory(name="Regular", total_visits=12, favorite_restaurant_id=restaurant.id)
        newcomer = CustomerProfileFactory(name="Newcomer", total_visits=1)
        stranger = CustomerProfileFactory(name="Stranger", total_visits=60)
        OrderFactory(restaurant_id=restaurant.id, customer_profile_id=regular.id)
        OrderFactory(restaurant_id=restaurant.id, customer_profile_id=regular.id)
        OrderFactory(restaurant_id=restaurant.id, customer_profile_id=newcomer.id)
        OrderFactory(customer_profile_id=stranger.id)

        entries = service.customer_loyalty()

        assert [e.name for e in entries] == ["Regular", "Newcomer"]
        assert entries[0].loyalty_tier == LoyaltyTier.SILVER
        assert entries[0].favorite_restaurant == "Casa Lola"
        assert entries[1].loyalty_tier == LoyaltyTier.BRONZE
        assert entries[1].favorite_restaurant is None


class TestMenuItemAnalytics:
    def test_refresh_stores_per_item_rows(self, service, menu, sales):
        service.refresh_daily_summary(date(2024, 6, 12))

        rows = service.menu_item_daily(menu["burger"].id)
        assert [(r.date, r.times_ordered, r.total_quantity) for r in rows] == [(date(2024, 6, 12), 1, 1)]
        assert rows[0].total_revenue == Decimal("12.50")
        assert rows[0].average_rating is None
        assert service.menu_item_daily(menu["soda"].id) == []

    def test_average_rating_of_orders_with_item(self, service, restaurant, menu):
        burger = menu["burger"]
        add_order(restaurant, datetime(2024, 6, 13, 12, 0), [(burger, 1)], customer_rating=4)
        add_order(restaurant, datetime(2024, 6, 13, 19, 0), [(burger, 2)], customer_rating=5)

        service.refresh_daily_summary(date(2024, 6, 13))

        row = service.menu_item_daily(burger.id)[0]
        assert row.times_ordered == 2
        assert row.total_quantity == 3
        assert row.average_rating == Decimal("4.50")

    def test_rows_without_sales_are_dropped(self, db_session, service, menu, sales):
        service.refresh_daily_summary(date(2024, 6, 12))
        sales[1].status = OrderStatus.CANCELLED.value
        db_session.commit()

        service.refresh_daily_summary(date(2024, 6, 12))

        assert service.menu_item_daily(menu["burger"].id) == []

    def test_other_restaurants_item(self, service):
        with pytest.raises(NotFoundError):
            service.menu_item_daily(MenuItemFactory().id)


class TestStaffPerformance:
    @pytest.fixture
    def team(self, restaurant):
        waiters = StaffRoleFactory(restaurant_id=restaurant.id, name="Waiter")
        chefs = StaffRoleFactory(restaurant_id=restaurant.id, name="Chef")
        ProfileFactory(user_id="waiter-1", full_name="Ana Ruiz")
        return {
            "waiter": StaffMemberFactory(role=waiters, user_id="waiter-1"),
            "chef": StaffMemberFactory(role=chefs, user_id="chef-1"),
            "former": StaffMemberFactory(role=waiters, user_id="former-1", is_active=False),
        }

    def test_orders_ratings_and_hours(self, service, restaurant, team):
        waiter, chef = team["waiter"], team["chef"]
        served = OrderStatus.SERVED.value
        OrderFactory(restaurant_id=restaurant.id, status=served, assigned_staff_id=waiter.id,
                     served_by_staff_id=waiter.id, customer_rating=5)
        OrderFactory(restaurant_id=restaurant.id, status=served, assigned_staff_id=waiter.id,
                     customer_rating=4)
        OrderFactory(restaurant_id=restaurant.id, status=served, served_by_staff_id=chef.id)
        OrderFactory(restaurant_id=restaurant.id, status=OrderStatus.CANCELLED.value,
                     assigned_staff_id=waiter.id, customer_rating=1)

        StaffShiftFactory(staff_member=waiter, status=ShiftStatus.COMPLETED, break_duration=30,
                          actual_start_time=datetime(2024, 6, 14, 9, 0),
                          actual_end_time=datetime(2024, 6, 14, 17, 0))
        StaffShiftFactory(staff_member=waiter, status=ShiftStatus.COMPLETED,
                          actual_start_time=datetime(2024, 6, 14, 18, 0),
                          actual_end_time=datetime(2024, 6, 14, 20, 15))
        StaffShiftFactory(staff_member=waiter, status=ShiftStatus.IN_PROGRESS,
                          actual_start_time=datetime(2024, 6, 15, 9, 0))

        entries = service.staff_performance()

        assert [e.staff_id for e in entries] == [waiter.id, chef.id]
        first, second = entries
        assert (first.staff_name, first.role_name) == ("Ana Ruiz", "Waiter")
        assert first.orders_handled == 2
        assert first.average_rating == Decimal("4.50")
        assert first.total_hours_worked == Decimal("9.75")
        assert (second.staff_name, second.role_name) == (None, "Chef")
        assert second.orders_handled == 1
        assert second.average_rating is None
        assert second.total_hours_worked == Decimal("0.00")

    def test_order_handled_by_two_members_counts_for_both(self, service, restaurant, team):
        waiter, chef = team["waiter"], team["chef"]
        OrderFactory(restaurant_id=restaurant.id, assigned_staff_id=chef.id,
                     served_by_staff_id=waiter.id)

        handled = {e.staff_id: e.orders_handled for e in service.staff_performance()}

        assert handled == {waiter.id: 1, chef.id: 1}

    def test_no_staff(self, service):
        assert service.staff_performance() == []


class TestAnalyticsApi:
    def test_revenue_trends_owner_only(self, client, auth_headers, restaurant):
        url = f"/api/v1/restaurants/{restaurant.id}/analytics/revenue-trends"

        assert client.get(url, headers=auth_headers("owner-1")).status_code == 200
        assert client.get(url, headers=auth_headers("stranger")).status_code == 403
        assert client.get(url).status_code == 401

    def test_refresh_daily_sales(self, client, auth_headers, restaurant, sales):
        response = client.post(
            f"/api/v1/restaurants/{restaurant.id}/analytics/daily-sales/refresh",
            params={"day": "2024-06-12"},
            headers=auth_headers("owner-1"),
        )

        assert response.status_code == 200
        assert response.json()["total_orders"] == 1

    def test_staff_performance_owner_only(self, client, auth_headers, restaurant):
        url = f"/api/v1/restaurants/{restaurant.id}/analytics/staff-performance"

        assert client.get(url, headers=auth_headers("stranger")).status_code == 403
        response = client.get(url, headers=auth_headers("owner-1"))
        assert response.status_code == 200
        assert response.json() == []

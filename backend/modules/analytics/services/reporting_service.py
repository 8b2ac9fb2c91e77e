# backend/modules/analytics/services/reporting_service.py

"""
Restaurant reporting queries.

Cancelled orders are excluded from every sales figure. Windows are measured
in whole days back from ``today`` (which callers may pin for reproducible
reports).
"""

import logging
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import desc, func, or_, select
from sqlalchemy.orm import Session

from core.exceptions import NotFoundError
from modules.auth.models.profile_models import Profile
from modules.customers.models.customer_models import CustomerProfile, tier_for_visits
from modules.inventory.models.inventory_models import InventoryItem
from modules.menu.models.menu_models import MenuItem
from modules.orders.enums.order_enums import OrderStatus
from modules.orders.models.order_models import Order, OrderItem
from modules.restaurants.models.restaurant_models import Restaurant
from modules.staff.enums.staff_enums import ShiftStatus
from modules.staff.models.staff_models import RestaurantStaff, StaffRole, StaffShift
from ..models.analytics_models import DailySalesSummary, MenuItemAnalytics
from ..schemas.analytics_schemas import (
    CustomerLoyaltyEntry, LowStockItem, PopularItem, RevenueTrendPoint, StaffPerformanceEntry,
)

logger = logging.getLogger(__name__)

POPULAR_ITEMS_WINDOW_DAYS = 30
REVENUE_TREND_WINDOW_DAYS = 90

CENTS = Decimal("0.01")


def _money(value) -> Decimal:
    return Decimal(str(value or 0)).quantize(CENTS)


def _as_date(value) -> date:
    # SQLite returns DATE() results as ISO strings
    if isinstance(value, str):
        return date.fromisoformat(value)
    if isinstance(value, datetime):
        return value.date()
    return value


def _rating(value) -> Optional[Decimal]:
    if value is None:
        return None
    return Decimal(str(value)).quantize(CENTS)


def _day_bounds(day: date):
    start = datetime.combine(day, time.min)
    return start, start + timedelta(days=1)


class ReportingService:
    def __init__(self, db: Session, restaurant_id: int):
        self.db = db
        self.restaurant_id = restaurant_id

    def _billable_orders(self):
        return self.db.query(Order).filter(
            Order.restaurant_id == self.restaurant_id,
            Order.status != OrderStatus.CANCELLED.value,
        )

    def popular_items(self, today: Optional[date] = None, limit: int = 20) -> List[PopularItem]:
        """Menu items ordered in the last 30 days, most frequently ordered first"""
        today = today or date.today()
        since = datetime.combine(today - timedelta(days=POPULAR_ITEMS_WINDOW_DAYS), time.min)

        times_ordered = func.count(OrderItem.id).label("times_ordered")
        rows = (
            self.db.query(
                MenuItem.id,
                MenuItem.name,
                times_ordered,
                func.sum(OrderItem.quantity).label("total_quantity"),
                func.sum(OrderItem.total_price).label("total_revenue"),
                func.avg(OrderItem.unit_price).label("average_price"),
            )
            .join(OrderItem, OrderItem.menu_item_id == MenuItem.id)
            .join(Order, OrderItem.order_id == Order.id)
            .filter(
                MenuItem.restaurant_id == self.restaurant_id,
                Order.created_at >= since,
                Order.status != OrderStatus.CANCELLED.value,
            )
            .group_by(MenuItem.id, MenuItem.name)
            .order_by(desc(times_ordered), MenuItem.name)
            .limit(limit)
            .all()
        )
        return [
            PopularItem(
                menu_item_id=row.id,
                name=row.name,
                times_ordered=row.times_ordered,
                total_quantity=row.total_quantity or 0,
                total_revenue=_money(row.total_revenue),
                average_price=_money(row.average_price),
            )
            for row in rows
        ]

    def revenue_trends(self, today: Optional[date] = None) -> List[RevenueTrendPoint]:
        """Daily order count and revenue over the last 90 days, newest first"""
        today = today or date.today()
        since = datetime.combine(today - timedelta(days=REVENUE_TREND_WINDOW_DAYS), time.min)

        order_date = func.date(Order.created_at).label("order_date")
        rows = (
            self.db.query(
                order_date,
                func.count(Order.id).label("total_orders"),
                func.sum(Order.total_amount).label("daily_revenue"),
                func.avg(Order.total_amount).label("average_order_value"),
            )
            .filter(
                Order.restaurant_id == self.restaurant_id,
                Order.created_at >= since,
                Order.status != OrderStatus.CANCELLED.value,
            )
            .group_by(order_date)
            .order_by(desc(order_date))
            .all()
        )
        return [
            RevenueTrendPoint(
                order_date=_as_date(row.order_date),
                total_orders=row.total_orders,
                daily_revenue=_money(row.daily_revenue),
                average_order_value=_money(row.average_order_value),
            )
            for row in rows
        ]

    def low_stock(self) -> List[LowStockItem]:
        """Active inventory at or below its minimum, largest shortage first"""
        shortage = (InventoryItem.minimum_stock - InventoryItem.current_stock).label("shortage_amount")
        rows = (
            self.db.query(InventoryItem, shortage)
            .filter(
                InventoryItem.restaurant_id == self.restaurant_id,
                InventoryItem.is_active.is_(True),
                InventoryItem.current_stock <= InventoryItem.minimum_stock,
            )
            .order_by(desc(shortage), InventoryItem.name)
            .all()
        )
        return [
            LowStockItem(
                id=item.id,
                name=item.name,
                current_stock=item.current_stock,
                minimum_stock=item.minimum_stock,
                unit=item.unit,
                category=item.category,
                shortage_amount=Decimal(str(short or 0)),
            )
            for item, short in rows
        ]

    def customer_loyalty(self) -> List[CustomerLoyaltyEntry]:
        """Customers who have ordered here, with their loyalty tier"""
        customer_ids = (
            select(Order.customer_profile_id)
            .where(
                Order.restaurant_id == self.restaurant_id,
                Order.customer_profile_id.isnot(None),
            )
            .distinct()
        )
        rows = (
            self.db.query(CustomerProfile, Restaurant.name)
            .outerjoin(Restaurant, CustomerProfile.favorite_restaurant_id == Restaurant.id)
            .filter(CustomerProfile.id.in_(customer_ids))
            .order_by(desc(CustomerProfile.total_visits), CustomerProfile.id)
            .all()
        )
        return [
            CustomerLoyaltyEntry(
                id=profile.id,
                name=profile.name,
                phone=profile.phone,
                email=profile.email,
                total_visits=profile.total_visits,
                total_spent=_money(profile.total_spent),
                loyalty_points=profile.loyalty_points,
                favorite_restaurant=favorite,
                loyalty_tier=tier_for_visits(profile.total_visits),
            )
            for profile, favorite in rows
        ]

    def staff_performance(self) -> List[StaffPerformanceEntry]:
        """
        Active staff with the orders they handled, the average customer rating
        of those orders and the hours worked on completed shifts.

        An order counts once for each member it was assigned to or served by.
        Hours are clocked time less breaks.
        """
        members = (
            self.db.query(RestaurantStaff, StaffRole.name, Profile.full_name)
            .join(StaffRole, RestaurantStaff.role_id == StaffRole.id)
            .outerjoin(Profile, Profile.user_id == RestaurantStaff.user_id)
            .filter(
                RestaurantStaff.restaurant_id == self.restaurant_id,
                RestaurantStaff.is_active.is_(True),
            )
            .order_by(RestaurantStaff.id)
            .all()
        )
        staff_ids = [member.id for member, _, _ in members]
        if not staff_ids:
            return []

        order_stats = {
            row.staff_id: row
            for row in self.db.query(
                RestaurantStaff.id.label("staff_id"),
                func.count(Order.id).label("orders_handled"),
                func.avg(Order.customer_rating).label("average_rating"),
            )
            .join(
                Order,
                or_(
                    Order.assigned_staff_id == RestaurantStaff.id,
                    Order.served_by_staff_id == RestaurantStaff.id,
                ),
            )
            .filter(
                RestaurantStaff.id.in_(staff_ids),
                Order.restaurant_id == self.restaurant_id,
                Order.status != OrderStatus.CANCELLED.value,
            )
            .group_by(RestaurantStaff.id)
            .all()
        }

        worked = {}
        completed = self.db.query(StaffShift).filter(
            StaffShift.staff_id.in_(staff_ids),
            StaffShift.status == ShiftStatus.COMPLETED,
        )
        for shift in completed:
            worked[shift.staff_id] = worked.get(shift.staff_id, 0) + (shift.worked_minutes or 0)

        entries = []
        for member, role_name, full_name in members:
            stats = order_stats.get(member.id)
            entries.append(
                StaffPerformanceEntry(
                    staff_id=member.id,
                    staff_name=full_name,
                    role_name=role_name,
                    orders_handled=stats.orders_handled if stats else 0,
                    average_rating=_rating(stats.average_rating) if stats else None,
                    total_hours_worked=(Decimal(worked.get(member.id, 0)) / 60).quantize(CENTS),
                )
            )
        return entries

    def refresh_daily_summary(self, day: Optional[date] = None) -> DailySalesSummary:
        """
        Recompute the sales summary for ``day`` (default today) and store it,
        replacing any existing row for the same restaurant and date. The
        per-item rows for that day are rebuilt in the same transaction.
        """
        day = day or date.today()
        start, end = _day_bounds(day)

        totals = (
            self._billable_orders()
            .filter(Order.created_at >= start, Order.created_at < end)
            .with_entities(
                func.count(Order.id),
                func.coalesce(func.sum(Order.total_amount), 0),
                func.coalesce(func.avg(Order.total_amount), 0),
            )
            .one()
        )
        total_orders, total_revenue, average_value = totals

        quantity = func.sum(OrderItem.quantity)
        most_popular = (
            self.db.query(OrderItem.menu_item_id)
            .join(Order, OrderItem.order_id == Order.id)
            .filter(
                Order.restaurant_id == self.restaurant_id,
                Order.status != OrderStatus.CANCELLED.value,
                Order.created_at >= start,
                Order.created_at < end,
            )
            .group_by(OrderItem.menu_item_id)
            .order_by(desc(quantity), OrderItem.menu_item_id)
            .limit(1)
            .scalar()
        )

        summary = (
            self.db.query(DailySalesSummary)
            .filter(
                DailySalesSummary.restaurant_id == self.restaurant_id,
                DailySalesSummary.date == day,
            )
            .with_for_update()
            .first()
        )
        if summary is None:
            summary = DailySalesSummary(restaurant_id=self.restaurant_id, date=day)
            self.db.add(summary)

        summary.total_orders = total_orders
        summary.total_revenue = _money(total_revenue)
        summary.average_order_value = _money(average_value)
        summary.most_popular_item_id = most_popular
        items = self._refresh_item_analytics(day, start, end)
        self.db.commit()
        self.db.refresh(summary)

        logger.info(
            f"Refreshed sales summary for restaurant {self.restaurant_id} on {day}: "
            f"{total_orders} orders, revenue {summary.total_revenue}, {items} items"
        )
        return summary

    def list_daily_summaries(self, start: Optional[date] = None, end: Optional[date] = None):
        query = self.db.query(DailySalesSummary).filter(
            DailySalesSummary.restaurant_id == self.restaurant_id
        )
        if start:
            query = query.filter(DailySalesSummary.date >= start)
        if end:
            query = query.filter(DailySalesSummary.date <= end)
        return query.order_by(desc(DailySalesSummary.date)).all()

    def _refresh_item_analytics(self, day: date, start: datetime, end: datetime) -> int:
        rows = (
            self.db.query(
                OrderItem.menu_item_id,
                func.count(OrderItem.id).label("times_ordered"),
                func.sum(OrderItem.quantity).label("total_quantity"),
                func.sum(OrderItem.total_price).label("total_revenue"),
                func.avg(Order.customer_rating).label("average_rating"),
            )
            .join(Order, OrderItem.order_id == Order.id)
            .filter(
                Order.restaurant_id == self.restaurant_id,
                Order.status != OrderStatus.CANCELLED.value,
                Order.created_at >= start,
                Order.created_at < end,
            )
            .group_by(OrderItem.menu_item_id)
            .all()
        )
        existing = {
            entry.menu_item_id: entry
            for entry in self.db.query(MenuItemAnalytics)
            .join(MenuItem, MenuItemAnalytics.menu_item_id == MenuItem.id)
            .filter(MenuItem.restaurant_id == self.restaurant_id, MenuItemAnalytics.date == day)
            .all()
        }

        for row in rows:
            entry = existing.pop(row.menu_item_id, None)
            if entry is None:
                entry = MenuItemAnalytics(menu_item_id=row.menu_item_id, date=day)
                self.db.add(entry)
            entry.times_ordered = row.times_ordered
            entry.total_quantity = row.total_quantity or 0
            entry.total_revenue = _money(row.total_revenue)
            entry.average_rating = _rating(row.average_rating)

        # Items with no sales left that day, e.g. after a cancellation
        for stale in existing.values():
            self.db.delete(stale)
        return len(rows)

    def menu_item_daily(
        self, menu_item_id: int, start: Optional[date] = None, end: Optional[date] = None
    ) -> List[MenuItemAnalytics]:
        """Stored per-day figures for one menu item, newest first"""
        item = (
            self.db.query(MenuItem)
            .filter(MenuItem.id == menu_item_id, MenuItem.restaurant_id == self.restaurant_id)
            .first()
        )
        if not item:
            raise NotFoundError(f"Menu item {menu_item_id} not found")

        query = self.db.query(MenuItemAnalytics).filter(MenuItemAnalytics.menu_item_id == item.id)
        if start:
            query = query.filter(MenuItemAnalytics.date >= start)
        if end:
            query = query.filter(MenuItemAnalytics.date <= end)
        return query.order_by(desc(MenuItemAnalytics.date)).all()

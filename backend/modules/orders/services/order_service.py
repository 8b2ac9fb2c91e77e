# backend/modules/orders/services/order_service.py

import logging
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import func, update
from sqlalchemy.orm import Session

from core.events import emit_event
from core.exceptions import ConflictError, NotFoundError, ValidationError
from modules.customers.models.customer_models import CustomerProfile
from modules.loyalty.services.points_calculator import (
    calculate_loyalty_points, points_for_amount, redemption_value, validate_points_redemption,
)
from modules.menu.models.menu_models import MenuItem, MenuItemModifier, MenuModifier
from modules.promotions.services.campaign_service import CampaignService
from modules.restaurants.models.restaurant_models import Restaurant, RestaurantTable
from modules.staff.models.staff_models import RestaurantStaff
from ..enums.order_enums import (
    NotificationType, OrderStatus, RecipientType, TERMINAL_ORDER_STATUSES,
)
from ..events.order_events import OrderServedEvent
from ..models.order_models import Order, OrderItem, OrderItemModifier, OrderNotification
from ..schemas.order_schemas import OrderCreate, OrderStatusUpdate

logger = logging.getLogger(__name__)

# Notification recorded when an order enters each status
STATUS_NOTIFICATIONS = {
    OrderStatus.CONFIRMED: (NotificationType.ORDER_CONFIRMED, RecipientType.CUSTOMER),
    OrderStatus.READY: (NotificationType.ORDER_READY, RecipientType.STAFF),
    OrderStatus.SERVED: (NotificationType.ORDER_SERVED, RecipientType.CUSTOMER),
}


class OrderService:
    """Order intake and lifecycle for a single restaurant"""

    def __init__(self, db: Session, restaurant_id: int):
        self.db = db
        self.restaurant_id = restaurant_id

    # ========== Creation ==========

    def create_order(self, data: OrderCreate) -> Order:
        """
        Place an order.

        Prices are taken from the menu at the time of ordering, plus any
        selected modifiers. A campaign, when given, is claimed first and its
        discount comes off the subtotal. Redeemed points then cover what is
        left: they are validated against the profile's balance less the points
        held by its other open orders, with the profile row locked until
        commit, and only the points needed to cover the remainder are used.
        The points earned are computed on the discounted total. Both point
        values are stored on the order and applied to the profile only when
        the order is served.
        """
        restaurant = self.db.query(Restaurant).filter(Restaurant.id == self.restaurant_id).first()
        if not restaurant or not restaurant.is_active:
            raise NotFoundError(f"Restaurant {self.restaurant_id} not found")

        if data.table_id is not None:
            self._get_table(data.table_id)
        if data.customer_profile_id is None and data.loyalty_points_used:
            raise ValidationError("Loyalty points can only be redeemed with a customer profile")

        order_items, subtotal = self._build_items(data)

        try:
            campaign_discount = Decimal("0")
            if data.campaign_id is not None:
                campaign_discount = CampaignService(self.db, self.restaurant_id).claim(
                    data.campaign_id, order_items, subtotal
                )

            profile = None
            if data.customer_profile_id is not None:
                profile = (
                    self.db.query(CustomerProfile)
                    .filter(CustomerProfile.id == data.customer_profile_id)
                    .with_for_update()
                    .first()
                )
                if not profile:
                    raise NotFoundError(f"Customer profile {data.customer_profile_id} not found")

            payable = subtotal - campaign_discount
            points_used = data.loyalty_points_used
            points_discount = Decimal("0")
            if profile is not None and points_used:
                available = (profile.loyalty_points or 0) - self._points_held(profile.id)
                validate_points_redemption(self.db, self.restaurant_id, points_used, max(available, 0))
                points_discount = redemption_value(self.db, points_used, self.restaurant_id)
                if points_discount > payable:
                    points_discount = payable
                    points_used = min(
                        points_used, points_for_amount(self.db, payable, self.restaurant_id)
                    )

            discount = campaign_discount + points_discount
            total = subtotal - discount
            points_earned = 0
            if profile is not None:
                points_earned = calculate_loyalty_points(self.db, total, self.restaurant_id)

            order = Order(
                restaurant_id=self.restaurant_id,
                customer_profile_id=data.customer_profile_id,
                table_id=data.table_id,
                campaign_id=data.campaign_id,
                customer_name=data.customer_name or (profile.name if profile else None),
                customer_phone=data.customer_phone or (profile.phone if profile else None),
                status=OrderStatus.PENDING.value,
                order_source=data.order_source.value,
                special_instructions=data.special_instructions,
                subtotal=subtotal,
                discount_amount=discount,
                total_amount=total,
                loyalty_points_earned=points_earned,
                loyalty_points_used=points_used,
            )
            order.order_items = order_items
            self.db.add(order)

            self.db.flush()
            self._notify(order, NotificationType.ORDER_PLACED, RecipientType.KITCHEN)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(order)
        logger.info(
            f"Order {order.id} placed at restaurant {self.restaurant_id}: total {total}, "
            f"points earned {points_earned}, used {points_used}"
        )
        return order

    def _build_items(self, data: OrderCreate):
        menu_ids = {item.menu_item_id for item in data.items}
        menu_items = {
            m.id: m
            for m in self.db.query(MenuItem)
            .filter(MenuItem.id.in_(menu_ids), MenuItem.restaurant_id == self.restaurant_id)
            .all()
        }
        offered = {}
        for link in (
            self.db.query(MenuItemModifier)
            .join(MenuModifier, MenuItemModifier.modifier_id == MenuModifier.id)
            .filter(
                MenuItemModifier.menu_item_id.in_(menu_ids),
                MenuModifier.restaurant_id == self.restaurant_id,
            )
            .all()
        ):
            offered.setdefault(link.menu_item_id, {})[link.modifier_id] = link

        order_items = []
        subtotal = Decimal("0")
        for item in data.items:
            menu_item = menu_items.get(item.menu_item_id)
            if menu_item is None:
                raise ValidationError(f"Menu item {item.menu_item_id} is not on this menu")
            if not menu_item.is_available:
                raise ValidationError(f"'{menu_item.name}' is currently unavailable")

            modifiers = self._select_modifiers(
                menu_item, item.modifier_ids, offered.get(menu_item.id, {})
            )
            adjustment = sum(
                (Decimal(str(m.price_adjustment or 0)) for m in modifiers), Decimal("0")
            )
            unit_price = max(Decimal(str(menu_item.price)) + adjustment, Decimal("0"))
            line_total = unit_price * item.quantity
            subtotal += line_total
            order_items.append(
                OrderItem(
                    menu_item_id=menu_item.id,
                    quantity=item.quantity,
                    unit_price=unit_price,
                    total_price=line_total,
                    special_instructions=item.special_instructions,
                    modifiers=[
                        OrderItemModifier(
                            modifier_id=m.id,
                            name=m.name,
                            price_adjustment=m.price_adjustment or 0,
                        )
                        for m in modifiers
                    ],
                )
            )
        return order_items, subtotal

    @staticmethod
    def _select_modifiers(menu_item: MenuItem, modifier_ids, links) -> List[MenuModifier]:
        if len(set(modifier_ids)) != len(modifier_ids):
            raise ValidationError(f"Duplicate modifier on '{menu_item.name}'")

        selected = []
        for modifier_id in modifier_ids:
            link = links.get(modifier_id)
            if link is None:
                raise ValidationError(
                    f"Modifier {modifier_id} is not offered on '{menu_item.name}'"
                )
            if not link.modifier.is_active:
                raise ValidationError(f"Modifier '{link.modifier.name}' is currently unavailable")
            selected.append(link.modifier)

        for modifier_id, link in links.items():
            if link.is_required and link.modifier.is_active and modifier_id not in modifier_ids:
                raise ValidationError(
                    f"'{menu_item.name}' requires the '{link.modifier.name}' modifier"
                )
        return selected

    # ========== Status ==========

    def update_status(self, order_id: int, data: OrderStatusUpdate) -> Order:
        """
        Move an order to a new status.

        The write is a compare-and-set on the status the order was read with,
        and never matches an order already served, so two concurrent requests
        cannot both move the same order into served. ``OrderServedEvent`` is
        emitted only when that write hits a row, and its handlers run in this
        transaction. Cancelling gives back the order's campaign use. Saving the
        current status again changes nothing.
        """
        order = self.get_order(order_id, for_update=True)
        previous = OrderStatus(order.status)
        new_status = data.status

        if new_status == previous:
            logger.debug(f"Order {order_id} already {previous.value}")
            return order
        if previous in TERMINAL_ORDER_STATUSES:
            raise ConflictError(
                f"Order {order_id} is {previous.value} and can no longer change status"
            )

        values = {"status": new_status.value}
        if data.preparation_time is not None:
            values["preparation_time"] = data.preparation_time
        if new_status == OrderStatus.SERVED:
            values["served_at"] = datetime.utcnow()
            if data.served_by_staff_id is not None:
                self._get_staff(data.served_by_staff_id)
                values["served_by_staff_id"] = data.served_by_staff_id

        try:
            result = self.db.execute(
                update(Order)
                .where(
                    Order.id == order.id,
                    Order.status == previous.value,
                    Order.status != OrderStatus.SERVED.value,
                )
                .values(**values)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                raise ConflictError(f"Order {order_id} was modified concurrently, retry")

            if new_status == OrderStatus.SERVED:
                emit_event(
                    self.db,
                    OrderServedEvent(
                        order_id=order.id,
                        restaurant_id=order.restaurant_id,
                        customer_profile_id=order.customer_profile_id,
                        total_amount=Decimal(str(order.total_amount or 0)),
                        loyalty_points_earned=order.loyalty_points_earned or 0,
                        loyalty_points_used=order.loyalty_points_used or 0,
                    ),
                )

            if new_status == OrderStatus.CANCELLED and order.campaign_id is not None:
                CampaignService(self.db, order.restaurant_id).release(order.campaign_id)

            if new_status in STATUS_NOTIFICATIONS:
                notification_type, recipient = STATUS_NOTIFICATIONS[new_status]
                self._notify(order, notification_type, recipient)

            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(order)
        logger.info(f"Order {order_id} status {previous.value} -> {new_status.value}")
        return order

    def assign_staff(self, order_id: int, staff_id: int) -> Order:
        order = self.get_order(order_id)
        self._get_staff(staff_id)
        order.assigned_staff_id = staff_id
        self.db.commit()
        self.db.refresh(order)
        return order

    def rate_order(self, order_id: int, rating: int) -> Order:
        order = self.get_order(order_id)
        if order.status != OrderStatus.SERVED.value:
            raise ValidationError("Only served orders can be rated")
        order.customer_rating = rating
        self.db.commit()
        self.db.refresh(order)
        return order

    # ========== Queries ==========

    def get_order(self, order_id: int, for_update: bool = False) -> Order:
        query = self.db.query(Order).filter(
            Order.id == order_id, Order.restaurant_id == self.restaurant_id
        )
        if for_update:
            query = query.with_for_update()
        order = query.first()
        if not order:
            raise NotFoundError(f"Order {order_id} not found")
        return order

    def list_orders(
        self,
        status: Optional[OrderStatus] = None,
        since: Optional[datetime] = None,
        limit: int = 100,
    ) -> List[Order]:
        query = self.db.query(Order).filter(Order.restaurant_id == self.restaurant_id)
        if status:
            query = query.filter(Order.status == status.value)
        if since:
            query = query.filter(Order.created_at >= since)
        return query.order_by(Order.created_at.desc(), Order.id.desc()).limit(limit).all()

    # ========== Notifications ==========

    def list_notifications(self, unread_only: bool = False) -> List[OrderNotification]:
        query = self.db.query(OrderNotification).filter(
            OrderNotification.restaurant_id == self.restaurant_id
        )
        if unread_only:
            query = query.filter(OrderNotification.is_read.is_(False))
        return query.order_by(OrderNotification.sent_at.desc(), OrderNotification.id.desc()).all()

    def mark_notification_read(self, notification_id: int) -> OrderNotification:
        notification = (
            self.db.query(OrderNotification)
            .filter(
                OrderNotification.id == notification_id,
                OrderNotification.restaurant_id == self.restaurant_id,
            )
            .first()
        )
        if not notification:
            raise NotFoundError(f"Notification {notification_id} not found")
        if not notification.is_read:
            notification.is_read = True
            notification.read_at = datetime.utcnow()
            self.db.commit()
            self.db.refresh(notification)
        return notification

    # ========== Helpers ==========

    def _notify(self, order: Order, notification_type: NotificationType, recipient: RecipientType):
        label = f"table {order.table.table_number}" if order.table else f"order #{order.id}"
        messages = {
            NotificationType.ORDER_PLACED: f"New order #{order.id} for {label}",
            NotificationType.ORDER_CONFIRMED: f"Order #{order.id} has been confirmed",
            NotificationType.ORDER_READY: f"Order #{order.id} is ready to serve ({label})",
            NotificationType.ORDER_SERVED: f"Order #{order.id} has been served. Enjoy your meal!",
        }
        self.db.add(
            OrderNotification(
                restaurant_id=order.restaurant_id,
                order_id=order.id,
                notification_type=notification_type.value,
                recipient_type=recipient.value,
                message=messages[notification_type],
            )
        )

    def _points_held(self, profile_id: int) -> int:
        """Points promised to the profile's orders that are not yet served or cancelled"""
        held = (
            self.db.query(func.coalesce(func.sum(Order.loyalty_points_used), 0))
            .filter(
                Order.customer_profile_id == profile_id,
                Order.status.notin_([s.value for s in TERMINAL_ORDER_STATUSES]),
            )
            .scalar()
        )
        return int(held or 0)

    def _get_table(self, table_id: int) -> RestaurantTable:
        table = (
            self.db.query(RestaurantTable)
            .filter(
                RestaurantTable.id == table_id,
                RestaurantTable.restaurant_id == self.restaurant_id,
            )
            .first()
        )
        if not table:
            raise ValidationError(f"Table {table_id} does not belong to this restaurant")
        return table

    def _get_staff(self, staff_id: int) -> RestaurantStaff:
        member = (
            self.db.query(RestaurantStaff)
            .filter(
                RestaurantStaff.id == staff_id,
                RestaurantStaff.restaurant_id == self.restaurant_id,
            )
            .first()
        )
        if not member:
            raise ValidationError(f"Staff member {staff_id} does not work at this restaurant")
        return member

from enum import Enum


class OrderStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PREPARING = "preparing"
    READY = "ready"
    SERVED = "served"
    CANCELLED = "cancelled"


# Orders in these states can no longer change status
TERMINAL_ORDER_STATUSES = frozenset({OrderStatus.SERVED, OrderStatus.CANCELLED})


class OrderSource(str, Enum):
    QR_CODE = "qr_code"
    STAFF = "staff"
    PHONE = "phone"
    ONLINE = "online"


class NotificationType(str, Enum):
    ORDER_PLACED = "order_placed"
    ORDER_CONFIRMED = "order_confirmed"
    ORDER_READY = "order_ready"
    ORDER_SERVED = "order_served"


class RecipientType(str, Enum):
    CUSTOMER = "customer"
    STAFF = "staff"
    KITCHEN = "kitchen"

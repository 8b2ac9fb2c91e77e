# backend/modules/reservations/services/reservation_service.py

"""
Reservation booking and status management.
"""

from sqlalchemy.orm import Session
from datetime import datetime, date, timedelta
from typing import List, Optional
import random
import string
import logging

from core.exceptions import ConflictError, NotFoundError, ValidationError
from modules.restaurants.models.restaurant_models import Restaurant, RestaurantTable
from modules.restaurants.schemas.restaurant_schemas import TableAvailability
from ..models.reservation_models import (
    TableReservation, ReservationStatus, ACTIVE_RESERVATION_STATUSES
)
from ..schemas.reservation_schemas import ReservationCreate, ReservationStatusUpdate

logger = logging.getLogger(__name__)

# Allowed status transitions
RESERVATION_TRANSITIONS = {
    ReservationStatus.PENDING: {ReservationStatus.CONFIRMED, ReservationStatus.CANCELLED},
    ReservationStatus.CONFIRMED: {
        ReservationStatus.SEATED, ReservationStatus.CANCELLED, ReservationStatus.NO_SHOW
    },
    ReservationStatus.SEATED: {ReservationStatus.COMPLETED},
    ReservationStatus.COMPLETED: set(),
    ReservationStatus.CANCELLED: set(),
    ReservationStatus.NO_SHOW: set(),
}

# A table counts as reserved from 30 minutes before now until 2 hours ahead
AVAILABILITY_LOOKBEHIND = timedelta(minutes=30)
AVAILABILITY_LOOKAHEAD = timedelta(hours=2)


class ReservationService:
    """Service for managing reservations"""

    def __init__(self, db: Session, restaurant_id: int):
        self.db = db
        self.restaurant_id = restaurant_id

    def generate_confirmation_code(self) -> str:
        """Generate a unique confirmation code"""
        alphabet = string.ascii_uppercase + string.digits
        while True:
            # Format: RES-XXXX-XXXX
            code = f"RES-{''.join(random.choices(alphabet, k=4))}-{''.join(random.choices(alphabet, k=4))}"
            if not self.db.query(TableReservation).filter_by(confirmation_code=code).first():
                return code

    def create_reservation(self, data: ReservationCreate) -> TableReservation:
        restaurant = self.db.query(Restaurant).filter(Restaurant.id == self.restaurant_id).first()
        if not restaurant or not restaurant.is_active:
            raise NotFoundError(f"Restaurant {self.restaurant_id} not found")

        if data.table_id is not None:
            self._check_table(data.table_id, data.party_size)

        reservation = TableReservation(
            restaurant_id=self.restaurant_id,
            confirmation_code=self.generate_confirmation_code(),
            status=ReservationStatus.PENDING,
            **data.model_dump(),
        )
        self.db.add(reservation)
        self.db.commit()
        self.db.refresh(reservation)
        logger.info(
            f"Created reservation {reservation.id} ({reservation.confirmation_code}) for "
            f"party of {reservation.party_size} on {reservation.reservation_date}"
        )
        return reservation

    def get_reservation(self, reservation_id: int) -> TableReservation:
        reservation = (
            self.db.query(TableReservation)
            .filter(
                TableReservation.id == reservation_id,
                TableReservation.restaurant_id == self.restaurant_id,
            )
            .first()
        )
        if not reservation:
            raise NotFoundError(f"Reservation {reservation_id} not found")
        return reservation

    def list_reservations(
        self, on_date: Optional[date] = None, status: Optional[ReservationStatus] = None
    ) -> List[TableReservation]:
        query = self.db.query(TableReservation).filter(
            TableReservation.restaurant_id == self.restaurant_id
        )
        if on_date:
            query = query.filter(TableReservation.reservation_date == on_date)
        if status:
            query = query.filter(TableReservation.status == status)
        return query.order_by(
            TableReservation.reservation_date, TableReservation.reservation_time
        ).all()

    def update_status(self, reservation_id: int, data: ReservationStatusUpdate) -> TableReservation:
        reservation = self.get_reservation(reservation_id)
        current = reservation.status
        if data.status == current:
            return reservation
        if data.status not in RESERVATION_TRANSITIONS[current]:
            raise ConflictError(
                f"Cannot change reservation from {current.value} to {data.status.value}"
            )

        if data.table_id is not None:
            self._check_table(data.table_id, reservation.party_size)
            reservation.table_id = data.table_id
        if data.status == ReservationStatus.SEATED and reservation.table_id is None:
            raise ValidationError("Assign a table before seating a reservation")

        reservation.status = data.status
        self.db.commit()
        self.db.refresh(reservation)
        logger.info(f"Reservation {reservation_id} {current.value} -> {data.status.value}")
        return reservation

    def get_table_availability(self, now: Optional[datetime] = None) -> List[TableAvailability]:
        """
        Active tables with their effective status.

        A table is reported as reserved when a confirmed or seated
        reservation for today starts between 30 minutes ago and 2 hours from
        now; otherwise its stored status is reported.
        """
        now = now or datetime.now()
        window_start = now - AVAILABILITY_LOOKBEHIND
        window_end = now + AVAILABILITY_LOOKAHEAD

        tables = (
            self.db.query(RestaurantTable)
            .filter(
                RestaurantTable.restaurant_id == self.restaurant_id,
                RestaurantTable.is_active.is_(True),
            )
            .order_by(RestaurantTable.table_number)
            .all()
        )
        todays = (
            self.db.query(TableReservation)
            .filter(
                TableReservation.restaurant_id == self.restaurant_id,
                TableReservation.reservation_date == now.date(),
                TableReservation.status.in_(ACTIVE_RESERVATION_STATUSES),
                TableReservation.table_id.isnot(None),
            )
            .order_by(TableReservation.reservation_time)
            .all()
        )

        upcoming = {}
        for reservation in todays:
            starts_at = datetime.combine(reservation.reservation_date, reservation.reservation_time)
            if window_start <= starts_at <= window_end:
                upcoming.setdefault(reservation.table_id, reservation)

        availability = []
        for table in tables:
            reservation = upcoming.get(table.id)
            availability.append(
                TableAvailability(
                    id=table.id,
                    table_number=table.table_number,
                    capacity=table.capacity,
                    status=table.status,
                    current_status="reserved" if reservation else table.status.value,
                    reservation_time=reservation.reservation_time if reservation else None,
                    reserved_by=reservation.customer_name if reservation else None,
                )
            )
        return availability

    def _check_table(self, table_id: int, party_size: int) -> RestaurantTable:
        table = (
            self.db.query(RestaurantTable)
            .filter(
                RestaurantTable.id == table_id,
                RestaurantTable.restaurant_id == self.restaurant_id,
            )
            .first()
        )
        if not table or not table.is_active:
            raise ValidationError(f"Table {table_id} is not available at this restaurant")
        if party_size > table.capacity:
            raise ValidationError(
                f"Table {table.table_number} seats {table.capacity}, party size is {party_size}"
            )
        return table

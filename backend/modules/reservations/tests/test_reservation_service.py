# backend/modules/reservations/tests/test_reservation_service.py

"""
Tests for reservation booking, status changes and table availability.
"""

from datetime import date, datetime, time

import pytest

from core.exceptions import ConflictError, ValidationError
from modules.reservations.models.reservation_models import ReservationStatus
from modules.reservations.schemas.reservation_schemas import (
    ReservationCreate, ReservationStatusUpdate,
)
from modules.reservations.services.reservation_service import ReservationService
from modules.restaurants.models.restaurant_models import TableStatus
from tests.factories import RestaurantFactory, RestaurantTableFactory

NOW = datetime(2024, 6, 14, 19, 0)


@pytest.fixture
def restaurant(db_session):
    return RestaurantFactory()


@pytest.fixture
def service(db_session, restaurant):
    return ReservationService(db_session, restaurant.id)


@pytest.fixture
def table(restaurant):
    return RestaurantTableFactory(restaurant_id=restaurant.id, table_number="T1", capacity=4)


def book(service, table=None, at=time(19, 30), on=NOW.date(), party_size=2, name="Lopez"):
    return service.create_reservation(
        ReservationCreate(
            customer_name=name,
            party_size=party_size,
            reservation_date=on,
            reservation_time=at,
            table_id=table.id if table else None,
        )
    )


class TestReservations:
    def test_booking_gets_confirmation_code(self, service, table):
        reservation = book(service, table)

        assert reservation.status == ReservationStatus.PENDING
        assert reservation.confirmation_code.startswith("RES-")
        assert len(reservation.confirmation_code) == 13

    def test_party_larger_than_table(self, service, table):
        with pytest.raises(ValidationError, match="seats 4"):
            book(service, table, party_size=6)

    def test_foreign_table_rejected(self, service):
        with pytest.raises(ValidationError):
            book(service, RestaurantTableFactory())

    def test_lifecycle(self, service, table):
        reservation = book(service, table)
        for status in (ReservationStatus.CONFIRMED, ReservationStatus.SEATED, ReservationStatus.COMPLETED):
            reservation = service.update_status(reservation.id, ReservationStatusUpdate(status=status))
        assert reservation.status == ReservationStatus.COMPLETED

    @pytest.mark.parametrize(
        "target", [ReservationStatus.SEATED, ReservationStatus.COMPLETED, ReservationStatus.NO_SHOW]
    )
    def test_pending_cannot_skip_confirmation(self, service, table, target):
        reservation = book(service, table)
        with pytest.raises(ConflictError):
            service.update_status(reservation.id, ReservationStatusUpdate(status=target))

    def test_cancelled_is_final(self, service, table):
        reservation = book(service, table)
        service.update_status(reservation.id, ReservationStatusUpdate(status=ReservationStatus.CANCELLED))
        with pytest.raises(ConflictError):
            service.update_status(reservation.id, ReservationStatusUpdate(status=ReservationStatus.CONFIRMED))

    def test_seating_requires_table(self, service, table):
        reservation = book(service)
        service.update_status(reservation.id, ReservationStatusUpdate(status=ReservationStatus.CONFIRMED))

        with pytest.raises(ValidationError):
            service.update_status(reservation.id, ReservationStatusUpdate(status=ReservationStatus.SEATED))

        seated = service.update_status(
            reservation.id, ReservationStatusUpdate(status=ReservationStatus.SEATED, table_id=table.id)
        )
        assert seated.table_id == table.id

    def test_list_by_date(self, service, table):
        book(service, table, on=date(2024, 6, 14))
        book(service, table, on=date(2024, 6, 15))

        assert len(service.list_reservations(on_date=date(2024, 6, 15))) == 1


class TestTableAvailability:
    def confirm(self, service, reservation):
        return service.update_status(
            reservation.id, ReservationStatusUpdate(status=ReservationStatus.CONFIRMED)
        )

    def current(self, service):
        return {t.table_number: t for t in service.get_table_availability(now=NOW)}

    def test_confirmed_booking_within_two_hours_reserves_table(self, service, table):
        self.confirm(service, book(service, table, at=time(20, 30), name="Lopez"))

        status = self.current(service)["T1"]

        assert status.current_status == "reserved"
        assert status.reservation_time == time(20, 30)
        assert status.reserved_by == "Lopez"
        assert status.status == TableStatus.AVAILABLE

    def test_booking_started_within_thirty_minutes(self, service, table):
        self.confirm(service, book(service, table, at=time(18, 30)))
        assert self.current(service)["T1"].current_status == "reserved"

    @pytest.mark.parametrize("at", [time(18, 29), time(21, 1)])
    def test_booking_outside_window(self, service, table, at):
        self.confirm(service, book(service, table, at=at))
        assert self.current(service)["T1"].current_status == "available"

    def test_pending_booking_does_not_hold_table(self, service, table):
        book(service, table, at=time(19, 15))
        assert self.current(service)["T1"].current_status == "available"

    def test_other_day_ignored(self, service, table):
        self.confirm(service, book(service, table, on=date(2024, 6, 15), at=time(19, 15)))
        assert self.current(service)["T1"].current_status == "available"

    def test_stored_status_reported_otherwise(self, service, restaurant):
        RestaurantTableFactory(restaurant_id=restaurant.id, table_number="T2", status=TableStatus.CLEANING)
        RestaurantTableFactory(restaurant_id=restaurant.id, table_number="T3", is_active=False)

        tables = self.current(service)

        assert tables["T2"].current_status == "cleaning"
        assert "T3" not in tables


class TestReservationApi:
    def test_guest_books_and_staff_lists(self, client, auth_headers, restaurant, table):
        response = client.post(
            f"/api/v1/restaurants/{restaurant.id}/reservations",
            json={
                "customer_name": "Lopez",
                "party_size": 2,
                "reservation_date": "2024-06-14",
                "reservation_time": "19:30:00",
                "table_id": table.id,
            },
        )
        assert response.status_code == 201
        assert response.json()["status"] == "pending"

        listed = client.get(
            f"/api/v1/restaurants/{restaurant.id}/reservations",
            params={"date": "2024-06-14"},
            headers=auth_headers("owner-1"),
        )
        assert listed.status_code == 200
        assert len(listed.json()) == 1

    def test_availability_requires_member(self, client, auth_headers, restaurant):
        response = client.get(
            f"/api/v1/restaurants/{restaurant.id}/table-availability",
            headers=auth_headers("stranger"),
        )
        assert response.status_code == 403

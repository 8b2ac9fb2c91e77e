from .reservation_models import TableReservation, ReservationStatus

__all__ = ["TableReservation", "ReservationStatus"]

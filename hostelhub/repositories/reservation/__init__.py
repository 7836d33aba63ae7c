from hostelhub.repositories.reservation.reservation_repository import ReservationRepository

__all__ = ["ReservationRepository"]

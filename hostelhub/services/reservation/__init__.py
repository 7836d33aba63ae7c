from hostelhub.services.reservation.reservation_service import ReservationService

__all__ = ["ReservationService"]

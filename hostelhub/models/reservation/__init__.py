from hostelhub.models.reservation.reservation import Reservation

__all__ = ["Reservation"]

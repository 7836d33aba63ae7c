from hostelhub.schemas.reservation.reservation import (
    ReservationCreate,
    ReservationResponse,
    ReservationReview,
)

__all__ = ["ReservationCreate", "ReservationReview", "ReservationResponse"]

from hostelhub.services.booking.booking_service import BookingService

__all__ = ["BookingService"]

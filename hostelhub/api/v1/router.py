"""
API v1 router aggregating every endpoint module.
"""

from fastapi import APIRouter

from hostelhub.api.v1.endpoints import (
    auth,
    bookings,
    chat,
    fees,
    hostels,
    reports,
    reservations,
    uploads,
    users,
    verifications,
)

router = APIRouter(
    responses={
        400: {"description": "Bad Request"},
        401: {"description": "Unauthorized"},
        403: {"description": "Forbidden"},
        404: {"description": "Not Found"},
        409: {"description": "Conflict"},
        500: {"description": "Internal Server Error"},
    }
)

router.include_router(auth.router)
router.include_router(users.router)
router.include_router(verifications.router)
router.include_router(hostels.router)
router.include_router(reservations.router)
router.include_router(bookings.router)
router.include_router(fees.router)
router.include_router(reports.router)
router.include_router(chat.router)
router.include_router(uploads.router)

__all__ = ["router"]

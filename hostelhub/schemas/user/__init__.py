from hostelhub.schemas.user.user import (
    ManagerHostelSummary,
    ManagerProfileResponse,
    ManagerProfileUpdate,
    StudentProfileResponse,
    StudentSelfVerifyRequest,
    UserResponse,
)

__all__ = [
    "UserResponse",
    "StudentSelfVerifyRequest",
    "StudentProfileResponse",
    "ManagerProfileUpdate",
    "ManagerProfileResponse",
    "ManagerHostelSummary",
]

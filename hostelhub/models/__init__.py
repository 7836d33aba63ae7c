"""
Database models.

Importing this package registers every table on ``Base.metadata``.
"""

from hostelhub.models.audit import SYSTEM_ACTOR, AuditLog
from hostelhub.models.base import Base, BaseModel, TimestampModel
from hostelhub.models.booking import Booking
from hostelhub.models.chat import Conversation, Message
from hostelhub.models.fee import MonthlyAdminFee
from hostelhub.models.hostel import Hostel, HostelRoomType
from hostelhub.models.report import Report
from hostelhub.models.reservation import Reservation
from hostelhub.models.review import Review
from hostelhub.models.user import ManagerProfile, StudentProfile, User
from hostelhub.models.verification import ManagerVerification

__all__ = [
    "Base",
    "BaseModel",
    "TimestampModel",
    "AuditLog",
    "SYSTEM_ACTOR",
    "Booking",
    "Conversation",
    "Message",
    "MonthlyAdminFee",
    "Hostel",
    "HostelRoomType",
    "Report",
    "Reservation",
    "Review",
    "User",
    "StudentProfile",
    "ManagerProfile",
    "ManagerVerification",
]

"""
Profile lookups shared by services that act on behalf of a user.
"""

from sqlalchemy.orm import Session

from hostelhub.core.exceptions import (
    AuthorizationError,
    HostelNotFoundError,
    ManagerProfileNotFoundError,
    StudentProfileNotFoundError,
)
from hostelhub.models.hostel.hostel import Hostel
from hostelhub.models.user.user import ManagerProfile, StudentProfile
from hostelhub.repositories.hostel.hostel_repository import HostelRepository
from hostelhub.repositories.user.user_repository import (
    ManagerProfileRepository,
    StudentProfileRepository,
)


class ProfileLookupMixin:
    """Resolve the acting user's role profile and owned hostels."""

    db: Session

    def _student_profile(self, user_id: str) -> StudentProfile:
        profile = StudentProfileRepository(self.db).find_by_user_id(user_id)
        if profile is None:
            raise StudentProfileNotFoundError(user_id)
        return profile

    def _manager_profile(self, user_id: str) -> ManagerProfile:
        profile = ManagerProfileRepository(self.db).find_by_user_id(user_id)
        if profile is None:
            raise ManagerProfileNotFoundError(user_id)
        return profile

    def _owned_hostel(self, manager: ManagerProfile, hostel_id: str) -> Hostel:
        """
        Load a hostel and check that ``manager`` owns it.

        Raises:
            HostelNotFoundError: If the hostel does not exist
            AuthorizationError: If another manager owns it
        """
        hostel = HostelRepository(self.db).find_with_details(hostel_id)
        if hostel is None:
            raise HostelNotFoundError(hostel_id)
        if hostel.manager_id != manager.id:
            raise AuthorizationError("Hostel not found or not authorized")
        return hostel

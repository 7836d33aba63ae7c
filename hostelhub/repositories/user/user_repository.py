"""
User and role profile repositories.
"""

from typing import List, Optional

from sqlalchemy import update
from sqlalchemy.orm import Session, joinedload

from hostelhub.models.base.enums import UserRole
from hostelhub.models.user.user import ManagerProfile, StudentProfile, User
from hostelhub.repositories.base.base_repository import BaseRepository


class UserRepository(BaseRepository[User]):

    def __init__(self, db: Session):
        super().__init__(User, db)

    def find_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email.strip().lower()).first()

    def find_by_role(self, role: Optional[UserRole] = None) -> List[User]:
        query = self.db.query(User)
        if role is not None:
            query = query.filter(User.role == role)
        return query.order_by(User.created_at.desc()).all()


class StudentProfileRepository(BaseRepository[StudentProfile]):

    def __init__(self, db: Session):
        super().__init__(StudentProfile, db)

    def find_by_user_id(self, user_id: str) -> Optional[StudentProfile]:
        return (
            self.db.query(StudentProfile)
            .options(joinedload(StudentProfile.user))
            .filter(StudentProfile.user_id == user_id)
            .first()
        )

    def find_by_current_hostel(self, hostel_id: str) -> List[StudentProfile]:
        return (
            self.db.query(StudentProfile)
            .filter(StudentProfile.current_hostel_id == hostel_id)
            .all()
        )

    def clear_current_hostel(self, hostel_ids: List[str]) -> int:
        """Detach every student living in one of ``hostel_ids``."""
        if not hostel_ids:
            return 0
        result = self.db.execute(
            update(StudentProfile)
            .where(StudentProfile.current_hostel_id.in_(hostel_ids))
            .values(current_hostel_id=None)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount


class ManagerProfileRepository(BaseRepository[ManagerProfile]):

    def __init__(self, db: Session):
        super().__init__(ManagerProfile, db)

    def find_by_user_id(self, user_id: str) -> Optional[ManagerProfile]:
        return (
            self.db.query(ManagerProfile)
            .options(joinedload(ManagerProfile.user))
            .filter(ManagerProfile.user_id == user_id)
            .first()
        )

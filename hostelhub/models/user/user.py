"""
User identity and role profile models.

Every user owns exactly one role profile: students a StudentProfile,
managers a ManagerProfile. Admin accounts have no profile.
"""

from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import Boolean, Enum, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hostelhub.models.base.base_model import TimestampModel
from hostelhub.models.base.enums import UserRole

if TYPE_CHECKING:
    from hostelhub.models.hostel.hostel import Hostel

__all__ = ["User", "StudentProfile", "ManagerProfile"]


class User(TimestampModel):
    """
    Account identity.

    Attributes:
        email: Unique login email
        password_hash: bcrypt hash of the password
        role: STUDENT, MANAGER, ADMIN or SUBADMIN
        is_terminated: Set by an administrator; blocks every mutation
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[UserRole] = mapped_column(
        Enum(UserRole, name="user_role"),
        nullable=False,
        index=True,
    )
    is_terminated: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        comment="Account terminated by an administrator",
    )

    student_profile: Mapped[Optional["StudentProfile"]] = relationship(
        back_populates="user",
        uselist=False,
    )
    manager_profile: Mapped[Optional["ManagerProfile"]] = relationship(
        back_populates="user",
        uselist=False,
    )

    @property
    def is_admin(self) -> bool:
        return self.role in (UserRole.ADMIN, UserRole.SUBADMIN)


class StudentProfile(TimestampModel):
    """
    Student role profile.

    ``current_hostel_id`` is set while the student holds an APPROVED
    booking; a student occupies at most one hostel at a time.
    """

    __tablename__ = "student_profiles"

    user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    self_verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    full_name: Mapped[Optional[str]] = mapped_column(String(150), nullable=True)
    phone_number: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)
    cnic: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)
    institute: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    city: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    current_hostel_id: Mapped[Optional[str]] = mapped_column(
        ForeignKey("hostels.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
        comment="Hostel the student currently lives in",
    )

    user: Mapped["User"] = relationship(back_populates="student_profile")
    current_hostel: Mapped[Optional["Hostel"]] = relationship(foreign_keys=[current_hostel_id])

    @property
    def email(self) -> Optional[str]:
        return self.user.email if self.user else None


class ManagerProfile(TimestampModel):
    """Manager role profile; ``verified`` gates hostel creation."""

    __tablename__ = "manager_profiles"

    user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    full_name: Mapped[Optional[str]] = mapped_column(String(150), nullable=True)
    phone_number: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)
    business_name: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)

    user: Mapped["User"] = relationship(back_populates="manager_profile")
    hostels: Mapped[List["Hostel"]] = relationship(
        back_populates="manager",
        foreign_keys="Hostel.manager_id",
    )

    @property
    def email(self) -> Optional[str]:
        return self.user.email if self.user else None

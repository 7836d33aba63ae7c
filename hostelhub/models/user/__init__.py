from hostelhub.models.user.user import ManagerProfile, StudentProfile, User

__all__ = ["User", "StudentProfile", "ManagerProfile"]

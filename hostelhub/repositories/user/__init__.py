from hostelhub.repositories.user.user_repository import (
    ManagerProfileRepository,
    StudentProfileRepository,
    UserRepository,
)

__all__ = ["UserRepository", "StudentProfileRepository", "ManagerProfileRepository"]

from hostelhub.repositories.hostel.hostel_repository import (
    HostelRepository,
    HostelSearchCriteria,
    RoomTypeRepository,
)

__all__ = ["HostelRepository", "HostelSearchCriteria", "RoomTypeRepository"]

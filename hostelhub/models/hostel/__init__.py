from hostelhub.models.hostel.hostel import Hostel, HostelRoomType

__all__ = ["Hostel", "HostelRoomType"]

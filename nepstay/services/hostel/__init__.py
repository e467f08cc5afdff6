from nepstay.services.hostel.hostel_service import HostelService, serialize_hostels

__all__ = ["HostelService", "serialize_hostels"]

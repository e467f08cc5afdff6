from nepstay.schemas.hostel.hostel_base import (
    ContactInfoSchema,
    HostelCreate,
    HostelUpdate,
    LocationSchema,
)
from nepstay.schemas.hostel.hostel_filter import HostelFilterParams, HostelSortOption

__all__ = [
    "ContactInfoSchema",
    "HostelCreate",
    "HostelUpdate",
    "LocationSchema",
    "HostelFilterParams",
    "HostelSortOption",
]
